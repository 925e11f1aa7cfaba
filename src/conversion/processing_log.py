"""
Append-only processing log.

One UTF-8 text line per event, human-readable. Every event is also sent
to the module logger so it shows up on the console.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from .outcomes import FileResult, ProcessingOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    level: int
    message: str
    filename: Optional[str] = None

    def format(self) -> str:
        prefix = "WARNING: " if self.level >= logging.WARNING else ""
        if self.filename:
            return f"{prefix}{self.filename}: {self.message}"
        return f"{prefix}{self.message}"


class ProcessingLog:
    """
    Per-run event log backed by a text file.

    Usage:
        with ProcessingLog.open(job.log_path) as log:
            log.info("started")
            log.record(result)
    """

    def __init__(self, path: Path, stream: TextIO):
        self.path = path
        self._stream = stream
        self._entries: List[LogEntry] = []

    @classmethod
    def open(cls, path: str | Path) -> ProcessingLog:
        """Create (truncate) the log file and write the run header."""
        path = Path(path)
        stream = open(path, "w", encoding="utf-8")
        log = cls(path, stream)
        log.info(f"Polar conversion log - {datetime.now():%Y-%m-%d %H:%M:%S}")
        return log

    @property
    def entries(self) -> tuple:
        return tuple(self._entries)

    def _append(self, entry: LogEntry) -> None:
        self._entries.append(entry)
        self._stream.write(entry.format() + "\n")
        self._stream.flush()
        logger.log(entry.level, entry.format())

    def info(self, message: str, filename: Optional[str] = None) -> None:
        self._append(LogEntry(logging.INFO, message, filename))

    def warning(self, message: str, filename: Optional[str] = None) -> None:
        self._append(LogEntry(logging.WARNING, message, filename))

    def record(self, result: FileResult) -> None:
        """Write the final outcome line for one file."""
        if result.outcome is ProcessingOutcome.SUCCESS:
            self.info(f"converted -> {result.output_path.name}", result.name)
        elif result.outcome is ProcessingOutcome.WRITTEN_WITH_WARNING:
            self.warning(
                f"converted with warning ({result.message}) -> {result.output_path.name}",
                result.name
            )
        else:
            where = f" at {result.failed_stage.value}" if result.failed_stage else ""
            self.warning(f"{result.outcome.value}{where}: {result.message}", result.name)

    def close(self) -> None:
        if not self._stream.closed:
            self._stream.close()

    def __enter__(self) -> ProcessingLog:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
