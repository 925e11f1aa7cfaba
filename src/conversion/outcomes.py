"""
Per-file outcomes and batch summary.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple


class ProcessingOutcome(Enum):
    """Final state of one input file."""
    SUCCESS = "success"
    SKIPPED_UNREADABLE = "skipped_unreadable"
    SKIPPED_INSUFFICIENT_COLUMNS = "skipped_insufficient_columns"
    SKIPPED_NON_FINITE = "skipped_non_finite"
    WRITTEN_WITH_WARNING = "written_with_warning"
    FAILED_EXTERNAL_WRITE = "failed_external_write"

    @property
    def is_written(self) -> bool:
        """True if a converted file was produced."""
        return self in (ProcessingOutcome.SUCCESS, ProcessingOutcome.WRITTEN_WITH_WARNING)


class FileStage(Enum):
    """Processing stages of one input file, in order."""
    DETECTING = "detecting"
    PARSING = "parsing"
    VALIDATING = "validating"
    EXTRACTING_METADATA = "extracting_metadata"
    WRITING = "writing"
    DONE = "done"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class FileResult:
    """Outcome of processing a single input file."""
    input_path: Path
    outcome: ProcessingOutcome
    stage: FileStage  # DONE or SKIPPED
    message: str = ""
    failed_stage: Optional[FileStage] = None  # where a SKIPPED file stopped
    warnings: Tuple[Tuple[FileStage, str], ...] = ()  # non-fatal fallbacks, tagged by stage
    output_path: Optional[Path] = None
    aoa_range: Optional[Tuple[float, float]] = None  # only for WRITTEN_WITH_WARNING
    reynolds: Optional[float] = None  # millions
    label: Optional[str] = None
    coefficients: Optional[object] = None  # whatever the writer returned

    @property
    def name(self) -> str:
        return self.input_path.name

    def warnings_at(self, stage: FileStage) -> List[str]:
        return [message for s, message in self.warnings if s is stage]


@dataclass
class BatchSummary:
    """Ordered per-file results of one conversion run."""
    results: Tuple[FileResult, ...] = ()
    output_dir: Optional[Path] = None
    log_path: Optional[Path] = None
    _counts: Dict[ProcessingOutcome, int] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self):
        self._counts = {outcome: 0 for outcome in ProcessingOutcome}
        for result in self.results:
            self._counts[result.outcome] += 1

    def count(self, outcome: ProcessingOutcome) -> int:
        return self._counts[outcome]

    @property
    def num_files(self) -> int:
        return len(self.results)

    @property
    def num_written(self) -> int:
        return sum(1 for r in self.results if r.outcome.is_written)

    @property
    def written_paths(self) -> Tuple[Path, ...]:
        return tuple(r.output_path for r in self.results if r.outcome.is_written)

    def __str__(self) -> str:
        lines = [f"Batch summary ({self.num_files} files):"]
        for outcome in ProcessingOutcome:
            if self._counts[outcome]:
                lines.append(f"  {outcome.value:<30} {self._counts[outcome]}")
        return "\n".join(lines)
