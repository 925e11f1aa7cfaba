"""
Merge single-table airfoil files into one multi-table library.

The first usable file donates its header block; its table-count line is
rewritten to the number of contributing files. Every usable file then
contributes its data block (header_lines + 1 to end of file), in name order.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from core.errors import MergeError, NoMergeInputError
from core.io.formats import LibraryFormat, AD15_LIBRARY
from core.io.polar_reader import read_lines

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "!"


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a merge run."""
    output_path: Path
    table_count: int
    merged_files: Tuple[Path, ...]
    skipped_files: Tuple[Path, ...]

    def stale_files(self, written_paths: Iterable[Path]) -> List[Path]:
        """Merged files that the latest conversion run did not write."""
        written = {Path(p).resolve() for p in written_paths}
        return [p for p in self.merged_files if p.resolve() not in written]


def _field_pattern(marker: str) -> re.Pattern:
    """'<value> <marker>' at the start of a line, e.g. '   1   NumTabs  ! ...'."""
    return re.compile(r"^(\s*)(\S+)(\s+" + re.escape(marker) + r"\b.*)$")


def is_table_count_field(line: str, marker: str) -> bool:
    """True for the value-then-marker field line, False for comments mentioning the marker."""
    if line.lstrip().startswith(COMMENT_PREFIX):
        return False
    return _field_pattern(marker).match(line) is not None


def patch_table_count(line: str, marker: str, count: int) -> str:
    """
    Rewrite the value of a '<value> <marker>' header field.

    Examples:
        patch_table_count("   1   NumTabs   ! ...", "NumTabs", 3)
        -> "   3   NumTabs   ! ..."
    """
    if not is_table_count_field(line, marker):
        raise MergeError(f"'{marker}' field not found in line: {line!r}")

    indent, _, tail = _field_pattern(marker).match(line).groups()
    return f"{indent}{count}{tail}"


class TableMerger:
    """
    Concatenate converted airfoil tables into one library file.

    Usage:
        merger = TableMerger(exclude=['processing_log.txt'])
        result = merger.merge('output_polars', 'output_polars/merged_polar.txt')
        print(result.table_count)
    """

    def __init__(self,
                 fmt: LibraryFormat = AD15_LIBRARY,
                 pattern: str = "*.txt",
                 exclude: Iterable[str] = ()):
        self.fmt = fmt
        self.pattern = pattern
        self.exclude = set(exclude)

    @classmethod
    def for_job(cls, job) -> TableMerger:
        """Merger for a ConversionJob's output directory (skips the processing log)."""
        return cls(fmt=job.library_format, exclude=[job.config.log_filename])

    def eligible_files(self, input_dir: Path, output_path: Optional[Path] = None) -> List[Path]:
        """Files to merge, in name order, without excluded names or the output itself."""
        excluded = set(self.exclude)
        if output_path is not None:
            excluded.add(Path(output_path).name)
        return sorted(
            p for p in Path(input_dir).glob(self.pattern)
            if p.is_file() and p.name not in excluded
        )

    def merge(self, input_dir: str | Path, output_path: str | Path) -> MergeResult:
        """
        Merge every eligible file of input_dir into output_path.

        Raises:
            FileNotFoundError: input_dir does not exist
            NoMergeInputError: no eligible file, or none long enough to carry a table
            MergeError: table-count marker missing from the donor header
        """
        input_dir = Path(input_dir)
        output_path = Path(output_path)

        if not input_dir.is_dir():
            raise FileNotFoundError(f"Merge directory not found: {input_dir}")

        files = self.eligible_files(input_dir, output_path)
        if not files:
            raise NoMergeInputError(f"No '{self.pattern}' files to merge in {input_dir}")

        header: Optional[List[str]] = None
        blocks: List[List[str]] = []
        merged: List[Path] = []
        skipped: List[Path] = []

        for path in files:
            logger.info("Reading %s", path.name)
            try:
                lines = read_lines(path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Cannot read %s, skipped: %s", path.name, e)
                skipped.append(path)
                continue

            if len(lines) < self.fmt.first_data_line:
                logger.warning(
                    "%s has fewer than %d lines, skipped",
                    path.name, self.fmt.first_data_line
                )
                skipped.append(path)
                continue

            if header is None:
                header = lines[:self.fmt.header_lines]

            blocks.append(lines[self.fmt.header_lines:])
            merged.append(path)

        if header is None:
            raise NoMergeInputError(
                f"None of the {len(files)} files in {input_dir} contains a data block"
            )

        header = self._patch_header(header, len(merged))

        with open(output_path, "w", encoding="utf-8") as f:
            for line in header:
                f.write(line + "\n")
            for block in blocks:
                for line in block:
                    f.write(line + "\n")

        logger.info("Merged %d tables into %s", len(merged), output_path)

        return MergeResult(
            output_path=output_path,
            table_count=len(merged),
            merged_files=tuple(merged),
            skipped_files=tuple(skipped)
        )

    def _patch_header(self, header: List[str], count: int) -> List[str]:
        marker = self.fmt.table_count_marker
        for i, line in enumerate(header):
            if is_table_count_field(line, marker):
                patched = list(header)
                patched[i] = patch_table_count(line, marker, count)
                return patched
        raise MergeError(
            f"Table-count field '{marker}' not found in the first "
            f"{self.fmt.header_lines} header lines"
        )
