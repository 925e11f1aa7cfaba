"""
Polar file reader: delimiter detection and data-block tokenizing.

Expected input (QBlade .plr export):
    lines 1-17   free-form header
    line 18+     data rows, up to 7 numeric columns
                 AOA  CL  CD  CM  [CL_ATT  CL_SEP  F_ST]

Fields are separated by tabs or by runs of spaces; repeated separators
count as one.
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import List, Optional
import numpy as np
from numpy.typing import NDArray

from ..errors import PolarParseError
from .extracted import ExtractedValue
from .formats import PolarFileFormat, QBLADE_PLR


class DelimiterKind(Enum):
    """Field separator used in a polar data block."""
    TAB = "tab"
    SPACE = "space"


def read_lines(filepath: str | Path) -> List[str]:
    """Read a text file as a list of lines without line terminators."""
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def detect_delimiter(filepath: str | Path,
                     fmt: PolarFileFormat = QBLADE_PLR) -> ExtractedValue[DelimiterKind]:
    """
    Inspect the first data row of a polar file and pick the delimiter.

    Returns TAB if that line contains a tab character, else SPACE. A file
    that cannot be read, or has no first data row, falls back to SPACE.
    """
    try:
        lines = read_lines(filepath)
    except (OSError, UnicodeDecodeError) as e:
        return ExtractedValue.fallback(
            DelimiterKind.SPACE, f"delimiter detection failed: {e}"
        )

    if len(lines) < fmt.first_data_line:
        return ExtractedValue.fallback(
            DelimiterKind.SPACE,
            f"delimiter detection failed: no line {fmt.first_data_line} "
            f"(file has {len(lines)} lines)"
        )

    sample = lines[fmt.first_data_line - 1]
    if "\t" in sample:
        return ExtractedValue.parsed(DelimiterKind.TAB)
    return ExtractedValue.parsed(DelimiterKind.SPACE)


def split_fields(line: str, delimiter: DelimiterKind) -> List[str]:
    """Split a data line into non-empty tokens, collapsing repeated separators."""
    if delimiter is DelimiterKind.TAB:
        return [tok.strip() for tok in line.split("\t") if tok.strip()]
    return line.split()


class PolarFileParser:
    """
    Tokenize the data block of a polar file into a numeric table.

    Rows shorter than the widest row are padded with NaN, so the result is
    always rectangular. Tokenizing stops at the first token that is not a
    number; that row and everything after it is dropped.
    """

    def __init__(self, fmt: PolarFileFormat = QBLADE_PLR):
        self.fmt = fmt

    def parse(self, filepath: str | Path, delimiter: DelimiterKind) -> NDArray:
        """
        Read and tokenize a polar file.

        Args:
            filepath: Path to polar file
            delimiter: Field separator, usually from detect_delimiter()

        Returns:
            (rows, columns) float64 array, 1 <= columns <= fmt.max_columns

        Raises:
            PolarParseError: unreadable file, header too short, or no numeric rows
        """
        filepath = Path(filepath)
        try:
            lines = read_lines(filepath)
        except (OSError, UnicodeDecodeError) as e:
            raise PolarParseError(f"Cannot read {filepath.name}: {e}") from e

        return self.parse_lines(lines, delimiter, source=filepath.name)

    def parse_lines(self, lines: List[str], delimiter: DelimiterKind,
                    source: str = "<lines>") -> NDArray:
        """Tokenize already-read file content. See parse()."""
        if len(lines) < self.fmt.header_lines:
            raise PolarParseError(
                f"{source}: header needs {self.fmt.header_lines} lines, "
                f"file has {len(lines)}"
            )

        rows = []
        for line in lines[self.fmt.header_lines:]:
            tokens = split_fields(line, delimiter)
            if not tokens:
                continue
            row = self._parse_row(tokens[:self.fmt.max_columns])
            if row is None:
                break
            rows.append(row)

        if not rows:
            raise PolarParseError(f"{source}: no numeric data rows")

        width = max(len(r) for r in rows)
        table = np.full((len(rows), width), np.nan, dtype=np.float64)
        for i, row in enumerate(rows):
            table[i, :len(row)] = row

        return table

    @staticmethod
    def _parse_row(tokens: List[str]) -> Optional[List[float]]:
        try:
            return [float(tok) for tok in tokens]
        except ValueError:
            return None
