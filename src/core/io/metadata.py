"""
Header metadata extraction: Reynolds number and polar label.

Both lookups are best-effort. A missing or malformed field yields the
default value together with the reason, never an exception.
"""

from __future__ import annotations
import math
import re
from typing import List, Optional

from .extracted import ExtractedValue
from .formats import PolarFileFormat, QBLADE_PLR

DEFAULT_REYNOLDS = 1.0  # millions

# Reynolds number embedded in a file name, in thousands (e.g. "..._Re500.000_...")
FILENAME_RE_PATTERN = re.compile(r"Re(\d+\.\d+)")


class MetadataExtractor:
    """Pull Reynolds number and label from fixed header lines."""

    def __init__(self, fmt: PolarFileFormat = QBLADE_PLR):
        self.fmt = fmt
        self._label_pattern = re.compile(
            re.escape(fmt.label_marker) + r"\s*-?\s*(.*)"
        )

    def _line(self, lines: List[str], number: int) -> Optional[str]:
        if 1 <= number <= len(lines):
            return lines[number - 1]
        return None

    def reynolds(self, lines: List[str]) -> ExtractedValue[float]:
        """
        Reynolds number in millions from the second token of the Re line.

        Examples:
            line 14 = "1 2500000 foo"  ->  2.5
            line 14 = "1"              ->  1.0 (fallback)
        """
        line = self._line(lines, self.fmt.reynolds_line)
        if line is None:
            return ExtractedValue.fallback(
                DEFAULT_REYNOLDS, f"no header line {self.fmt.reynolds_line}"
            )

        tokens = line.split()
        if len(tokens) < 2:
            return ExtractedValue.fallback(
                DEFAULT_REYNOLDS,
                f"line {self.fmt.reynolds_line} has fewer than 2 fields"
            )

        try:
            value = float(tokens[1]) / self.fmt.reynolds_scale
        except ValueError:
            return ExtractedValue.fallback(
                DEFAULT_REYNOLDS, f"Reynolds field '{tokens[1]}' is not a number"
            )

        if not math.isfinite(value) or value <= 0:
            return ExtractedValue.fallback(
                DEFAULT_REYNOLDS, f"Reynolds field '{tokens[1]}' is not positive"
            )

        return ExtractedValue.parsed(value)

    def label(self, lines: List[str], default: str) -> ExtractedValue[str]:
        """
        Text following the POLARNAME marker, stripped.

        Examples:
            line 10 = "  POLARNAME  -  NACA0012  "  ->  "NACA0012"
            no marker                               ->  default (fallback)
        """
        line = self._line(lines, self.fmt.label_line)
        if line is None:
            return ExtractedValue.fallback(
                default, f"no header line {self.fmt.label_line}"
            )

        match = self._label_pattern.search(line)
        label = match.group(1).strip() if match else ""
        if not label:
            return ExtractedValue.fallback(
                default, f"{self.fmt.label_marker} not found, using file name"
            )

        return ExtractedValue.parsed(label)


def reynolds_from_filename(filename: str) -> Optional[float]:
    """Reynolds number in millions encoded in a file name, if any."""
    match = FILENAME_RE_PATTERN.search(filename)
    if match is None:
        return None
    return float(match.group(1)) / 1000.0
