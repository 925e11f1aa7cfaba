"""
Fixed-layout file format descriptions.

The polar and library formats locate their fields by line number. All of
those offsets live here so a new layout version is a new instance, not a
change to the parsing code.

Line numbers are 1-based, as they appear in the format documentation.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class PolarFileFormat:
    """Layout of an input polar file (header block followed by data rows)."""
    name: str
    header_lines: int          # lines discarded before the first data row
    label_line: int            # line carrying the POLARNAME field
    reynolds_line: int         # line carrying Re as its second token
    max_columns: int           # AOA, CL, CD, CM + optional extras
    label_marker: str = "POLARNAME"
    reynolds_scale: float = 1e6  # header value -> millions

    @property
    def first_data_line(self) -> int:
        """Line number of the first data row."""
        return self.header_lines + 1


@dataclass(frozen=True)
class LibraryFormat:
    """Layout of a converted airfoil-table file (header + data block)."""
    name: str
    header_lines: int
    table_count_marker: str

    @property
    def first_data_line(self) -> int:
        """Line number where the table data block starts."""
        return self.header_lines + 1


# QBlade 2.0.8.5 .plr export
QBLADE_PLR = PolarFileFormat(
    name="qblade-plr",
    header_lines=17,
    label_line=10,
    reynolds_line=14,
    max_columns=7,
)

# OpenFAST AeroDyn15 airfoil info file
AD15_LIBRARY = LibraryFormat(
    name="aerodyn15",
    header_lines=10,
    table_count_marker="NumTabs",
)

POLAR_FORMATS = {
    QBLADE_PLR.name: QBLADE_PLR,
}
