"""
Synthetic polar and AD15 files for the tests.
"""

from pathlib import Path
from typing import List, Optional, Sequence
import numpy as np


def full_range_polar(step: float = 10.0, columns: int = 7) -> np.ndarray:
    """Flat-plate-like polar over [-180, 180] deg."""
    aoa = np.arange(-180.0, 180.0 + step / 2, step)
    a = np.radians(aoa)
    cl = 1.1 * np.sin(2 * a)
    cd = 0.01 + 1.2 * np.sin(a) ** 2
    cm = -0.1 * np.sin(a)
    cols = [aoa, cl, cd, cm]
    while len(cols) < columns:
        cols.append(np.zeros_like(aoa))
    return np.column_stack(cols[:columns])


def plr_lines(rows: Sequence[Sequence],
              delimiter: str = " ",
              label_line: Optional[str] = "POLARNAME   -   NACA0012",
              reynolds_line: Optional[str] = "1 1000000 0.0") -> List[str]:
    """17 header lines + one line per row."""
    header = [f"# header line {i}" for i in range(1, 18)]
    if label_line is not None:
        header[9] = label_line
    if reynolds_line is not None:
        header[13] = reynolds_line
    body = [delimiter.join(str(v) for v in row) for row in rows]
    return header + body


def write_plr(path: Path, rows: Sequence[Sequence], **kwargs) -> Path:
    path.write_text("\n".join(plr_lines(rows, **kwargs)) + "\n", encoding="utf-8")
    return path


def write_table_file(path: Path, label: str, data_lines: Sequence[str],
                     num_tabs_line: Optional[str] = "          1   NumTabs           ! Number of airfoil tables") -> Path:
    """Minimal converted file: 10 header lines + data block."""
    header = [f"! header {i} of {label}" for i in range(1, 11)]
    if num_tabs_line is not None:
        header[7] = num_tabs_line
    path.write_text("\n".join(header + list(data_lines)) + "\n", encoding="utf-8")
    return path
