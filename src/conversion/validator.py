"""
Polar table validation.

Checks, in order:
1. at least 4 columns (AOA, CL, CD, CM)
2. the first 4 columns are finite
3. AOA covers [-180, 180] deg (warning only)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray

from .outcomes import ProcessingOutcome

REQUIRED_COLUMNS = 4
AOA_FULL_RANGE = (-180.0, 180.0)


@dataclass(frozen=True)
class ValidationResult:
    """Decision for one table plus the narrowed (AOA, CL, CD, CM) table."""
    outcome: ProcessingOutcome
    table: Optional[NDArray] = None  # (rows, 4), None when rejected
    aoa_range: Optional[Tuple[float, float]] = None
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.table is not None


class DataValidator:
    """Validate a raw polar table and narrow it to 4 columns."""

    def __init__(self, aoa_range: Tuple[float, float] = AOA_FULL_RANGE):
        self.aoa_min, self.aoa_max = aoa_range

    def validate(self, raw: NDArray) -> ValidationResult:
        raw = np.atleast_2d(np.asarray(raw, dtype=np.float64))
        n_cols = raw.shape[1]

        if n_cols < REQUIRED_COLUMNS:
            return ValidationResult(
                outcome=ProcessingOutcome.SKIPPED_INSUFFICIENT_COLUMNS,
                message=f"insufficient columns (got {n_cols}, need at least {REQUIRED_COLUMNS})"
            )

        polar = raw[:, :REQUIRED_COLUMNS].copy()

        if not np.all(np.isfinite(polar)):
            n_bad = int(np.count_nonzero(~np.isfinite(polar)))
            return ValidationResult(
                outcome=ProcessingOutcome.SKIPPED_NON_FINITE,
                message=f"contains {n_bad} non-finite value(s) (NaN or Inf)"
            )

        aoa = polar[:, 0]
        observed = (float(aoa.min()), float(aoa.max()))
        if observed[0] > self.aoa_min or observed[1] < self.aoa_max:
            return ValidationResult(
                outcome=ProcessingOutcome.WRITTEN_WITH_WARNING,
                table=polar,
                aoa_range=observed,
                message=(
                    f"AOA range [{observed[0]:.1f}, {observed[1]:.1f}] does not cover "
                    f"[{self.aoa_min:.0f}, {self.aoa_max:.0f}] deg"
                )
            )

        return ValidationResult(
            outcome=ProcessingOutcome.SUCCESS,
            table=polar,
            aoa_range=observed
        )
