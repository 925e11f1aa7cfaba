"""Converted-table writers."""

from .ad15 import PolarCoefficients, compute_coefficients, write_polar_ad15

__all__ = [
    "PolarCoefficients",
    "compute_coefficients",
    "write_polar_ad15",
]
