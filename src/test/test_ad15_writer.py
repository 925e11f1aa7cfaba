"""
Test the default AeroDyn15 writer and its coefficient fit.
"""

import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.io import AD15_LIBRARY
from writers import compute_coefficients, write_polar_ad15
from plr_samples import full_range_polar


def linear_polar(alpha0=-2.0, slope_per_deg=0.1):
    aoa = np.arange(-180.0, 181.0, 1.0)
    cl = slope_per_deg * (aoa - alpha0)
    cl = np.clip(cl, -1.2, 1.4)
    cd = 0.008 + 0.0001 * (aoa - alpha0) ** 2
    cm = -0.05 + 0.0 * aoa
    return np.column_stack([aoa, cl, cd, cm])


class TestComputeCoefficients:

    def test_zero_lift_angle(self):
        coeffs = compute_coefficients(linear_polar(alpha0=-2.0))
        assert coeffs.alpha0 == pytest.approx(-2.0, abs=1e-9)

    def test_drag_and_moment_at_zero_lift(self):
        coeffs = compute_coefficients(linear_polar(alpha0=-2.0))
        assert coeffs.cd0 == pytest.approx(0.008)
        assert coeffs.cm0 == pytest.approx(-0.05)

    def test_slope_close_to_input(self):
        coeffs = compute_coefficients(linear_polar(slope_per_deg=0.1))
        assert coeffs.c_nalpha == pytest.approx(0.1 * 180.0 / np.pi, rel=0.05)

    def test_stall_angles_bracket_alpha0(self):
        coeffs = compute_coefficients(linear_polar())
        assert coeffs.alpha2 < coeffs.alpha0 < coeffs.alpha1
        assert coeffs.cn1 > 0 > coeffs.cn2

    def test_unsorted_input(self):
        polar = linear_polar()
        shuffled = polar[np.random.default_rng(0).permutation(len(polar))]
        assert compute_coefficients(shuffled) == compute_coefficients(polar)

    def test_too_few_angles(self):
        with pytest.raises(ValueError):
            compute_coefficients(np.array([[0.0, 0.1, 0.01, 0.0]]))

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            compute_coefficients(np.zeros((5, 3)))


class TestWritePolarAD15:

    def test_layout(self, tmp_path):
        polar = full_range_polar()[:, :4]
        out = tmp_path / "foil_AD15.txt"
        coeffs = write_polar_ad15(polar, out, "NACA0012", 2.5)

        lines = out.read_text(encoding="utf-8").splitlines()
        header = lines[:AD15_LIBRARY.header_lines]
        assert header[1] == "! NACA0012"
        assert sum(AD15_LIBRARY.table_count_marker in line for line in header) == 1
        assert lines[10] == "! data for table: NACA0012"
        assert lines[11].split()[:2] == ["2.500000", "Re"]
        assert any(line.split()[1:2] == ["alpha0"] for line in lines[11:])
        assert coeffs.alpha0 == pytest.approx(0.0)

    def test_rows_written_sorted(self, tmp_path):
        polar = full_range_polar()[::-1, :4]
        out = tmp_path / "rev.txt"
        write_polar_ad15(polar, out, "rev", 1.0)

        lines = out.read_text(encoding="utf-8").splitlines()
        num_alf = next(l for l in lines if "NumAlf" in l)
        n = int(num_alf.split()[0])
        rows = np.array([l.split() for l in lines[-n:]], dtype=float)
        assert n == len(polar)
        assert np.all(np.diff(rows[:, 0]) > 0)
        np.testing.assert_allclose(rows[:, 1], polar[::-1, 1], atol=1e-6)

    def test_repeated_angles_written_once(self, tmp_path):
        polar = full_range_polar()[:, :4]
        repeated = polar[5].copy()
        repeated[1] += 0.5
        polar = np.vstack([polar, repeated])
        out = tmp_path / "dup.txt"
        write_polar_ad15(polar, out, "dup", 1.0)

        lines = out.read_text(encoding="utf-8").splitlines()
        n = int(next(l for l in lines if "NumAlf" in l).split()[0])
        rows = np.array([l.split() for l in lines[-n:]], dtype=float)
        assert n == len(polar) - 1
        assert np.all(np.diff(rows[:, 0]) > 0)
        # first occurrence of the repeated angle is kept
        np.testing.assert_allclose(rows[5, 1], polar[5, 1], atol=1e-6)
