"""
AeroDyn15 airfoil table writer.

Fits the unsteady-aero parameters AeroDyn expects from a static polar and
writes a single-table AirfoilInfo file:

    lines 1-10   file header (InterpOrd, NonDimArea, NumCoords, NumTabs)
    line 11+     table block (Re, Ctrl, UA coefficients, NumAlf, rows)

The fit is a quick estimate from the tabulated data: zero-lift angle by
linear interpolation of CL, normal-force slope by least squares around it,
stall angles at the normal-force extrema within +-30 deg.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import date
from pathlib import Path
from typing import Dict, List
import numpy as np
from numpy.typing import NDArray
from scipy.interpolate import interp1d

ZERO_LIFT_SEARCH = 20.0   # deg either side of 0
LINEAR_WINDOW = 5.0       # deg either side of alpha0 for the slope fit
STALL_SEARCH = 30.0       # deg either side of alpha0 for Cn extrema
THIN_AIRFOIL_SLOPE = 2.0 * np.pi  # 1/rad

SEPARATOR = "! " + "-" * 78


@dataclass(frozen=True)
class PolarCoefficients:
    """Fitted AeroDyn unsteady-aero parameters (angles in degrees)."""
    alpha0: float      # zero-lift angle of attack
    alpha1: float      # positive stall angle
    alpha2: float      # negative stall angle
    c_nalpha: float    # normal-force slope at alpha0 [1/rad]
    cn1: float         # Cn at alpha1
    cn2: float         # Cn at alpha2
    cd0: float         # drag at alpha0
    cm0: float         # moment at alpha0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _sorted_unique(polar: NDArray) -> NDArray:
    """Rows sorted by AOA, keeping the first row of each repeated angle."""
    polar = np.asarray(polar, dtype=np.float64)
    if polar.ndim != 2 or polar.shape[1] < 4:
        raise ValueError(f"polar must be (N, 4) [AOA, CL, CD, CM], got shape {polar.shape}")

    _, idx = np.unique(polar[:, 0], return_index=True)
    unique = polar[idx]
    if len(unique) < 2:
        raise ValueError("polar needs at least 2 distinct angles of attack")
    return unique


def _zero_lift_angle(aoa: NDArray, cl: NDArray) -> float:
    """CL zero crossing closest to 0 deg, 0.0 if there is none nearby."""
    crossings = []
    for i in range(len(aoa) - 1):
        if abs(aoa[i]) > ZERO_LIFT_SEARCH and abs(aoa[i + 1]) > ZERO_LIFT_SEARCH:
            continue
        if cl[i] == 0.0:
            crossings.append(aoa[i])
        elif cl[i] * cl[i + 1] < 0.0:
            t = cl[i] / (cl[i] - cl[i + 1])
            crossings.append(aoa[i] + t * (aoa[i + 1] - aoa[i]))

    if not crossings:
        return 0.0
    return float(min(crossings, key=abs))


def _normal_force_slope(aoa: NDArray, cn: NDArray, alpha0: float) -> float:
    mask = np.abs(aoa - alpha0) <= LINEAR_WINDOW
    if np.count_nonzero(mask) < 2:
        return THIN_AIRFOIL_SLOPE
    slope, _ = np.polyfit(np.radians(aoa[mask]), cn[mask], 1)
    return float(slope)


def compute_coefficients(polar: NDArray) -> PolarCoefficients:
    """
    Fit AeroDyn parameters from a validated polar.

    Args:
        polar: (N, 4) array [AOA deg, CL, CD, CM]; repeated angles keep their first row

    Returns:
        PolarCoefficients

    Raises:
        ValueError: wrong shape or fewer than 2 distinct angles
    """
    unique = _sorted_unique(polar)
    aoa, cl, cd, cm = unique[:, 0], unique[:, 1], unique[:, 2], unique[:, 3]

    alpha0 = _zero_lift_angle(aoa, cl)

    cd_at = interp1d(aoa, cd, bounds_error=False, fill_value=(cd[0], cd[-1]))
    cm_at = interp1d(aoa, cm, bounds_error=False, fill_value=(cm[0], cm[-1]))
    cd0 = float(cd_at(alpha0))
    cm0 = float(cm_at(alpha0))

    a_rad = np.radians(aoa)
    cn = cl * np.cos(a_rad) + (cd - cd0) * np.sin(a_rad)
    c_nalpha = _normal_force_slope(aoa, cn, alpha0)

    cn_at = interp1d(aoa, cn, bounds_error=False, fill_value=(cn[0], cn[-1]))

    upper = (aoa >= alpha0) & (aoa <= alpha0 + STALL_SEARCH)
    if np.any(upper):
        i = int(np.argmax(np.where(upper, cn, -np.inf)))
        alpha1, cn1 = float(aoa[i]), float(cn[i])
    else:
        alpha1, cn1 = alpha0, float(cn_at(alpha0))

    lower = (aoa <= alpha0) & (aoa >= alpha0 - STALL_SEARCH)
    if np.any(lower):
        i = int(np.argmin(np.where(lower, cn, np.inf)))
        alpha2, cn2 = float(aoa[i]), float(cn[i])
    else:
        alpha2, cn2 = alpha0, float(cn_at(alpha0))

    return PolarCoefficients(
        alpha0=alpha0,
        alpha1=alpha1,
        alpha2=alpha2,
        c_nalpha=c_nalpha,
        cn1=cn1,
        cn2=cn2,
        cd0=cd0,
        cm0=cm0
    )


def _field(value, name: str, comment: str) -> str:
    return f"{str(value):>14}   {name:<18}! {comment}"


def _num(x: float) -> str:
    return f"{x:.6f}"


def format_header(label: str) -> List[str]:
    """The 10-line file header. NumTabs is always 1 for a single-table file."""
    return [
        "! ------------ AirfoilInfo v1.01.x Input File " + "-" * 34,
        f"! {label}",
        f"! Generated from polar data on {date.today():%Y-%m-%d}",
        SEPARATOR,
        _field('"DEFAULT"', "InterpOrd",
               'Interpolation order to use for quasi-steady table lookup {1=linear; 3=cubic spline; "default"} [default=3]'),
        _field(1, "NonDimArea",
               "The non-dimensional area of the airfoil (area/chord^2) (set to 1.0 if unsure or unneeded)"),
        _field(0, "NumCoords",
               "The number of coordinates in the airfoil shape file. Set to zero if coordinates not included."),
        _field(1, "NumTabs",
               "Number of airfoil tables in this file. Each table must have lines for Re and Ctrl"),
        SEPARATOR,
        SEPARATOR,
    ]


def format_table(polar: NDArray, label: str, reynolds: float,
                 coeffs: PolarCoefficients) -> List[str]:
    """The table block: Re/Ctrl lines, UA coefficients and the coefficient rows."""
    lines = [
        f"! data for table: {label}",
        _field(_num(reynolds), "Re", "Reynolds number in millions"),
        _field(0, "UserProp", "User property (control) setting"),
        _field("True", "InclUAdata", "Is unsteady aerodynamics data included in this table?"),
        _field(_num(coeffs.alpha0), "alpha0", "0-lift angle of attack, depends on airfoil (deg)"),
        _field(_num(coeffs.alpha1), "alpha1", "Angle of attack at f=0.7, alpha1 > alpha0 (deg)"),
        _field(_num(coeffs.alpha2), "alpha2", "Angle of attack at f=0.7, alpha2 < alpha0 (deg)"),
        _field(1, "eta_e", "Recovery factor in the range [0.85 - 0.95]"),
        _field(_num(coeffs.c_nalpha), "C_nalpha", "Slope of the 2D normal force coefficient curve (1/rad)"),
    ]
    for name in ("T_f0", "T_V0", "T_p", "T_VL", "b1", "b2", "b5", "A1", "A2", "A5"):
        lines.append(_field('"Default"', name, "Unsteady aero model constant"))
    for name in ("S1", "S2", "S3", "S4"):
        lines.append(_field(0, name, "Constant in the f curve best-fit"))
    lines += [
        _field(_num(coeffs.cn1), "Cn1", "Critical value of C0n at leading edge separation (positive stall)"),
        _field(_num(coeffs.cn2), "Cn2", "As Cn1 for negative AOAs"),
        _field('"Default"', "St_sh", "Strouhal's shedding frequency constant [default=0.19]"),
        _field(_num(coeffs.cd0), "Cd0", "2D drag coefficient value at 0-lift"),
        _field(_num(coeffs.cm0), "Cm0", "2D pitching moment coefficient about 1/4-chord location, at 0-lift"),
    ]
    for name in ("k0", "k1", "k2", "k3", "k1_hat"):
        lines.append(_field(0, name, "Constant in the hat(x)_cp curve best-fit"))
    lines += [
        _field('"Default"', "x_cp_bar", "Constant in the expression of hat(x)_cp^v [default=0.2]"),
        _field('"Default"', "UACutout", "Angle of attack above which unsteady aerodynamics are disabled (deg)"),
        _field('"Default"', "filtCutOff", "Cut-off frequency of the low-pass filter (Hz)"),
        "!........................................",
        "! Table of aerodynamics coefficients",
        _field(len(polar), "NumAlf", "Number of data lines in the following table"),
        "!    Alpha           Cl           Cd           Cm",
        "!    (deg)           (-)          (-)          (-)",
    ]
    for aoa, cl, cd, cm in polar:
        lines.append(f"{aoa:12.4f} {cl:12.6f} {cd:12.6f} {cm:12.6f}")
    return lines


def write_polar_ad15(polar: NDArray, output_path: str | Path,
                     label: str, reynolds: float) -> PolarCoefficients:
    """
    Fit coefficients and write a single-table AeroDyn15 file.

    Args:
        polar: (N, 4) array [AOA deg, CL, CD, CM]; repeated angles keep their first row
        output_path: Destination file
        label: Table label written in the header
        reynolds: Reynolds number in millions

    Returns:
        The fitted PolarCoefficients
    """
    polar = np.asarray(polar, dtype=np.float64)
    coeffs = compute_coefficients(polar)

    rows = _sorted_unique(polar)[:, :4]
    lines = format_header(label) + format_table(rows, label, reynolds, coeffs)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    return coeffs
