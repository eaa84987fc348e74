from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import math

from scalib.core.time import DAYS_IN_CENTURY, DAYS_IN_MILLENNIUM, J2000
from .angle import arcsec_to_deg, reduce


# ------------------------------------------------------------
# Time variables
# ------------------------------------------------------------

def T_centuries(jd: float) -> float:
    """Julian centuries from J2000.0."""
    return (jd - J2000) / DAYS_IN_CENTURY


def tau_millennia(jd: float) -> float:
    """Julian millennia from J2000.0 (VSOP87 time argument)."""
    return (jd - J2000) / DAYS_IN_MILLENNIUM


# ------------------------------------------------------------
# Fundamental arguments (Meeus ch. 22/47; degrees, reduced)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    """Mean elements shared by the nutation and lunar series."""
    D_deg: float      # Moon mean elongation from the Sun
    M_deg: float      # Sun mean anomaly
    Mp_deg: float     # Moon mean anomaly
    F_deg: float      # Moon argument of latitude
    Omega_deg: float  # longitude of the Moon's ascending node


def moon_mean_elongation_deg(T: float) -> float:
    return reduce(
        297.8501921
        + 445267.1114034 * T
        - 0.0018819 * T * T
        + (T ** 3) / 545868.0
        - (T ** 4) / 113065000.0
    )


def sun_mean_anomaly_deg(T: float) -> float:
    return reduce(
        357.5291092
        + 35999.0502909 * T
        - 0.0001536 * T * T
        + (T ** 3) / 24490000.0
    )


def moon_mean_anomaly_deg(T: float) -> float:
    return reduce(
        134.9633964
        + 477198.8675055 * T
        + 0.0087414 * T * T
        + (T ** 3) / 69699.0
        - (T ** 4) / 14712000.0
    )


def moon_latitude_argument_deg(T: float) -> float:
    return reduce(
        93.2720950
        + 483202.0175233 * T
        - 0.0036539 * T * T
        - (T ** 3) / 3526000.0
        + (T ** 4) / 863310000.0
    )


def moon_ascending_node_deg(T: float) -> float:
    return reduce(125.04452 - 1934.136261 * T + 0.0020708 * T * T + (T ** 3) / 450000.0)


def moon_mean_longitude_deg(T: float) -> float:
    return reduce(
        218.3164477
        + 481267.88123421 * T
        - 0.0015786 * T * T
        + (T ** 3) / 538841.0
        - (T ** 4) / 65194000.0
    )


def fundamental_args(T: float) -> FundamentalArgs:
    return FundamentalArgs(
        D_deg=moon_mean_elongation_deg(T),
        M_deg=sun_mean_anomaly_deg(T),
        Mp_deg=moon_mean_anomaly_deg(T),
        F_deg=moon_latitude_argument_deg(T),
        Omega_deg=moon_ascending_node_deg(T),
    )


def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Scales lunar periodic terms that contain the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


# ------------------------------------------------------------
# Mean obliquity
# ------------------------------------------------------------

EPS0_ARCSEC = 23 * 3600.0 + 26 * 60.0 + 21.448  # 23°26'21.448"


def mean_obliquity_deg(T: float) -> float:
    """
    Mean obliquity of the ecliptic (degrees).

    Laskar's 10th-order polynomial in U = T/100 within 10000 years of J2000,
    otherwise the IAU 1980 cubic in T:
        eps = 23°26'21.448" - 46.8150"T - 0.00059"T^2 + 0.001813"T^3
    """
    if abs(T) < 100.0:
        U = T / 100.0
        coeffs = (-4680.93, -1.55, 1999.25, -51.38, -249.67, -39.05, 7.12, 27.87, 5.79, 2.45)
        corr = 0.0
        for c in reversed(coeffs):
            corr = (corr + c) * U
    else:
        corr = -46.8150 * T - 0.00059 * (T * T) + 0.001813 * (T ** 3)
    return arcsec_to_deg(EPS0_ARCSEC + corr)


# ------------------------------------------------------------
# Precession (IAU 1976)
# ------------------------------------------------------------

def precession_angles_deg(T: float) -> Tuple[float, float, float]:
    """(zeta, z, theta) in degrees for T centuries from J2000."""
    zeta = arcsec_to_deg(2306.2181 * T + 0.30188 * (T ** 2) + 0.017998 * (T ** 3))
    z = arcsec_to_deg(2306.2181 * T + 1.09468 * (T ** 2) + 0.018203 * (T ** 3))
    theta = arcsec_to_deg(2004.3109 * T - 0.42665 * (T ** 2) - 0.041833 * (T ** 3))
    return zeta, z, theta


def matrix_eq_j2000_to_ecl_date(T: float) -> tuple[tuple[float, ...], ...]:
    """
    3x3 rotation from the J2000 equatorial frame to the mean ecliptic of date.
    """
    zeta, z, theta = (math.radians(a) for a in precession_angles_deg(T))
    eps_date = math.radians(mean_obliquity_deg(T))

    def matmul(A, B):
        return tuple(
            tuple(sum(A[i][k] * B[k][j] for k in range(3)) for j in range(3))
            for i in range(3)
        )

    # Passive rotations
    def R_x(a):
        c, s = math.cos(a), math.sin(a)
        return ((1, 0, 0), (0, c, s), (0, -s, c))

    def R_y(a):
        c, s = math.cos(a), math.sin(a)
        return ((c, 0, -s), (0, 1, 0), (s, 0, c))

    def R_z(a):
        c, s = math.cos(a), math.sin(a)
        return ((c, s, 0), (-s, c, 0), (0, 0, 1))

    # Eq J2000 -> Eq date -> Ecl date
    eq_precession = matmul(R_z(-z), matmul(R_y(theta), R_z(-zeta)))
    return matmul(R_x(eps_date), eq_precession)


def apply_matrix(M: tuple[tuple[float, ...], ...], v: tuple[float, float, float]) -> tuple[float, float, float]:
    return (
        M[0][0]*v[0] + M[0][1]*v[1] + M[0][2]*v[2],
        M[1][0]*v[0] + M[1][1]*v[1] + M[1][2]*v[2],
        M[2][0]*v[0] + M[2][1]*v[1] + M[2][2]*v[2]
    )
