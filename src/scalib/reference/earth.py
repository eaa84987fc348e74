"""
scalib.reference.earth
----------------------
Earth orientation and orbit quantities used by the apparent-place pipelines:
obliquity, nutation (Meeus ch. 22), refraction (ch. 16), equatorial parallax
(ch. 40), orbital eccentricity, aberration constant and perihelion longitude
(ch. 23).

All jd arguments are Julian Days; negative values raise InvalidInputError.
"""

from __future__ import annotations

import math
from typing import Tuple

from scalib.core.errors import InvalidInputError
from scalib.core.time import require_jd
from scalib.core.types import Angle, EquatorialCorrection, GeoLocation, Nutation
from . import astro_args as aa
from .angle import arcsec_to_deg, from_degrees, reduce
from .julian_day import sidereal_time

# ------------------------------------------------------------
# Nutation series (IAU 1980, terms >= 0.0003")
# (D, M, M', F, Omega, psi_a, psi_b, eps_c, eps_d), coefficients in arcseconds:
#   dpsi += (psi_a + psi_b*T) * sin(arg)
#   deps += (eps_c + eps_d*T) * cos(arg)
# ------------------------------------------------------------

NUTATION_TERMS: Tuple[Tuple[int, int, int, int, int, float, float, float, float], ...] = (
    (0, 0, 0, 0, 1, -17.1996, -0.01742, 9.2025, 0.00089),
    (-2, 0, 0, 2, 2, -1.3187, -0.00016, 0.5736, -0.00031),
    (0, 0, 0, 2, 2, -0.2274, -0.00002, 0.0977, -0.00005),
    (0, 0, 0, 0, 2, 0.2062, 0.00002, -0.0895, 0.00005),
    (0, 1, 0, 0, 0, 0.1426, -0.00034, 0.0054, -0.00001),
    (0, 0, 1, 0, 0, 0.0712, 0.00001, -0.0007, 0.0),
    (-2, 1, 0, 2, 2, -0.0517, 0.00012, 0.0224, -0.00006),
    (0, 0, 0, 2, 1, -0.0386, -0.00004, 0.0200, 0.0),
    (0, 0, 1, 2, 2, -0.0301, 0.0, 0.0129, -0.00001),
    (-2, -1, 0, 2, 2, 0.0217, -0.00005, -0.0095, 0.00003),
    (-2, 0, 1, 0, 0, -0.0158, 0.0, 0.0001, 0.0),
    (-2, 0, 0, 2, 1, 0.0129, 0.00001, -0.0070, 0.0),
    (0, 0, -1, 2, 2, 0.0123, 0.0, -0.0053, 0.0),
    (2, 0, 0, 0, 0, 0.0063, 0.0, 0.0001, 0.0),
    (0, 0, 1, 0, 1, 0.0063, 0.00001, -0.0033, 0.0),
    (2, 0, -1, 2, 2, -0.0059, 0.0, 0.0026, 0.0),
    (0, 0, -1, 0, 1, -0.0058, -0.00001, 0.0032, 0.0),
    (0, 0, 1, 2, 1, -0.0051, 0.0, 0.0027, 0.0),
    (-2, 0, 2, 0, 0, 0.0048, 0.0, 0.0001, 0.0),
    (0, 0, -2, 2, 1, 0.0046, 0.0, -0.0024, 0.0),
    (2, 0, 0, 2, 2, -0.0038, 0.0, 0.0016, 0.0),
    (0, 0, 2, 2, 2, -0.0031, 0.0, 0.0013, 0.0),
    (0, 0, 2, 0, 0, 0.0029, 0.0, 0.0001, 0.0),
    (-2, 0, 1, 2, 2, 0.0029, 0.0, -0.0012, 0.0),
    (0, 0, 0, 2, 0, 0.0026, 0.0, 0.0001, 0.0),
    (-2, 0, 0, 2, 0, -0.0022, 0.0, 0.0001, 0.0),
    (0, 0, -1, 2, 1, 0.0021, 0.0, -0.0010, 0.0),
    (0, 2, 0, 0, 0, 0.0017, -0.00001, 0.0001, 0.0),
    (2, 0, -1, 0, 1, 0.0016, 0.0, -0.0008, 0.0),
    (-2, 2, 0, 2, 2, -0.0016, 0.00001, 0.0007, 0.0),
    (0, 1, 0, 0, 1, -0.0015, 0.0, 0.0009, 0.0),
    (-2, 0, 1, 0, 1, -0.0013, 0.0, 0.0007, 0.0),
    (0, -1, 0, 0, 1, -0.0012, 0.0, 0.0006, 0.0),
    (0, 0, 2, -2, 0, 0.0011, 0.0, 0.0001, 0.0),
    (2, 0, -1, 2, 1, -0.0010, 0.0, 0.0005, 0.0),
    (2, 0, 1, 2, 2, -0.0008, 0.0, 0.0003, 0.0),
    (0, 1, 0, 2, 2, 0.0007, 0.0, -0.0003, 0.0),
    (-2, 1, 1, 0, 0, -0.0007, 0.0, 0.0001, 0.0),
    (0, -1, 0, 2, 2, -0.0007, 0.0, 0.0003, 0.0),
    (2, 0, 0, 2, 1, -0.0007, 0.0, 0.0003, 0.0),
    (2, 0, 1, 0, 0, 0.0006, 0.0, 0.0001, 0.0),
    (-2, 0, 2, 2, 2, 0.0006, 0.0, -0.0003, 0.0),
    (-2, 0, 1, 2, 1, 0.0006, 0.0, -0.0003, 0.0),
    (2, 0, -2, 0, 1, -0.0006, 0.0, 0.0003, 0.0),
    (2, 0, 0, 0, 1, -0.0006, 0.0, 0.0003, 0.0),
    (0, -1, 1, 0, 0, 0.0005, 0.0, 0.0001, 0.0),
    (-2, -1, 0, 2, 1, -0.0005, 0.0, 0.0003, 0.0),
    (-2, 0, 0, 0, 1, -0.0005, 0.0, 0.0003, 0.0),
    (0, 0, 2, 2, 1, -0.0005, 0.0, 0.0003, 0.0),
    (-2, 0, 2, 0, 1, 0.0004, 0.0, 0.0001, 0.0),
    (-2, 1, 0, 2, 1, 0.0004, 0.0, 0.0001, 0.0),
    (0, 0, 1, -2, 0, 0.0004, 0.0, 0.0001, 0.0),
    (-1, 0, 1, 0, 0, -0.0004, 0.0, 0.0001, 0.0),
    (-2, 1, 0, 0, 0, -0.0004, 0.0, 0.0001, 0.0),
    (1, 0, 0, 0, 0, -0.0004, 0.0, 0.0001, 0.0),
    (0, 0, 1, 2, 0, 0.0003, 0.0, 0.0001, 0.0),
    (0, 0, -2, 2, 2, -0.0003, 0.0, 0.0001, 0.0),
    (-1, -1, 1, 0, 0, -0.0003, 0.0, 0.0001, 0.0),
    (0, 1, 1, 0, 0, -0.0003, 0.0, 0.0001, 0.0),
    (0, -1, 1, 2, 2, -0.0003, 0.0, 0.0001, 0.0),
    (2, -1, -1, 2, 2, -0.0003, 0.0, 0.0001, 0.0),
    (0, 0, 3, 2, 2, -0.0003, 0.0, 0.0001, 0.0),
    (2, -1, 0, 2, 2, -0.0003, 0.0, 0.0001, 0.0),
)

# Earth figure (IAU 1976)
FLATTENING = 1.0 / 298.257
# Equatorial horizontal parallax of a body at 1 AU
SOLAR_PARALLAX_DEG = from_degrees(0, 0, 8, 794)
ABERRATION_CONSTANT_DEG = from_degrees(0, 0, 20, 495.52)


# ============================================================
# Obliquity
# ============================================================

def ecliptic_obliquity(jd: float) -> Angle:
    """
    Mean obliquity of the ecliptic.

    Example (Meeus 22.a): 1987-04-10 0h TD -> 23°26'27.407"
    """
    return reduce(aa.mean_obliquity_deg(aa.T_centuries(require_jd(jd))))


def true_obliquity(jd: float) -> Angle:
    """Mean obliquity plus nutation in obliquity (23°26'36.850" for Meeus 22.a)."""
    return reduce(ecliptic_obliquity(jd) + nutation(jd).obliquity_deg)


# ============================================================
# Nutation
# ============================================================

def nutation(jd: float) -> Nutation:
    """
    Nutation in longitude and obliquity, degrees.

    Example (Meeus 22.a): 1987-04-10 0h TD -> dpsi = -3.788", deps = +9.443"
    """
    T = aa.T_centuries(require_jd(jd))
    fa = aa.fundamental_args(T)
    D = math.radians(fa.D_deg)
    M = math.radians(fa.M_deg)
    Mp = math.radians(fa.Mp_deg)
    F = math.radians(fa.F_deg)
    Om = math.radians(fa.Omega_deg)

    dpsi = 0.0
    deps = 0.0
    for d, m, mp, f, om, psi_a, psi_b, eps_c, eps_d in NUTATION_TERMS:
        arg = d * D + m * M + mp * Mp + f * F + om * Om
        dpsi += (psi_a + psi_b * T) * math.sin(arg)
        deps += (eps_c + eps_d * T) * math.cos(arg)

    return Nutation(longitude_deg=arcsec_to_deg(dpsi), obliquity_deg=arcsec_to_deg(deps))


# ============================================================
# Refraction & parallax
# ============================================================

def refraction(h: Angle) -> Angle:
    """
    Atmospheric refraction for apparent altitude h (Bennett), degrees.

    ADD the result to the airless altitude. Zero at the zenith.
    """
    r_arcmin = 1.0 / math.tan(math.radians(h + 7.31 / (h + 4.4))) + 0.0013515
    return r_arcmin / 60.0


def geocentric_latitude_terms(latitude_deg: float) -> Tuple[float, float]:
    """(rho*sin(phi'), rho*cos(phi')) for an observer at sea level."""
    phi = math.radians(latitude_deg)
    rho = 0.9983271 + 0.0016764 * math.cos(2.0 * phi) - 0.0000035 * math.cos(4.0 * phi)
    b_a = 1.0 - FLATTENING
    phi_geo = math.atan2(b_a * b_a * math.sin(phi), math.cos(phi))
    return rho * math.sin(phi_geo), rho * math.cos(phi_geo)


def equatorial_parallax(
    jd: float, distance_au: float, loc: GeoLocation, ra: Angle, dec: Angle
) -> EquatorialCorrection:
    """
    Corrections (delta ra, delta dec) turning geocentric into topocentric
    equatorial coordinates.

    The hour angle uses apparent sidereal time at `jd`:
        H = theta0 - L - ra      (L positive west)
    """
    jd = require_jd(jd)
    if loc is None:
        raise InvalidInputError("loc is required")

    rho_sin, rho_cos = geocentric_latitude_terms(loc.latitude_deg)
    sin_pi = math.sin(math.radians(SOLAR_PARALLAX_DEG / distance_au))

    H = math.radians(sidereal_time(jd) - loc.longitude_deg - ra)
    d = math.radians(dec)

    denom = math.cos(d) - rho_cos * sin_pi * math.cos(H)
    d_ra = math.atan2(-rho_cos * sin_pi * math.sin(H), denom)
    dec_topo = math.atan2((math.sin(d) - rho_sin * sin_pi) * math.cos(d_ra), denom)

    return EquatorialCorrection(d_ra_deg=math.degrees(d_ra), d_dec_deg=math.degrees(dec_topo - d))


# ============================================================
# Orbit
# ============================================================

def orbit_eccentricity(jd: float) -> float:
    T = aa.T_centuries(require_jd(jd))
    return 0.016708617 - 0.000042037 * T - 0.0000001236 * (T * T)


def aberration_constant() -> Angle:
    """Constant of aberration, 20.49552"."""
    return ABERRATION_CONSTANT_DEG


def perihelion_longitude(jd: float) -> Angle:
    T = aa.T_centuries(require_jd(jd))
    return reduce(102.93735 + 1.71953 * T + 0.00046 * (T * T))
