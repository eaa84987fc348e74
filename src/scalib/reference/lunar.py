"""
scalib.reference.lunar
----------------------
Geocentric position of the Moon (Meeus ch. 47, ELP-2000/82 truncated).

Longitude and distance come from one 60-term table, latitude from another.
Terms containing the Sun's mean anomaly M are scaled by E^|m| with E the
Earth eccentricity factor. Additive terms A1 (Venus), A2 (Jupiter) and
A3 complete the series.

The Moon is evaluated at the Julian Day of the given date as is, without a
Delta T correction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from scalib.core.body import TrackedBody
from scalib.core.time import AU_KM, require_jd
from scalib.core.types import Angle, BodyPosition, CalendarDate, GeoLocation, HorizontalCoordinates
from . import astro_args as aa
from .angle import reduce
from .coordinates import ecliptic_to_equatorial, topocentric_local
from .julian_day import from_calendar_date

MEAN_DISTANCE_KM = 385000.56

# (D, M, M', F, sigma_l [deg], sigma_r [km])
LR_TERMS: Tuple[Tuple[int, int, int, int, float, float], ...] = (
    (0, 0, 1, 0, 6.288774, -20905.355),
    (2, 0, -1, 0, 1.274027, -3699.111),
    (2, 0, 0, 0, 0.658314, -2955.968),
    (0, 0, 2, 0, 0.213618, -569.925),
    (0, 1, 0, 0, -0.185116, 48.888),
    (0, 0, 0, 2, -0.114332, -3.149),
    (2, 0, -2, 0, 0.058793, 246.158),
    (2, -1, -1, 0, 0.057066, -152.138),
    (2, 0, 1, 0, 0.053322, -170.733),
    (2, -1, 0, 0, 0.045758, -204.586),
    (0, 1, -1, 0, -0.040923, -129.620),
    (1, 0, 0, 0, -0.034720, 108.743),
    (0, 1, 1, 0, -0.030383, 104.755),
    (2, 0, 0, -2, 0.015327, 10.321),
    (0, 0, 1, 2, -0.012528, 0.0),
    (0, 0, 1, -2, 0.010980, 79.661),
    (4, 0, -1, 0, 0.010675, -34.782),
    (0, 0, 3, 0, 0.010034, -23.210),
    (4, 0, -2, 0, 0.008548, -21.636),
    (2, 1, -1, 0, -0.007888, 24.208),
    (2, 1, 0, 0, -0.006766, 30.824),
    (1, 0, -1, 0, -0.005163, -8.379),
    (1, 1, 0, 0, 0.004987, -16.675),
    (2, -1, 1, 0, 0.004036, -12.831),
    (2, 0, 2, 0, 0.003994, -10.445),
    (4, 0, 0, 0, 0.003861, -11.650),
    (2, 0, -3, 0, 0.003665, 14.403),
    (0, 1, -2, 0, -0.002689, -7.003),
    (2, 0, -1, 2, -0.002602, 0.0),
    (2, -1, -2, 0, 0.002390, 10.056),
    (1, 0, 1, 0, -0.002348, 6.322),
    (2, -2, 0, 0, 0.002236, -9.884),
    (0, 1, 2, 0, -0.002120, 5.751),
    (0, 2, 0, 0, -0.002069, 0.0),
    (2, -2, -1, 0, 0.002048, -4.950),
    (2, 0, 1, -2, -0.001773, 4.130),
    (2, 0, 0, 2, -0.001595, 0.0),
    (4, -1, -1, 0, 0.001215, -3.958),
    (0, 0, 2, 2, -0.001110, 0.0),
    (3, 0, -1, 0, -0.000892, 3.258),
    (2, 1, 1, 0, -0.000810, 2.616),
    (4, -1, -2, 0, 0.000759, -1.897),
    (0, 2, -1, 0, -0.000713, -2.117),
    (2, 2, -1, 0, -0.000700, 2.354),
    (2, 1, -2, 0, 0.000691, 0.0),
    (2, -1, 0, -2, 0.000596, 0.0),
    (4, 0, 1, 0, 0.000549, -1.423),
    (0, 0, 4, 0, 0.000537, -1.117),
    (4, -1, 0, 0, 0.000520, -1.571),
    (1, 0, -2, 0, -0.000487, -1.739),
    (2, 1, 0, -2, -0.000399, 0.0),
    (0, 0, 2, -2, -0.000381, -4.421),
    (1, 1, 1, 0, 0.000351, 0.0),
    (3, 0, -2, 0, -0.000340, 0.0),
    (4, 0, -3, 0, 0.000330, 0.0),
    (2, -1, 2, 0, 0.000327, 0.0),
    (0, 2, 1, 0, -0.000323, 1.165),
    (1, 1, -1, 0, 0.000299, 0.0),
    (2, 0, 3, 0, 0.000294, 0.0),
    (2, 0, -1, -2, 0.0, 8.752),
)

# (D, M, M', F, sigma_b [deg])
B_TERMS: Tuple[Tuple[int, int, int, int, float], ...] = (
    (0, 0, 0, 1, 5.128122),
    (0, 0, 1, 1, 0.280602),
    (0, 0, 1, -1, 0.277693),
    (2, 0, 0, -1, 0.173237),
    (2, 0, -1, 1, 0.055413),
    (2, 0, -1, -1, 0.046271),
    (2, 0, 0, 1, 0.032573),
    (0, 0, 2, 1, 0.017198),
    (2, 0, 1, -1, 0.009266),
    (0, 0, 2, -1, 0.008822),
    (2, -1, 0, -1, 0.008216),
    (2, 0, -2, -1, 0.004324),
    (2, 0, 1, 1, 0.004200),
    (2, 1, 0, -1, -0.003359),
    (2, -1, -1, 1, 0.002463),
    (2, -1, 0, 1, 0.002211),
    (2, -1, -1, -1, 0.002065),
    (0, 1, -1, -1, -0.001870),
    (4, 0, -1, -1, 0.001828),
    (0, 1, 0, 1, -0.001794),
    (0, 0, 0, 3, -0.001749),
    (0, 1, -1, 1, -0.001565),
    (1, 0, 0, 1, -0.001491),
    (0, 1, 1, 1, -0.001475),
    (0, 1, 1, -1, -0.001410),
    (0, 1, 0, -1, -0.001344),
    (1, 0, 0, -1, -0.001335),
    (0, 0, 3, 1, 0.001107),
    (4, 0, 0, -1, 0.001021),
    (4, 0, -1, 1, 0.000833),
    (0, 0, 1, -3, 0.000777),
    (4, 0, -2, 1, 0.000671),
    (2, 0, 0, -3, 0.000607),
    (2, 0, 2, -1, 0.000596),
    (2, -1, 1, -1, 0.000491),
    (2, 0, -2, 1, -0.000451),
    (0, 0, 3, -1, 0.000439),
    (2, 0, 2, 1, 0.000422),
    (2, 0, -3, -1, 0.000421),
    (2, 1, -1, 1, -0.000366),
    (2, 1, 0, 1, -0.000351),
    (4, 0, 0, 1, 0.000331),
    (2, -1, 1, 1, 0.000315),
    (2, -2, 0, -1, 0.000302),
    (0, 0, 1, 3, -0.000283),
    (2, 1, 1, -1, -0.000229),
    (1, 1, 0, -1, 0.000223),
    (1, 1, 0, 1, 0.000223),
    (0, 1, -2, -1, -0.000220),
    (2, 1, -1, -1, -0.000220),
    (1, 0, 1, 1, -0.000185),
    (2, -1, -2, -1, 0.000181),
    (0, 1, 2, 1, -0.000177),
    (4, 0, -2, -1, 0.000176),
    (4, -1, -1, -1, 0.000166),
    (1, 0, 1, -1, -0.000164),
    (4, 0, 1, -1, 0.000132),
    (1, 0, -1, -1, -0.000119),
    (4, -1, 0, -1, 0.000115),
    (2, -2, 0, 1, 0.000107),
)


# ============================================================
# Mean elements (jd wrappers)
# ============================================================

def mean_elongation_from_sun(jd: float) -> Angle:
    return aa.moon_mean_elongation_deg(aa.T_centuries(require_jd(jd)))


def mean_anomaly(jd: float) -> Angle:
    return aa.moon_mean_anomaly_deg(aa.T_centuries(require_jd(jd)))


def latitude_argument(jd: float) -> Angle:
    return aa.moon_latitude_argument_deg(aa.T_centuries(require_jd(jd)))


def mean_longitude_of_ascending_node(jd: float) -> Angle:
    return aa.moon_ascending_node_deg(aa.T_centuries(require_jd(jd)))


def mean_longitude(jd: float) -> Angle:
    return aa.moon_mean_longitude_deg(aa.T_centuries(require_jd(jd)))


# ============================================================
# Series
# ============================================================

@dataclass(frozen=True)
class LunarPosition:
    """Geometric geocentric ecliptic position, mean equinox of date."""
    lon_deg: float
    lat_deg: float
    distance_km: float


def lunar_ecliptic_position(jd: float) -> LunarPosition:
    """
    Example (Meeus 47.a): 1992-04-12 0h TD ->
        lon 133.162655, lat -3.229126, distance 368409.7 km
    """
    T = aa.T_centuries(require_jd(jd))
    Lp = aa.moon_mean_longitude_deg(T)
    fa = aa.fundamental_args(T)
    E = aa.eccentricity_factor(T)
    E_pow = (1.0, E, E * E)

    D = math.radians(fa.D_deg)
    M = math.radians(fa.M_deg)
    Mp = math.radians(fa.Mp_deg)
    F = math.radians(fa.F_deg)

    sum_l = 0.0
    sum_r = 0.0
    for d, m, mp, f, sl, sr in LR_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        e = E_pow[abs(m)]
        sum_l += sl * e * math.sin(arg)
        sum_r += sr * e * math.cos(arg)

    sum_b = 0.0
    for d, m, mp, f, sb in B_TERMS:
        arg = d * D + m * M + mp * Mp + f * F
        sum_b += sb * E_pow[abs(m)] * math.sin(arg)

    A1 = math.radians(119.75 + 131.849 * T)
    A2 = math.radians(53.09 + 479264.290 * T)
    A3 = math.radians(313.45 + 481266.484 * T)
    Lp_r = math.radians(Lp)

    sum_l += (
        0.003958 * math.sin(A1)
        + 0.001962 * math.sin(Lp_r - F)
        + 0.000318 * math.sin(A2)
    )
    sum_b += (
        -0.002235 * math.sin(Lp_r)
        + 0.000382 * math.sin(A3)
        + 0.000175 * math.sin(A1 - F)
        + 0.000175 * math.sin(A1 + F)
        + 0.000127 * math.sin(Lp_r - Mp)
        - 0.000115 * math.sin(Lp_r + Mp)
    )

    return LunarPosition(
        lon_deg=reduce(Lp + sum_l),
        lat_deg=reduce(sum_b),
        distance_km=MEAN_DISTANCE_KM + sum_r,
    )


# ============================================================
# Apparent position
# ============================================================

class Moon(TrackedBody):
    """
    Geocentric position of the Moon.

        moon = Moon()
        moon.update_position(CalendarDate(2011, 5, 22 + day_fraction(3, 20)))
        hz = moon.local_coordinates(loc)

    Not internally synchronized; callers must serialize access per instance.
    """

    def update_position(self, date: CalendarDate) -> BodyPosition:
        jd = from_calendar_date(date)
        pos = lunar_ecliptic_position(jd)
        eq = ecliptic_to_equatorial(jd, pos.lon_deg, pos.lat_deg)
        self._position = BodyPosition(
            ra_deg=eq.ra_deg,
            dec_deg=eq.dec_deg,
            jd=jd,
            jd_ut=jd,
            distance_au=pos.distance_km / AU_KM,
        )
        return self._position

    def local_coordinates(self, loc: GeoLocation) -> HorizontalCoordinates:
        """Same as Sun.local_coordinates: the stored ra/dec become topocentric."""
        self._position, hz = topocentric_local(self._require_position(), loc)
        return hz
