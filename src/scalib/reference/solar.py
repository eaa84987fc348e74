"""
scalib.reference.solar
----------------------
Mean elements of the Sun (Meeus ch. 25, 28) and the apparent-place pipeline:

    jd      = jd_ut + delta_T
    L, B, R = heliocentric Earth (planet data provider)
    lon     = L + 180 + dpsi - 20.4898"/R
    lat     = -B
    ra, dec = ecliptic -> equatorial
"""

from __future__ import annotations

import math
from typing import Optional, Union

from scalib.core.body import TrackedBody
from scalib.core.errors import PositionNotComputedError
from scalib.core.time import require_jd
from scalib.core.types import (
    Angle,
    BodyPosition,
    CalendarDate,
    EclipticCoordinates,
    GeoLocation,
    HorizontalCoordinates,
    Planet,
)
from scalib.ephemeris import PlanetDataProvider, planet_data
from . import astro_args as aa
from .angle import from_degrees, reduce
from .coordinates import ecliptic_to_equatorial, topocentric_local
from .deltat import DEFAULT_DELTA_T, DeltaTModel
from .earth import nutation
from .julian_day import dynamical_time_offset, from_calendar_date

# Annual aberration of the Sun at 1 AU
SUN_ABERRATION_DEG = from_degrees(0, 0, -20, 489.8)


# ============================================================
# Mean elements
# ============================================================

def mean_longitude(jd: float) -> Angle:
    """Geometric mean longitude referred to the mean equinox of date (Meeus 28.2)."""
    tau = aa.tau_millennia(require_jd(jd))
    return reduce(
        280.4664567
        + 360007.6982779 * tau
        + 0.03032028 * tau ** 2
        + tau ** 3 / 49931.0
        - tau ** 4 / 15300.0
        - tau ** 5 / 2000000.0
    )


def mean_anomaly(jd: float) -> Angle:
    return aa.sun_mean_anomaly_deg(aa.T_centuries(require_jd(jd)))


def equation_of_center(jd: float) -> Angle:
    T = aa.T_centuries(require_jd(jd))
    M = math.radians(aa.sun_mean_anomaly_deg(T))
    return (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M)
        + 0.000289 * math.sin(3.0 * M)
    )


def true_longitude(jd: float) -> Angle:
    """
    Mean longitude plus the equation of center.

    Example (Meeus 25.a): 1992-10-13 0h TD -> 199.90988
    """
    return reduce(mean_longitude(jd) + equation_of_center(jd))


# ============================================================
# Apparent position
# ============================================================

class Sun(TrackedBody):
    """
    Apparent geocentric position of the Sun.

        sun = Sun()
        sun.update_position(CalendarDate(2011, 6, 15 + day_fraction(13, 54)))
        hz = sun.local_coordinates(GeoLocation(from_degrees(-30, 32, 41), from_degrees(60, 16, 31)))

    `provider` is a planet data provider (or its registered name) used for
    the Earth's heliocentric position; `delta_t` is the Delta T model.

    Not internally synchronized; callers must serialize access per instance.
    """

    def __init__(
        self,
        provider: Union[str, PlanetDataProvider, None] = None,
        delta_t: Optional[DeltaTModel] = None,
    ) -> None:
        super().__init__()
        self.provider = provider
        self.delta_t = delta_t or DEFAULT_DELTA_T
        self._ecliptic: Optional[EclipticCoordinates] = None

    @property
    def ecliptic(self) -> EclipticCoordinates:
        """Apparent ecliptic longitude/latitude from the last update."""
        if self._ecliptic is None:
            raise PositionNotComputedError("Sun: update_position() has not been called")
        return self._ecliptic

    def update_position(self, date: CalendarDate) -> BodyPosition:
        jd_ut = from_calendar_date(date)
        jd = jd_ut + dynamical_time_offset(jd_ut, self.delta_t)

        earth = planet_data(Planet.EARTH, jd, self.provider)
        lon = earth.lon_deg + 180.0
        lat = -earth.lat_deg
        lon += nutation(jd).longitude_deg
        lon += SUN_ABERRATION_DEG / earth.distance_au
        lon = reduce(lon)

        eq = ecliptic_to_equatorial(jd, lon, lat)
        self._ecliptic = EclipticCoordinates(lon_deg=lon, lat_deg=lat)
        self._position = BodyPosition(
            ra_deg=eq.ra_deg,
            dec_deg=eq.dec_deg,
            jd=jd,
            jd_ut=jd_ut,
            distance_au=earth.distance_au,
        )
        return self._position

    def local_coordinates(self, loc: GeoLocation) -> HorizontalCoordinates:
        """
        Azimuth (from south, westward) and altitude for an observer at `loc`.

        The stored ra/dec are replaced by their topocentric (parallax
        corrected) values, so a second call corrects them again.
        """
        self._position, hz = topocentric_local(self._require_position(), loc)
        return hz
