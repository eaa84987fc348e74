"""
scalib.reference.stellar
------------------------
Apparent place of a fixed star (Meeus ch. 21, 23).

Starting from the J2000 catalogue position each update applies, in order:

1. proper motion, linearly over the Julian years elapsed since J2000;
2. precession, rigorous zeta/z/theta rotation (IAU 1976);
3. annual aberration, classic formula including the e-terms;
4. nutation.

Corrections 3 and 4 are both evaluated at the precessed position and added
together.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from scalib.core.body import TrackedBody
from scalib.core.time import J2000, require_jd
from scalib.core.types import (
    Angle,
    BodyPosition,
    CalendarDate,
    EclipticCorrection,
    EquatorialCoordinates,
    EquatorialCorrection,
    GeoLocation,
    HorizontalCoordinates,
)
from . import astro_args as aa
from .angle import reduce
from .coordinates import equatorial_to_local
from .deltat import DEFAULT_DELTA_T, DeltaTModel
from .earth import (
    aberration_constant,
    ecliptic_obliquity,
    nutation,
    orbit_eccentricity,
    perihelion_longitude,
)
from .julian_day import dynamical_time_offset, from_calendar_date
from .solar import true_longitude

# Declination above which precession uses acos(sqrt(A^2+B^2))
NEAR_POLE_DEG = 80.0


@dataclass(frozen=True)
class StarElements:
    """J2000 catalogue position and annual proper motion (degrees, degrees/year)."""
    ra2000_deg: Angle
    dec2000_deg: Angle
    ra_motion_deg: Angle = 0.0
    dec_motion_deg: Angle = 0.0


# ============================================================
# Corrections
# ============================================================

def precession(jd: float, elements: StarElements) -> EquatorialCoordinates:
    """
    Mean position at `jd` (equinox of date) including proper motion.

    Example (Meeus 21.b): theta Persei at 2028-11-13.19 TD ->
        ra 41.547214, dec 49.348483
    """
    T = aa.T_centuries(require_jd(jd))
    years = T * 100.0
    ra0 = math.radians(reduce(elements.ra2000_deg + years * elements.ra_motion_deg))
    dec0 = math.radians(reduce(elements.dec2000_deg + years * elements.dec_motion_deg))
    zeta, z, theta = (math.radians(a) for a in aa.precession_angles_deg(T))

    A = math.cos(dec0) * math.sin(ra0 + zeta)
    B = math.cos(theta) * math.cos(dec0) * math.cos(ra0 + zeta) - math.sin(theta) * math.sin(dec0)
    C = math.sin(theta) * math.cos(dec0) * math.cos(ra0 + zeta) + math.cos(theta) * math.sin(dec0)

    ra = math.atan2(A, B) + z
    if abs(elements.dec2000_deg) > NEAR_POLE_DEG:
        dec = math.copysign(math.acos(min(1.0, math.hypot(A, B))), C)
    else:
        dec = math.asin(C)
    return EquatorialCoordinates(ra_deg=reduce(math.degrees(ra)), dec_deg=math.degrees(dec))


def equatorial_aberration(jd: float, ra: Angle, dec: Angle) -> EquatorialCorrection:
    """Annual aberration in right ascension and declination (Meeus 23.3)."""
    k = math.radians(aberration_constant())
    e = orbit_eccentricity(jd)
    sun = math.radians(true_longitude(jd))
    pi = math.radians(perihelion_longitude(jd))
    eps = math.radians(ecliptic_obliquity(jd))
    a = math.radians(ra)
    d = math.radians(dec)

    cos_a, sin_a = math.cos(a), math.sin(a)
    cos_d, sin_d = math.cos(d), math.sin(d)
    cos_e = math.cos(eps)
    q = math.tan(eps) * cos_d - sin_a * sin_d

    d_ra = (
        -k * (cos_a * math.cos(sun) * cos_e + sin_a * math.sin(sun)) / cos_d
        + e * k * (cos_a * math.cos(pi) * cos_e + sin_a * math.sin(pi)) / cos_d
    )
    d_dec = (
        -k * (math.cos(sun) * cos_e * q + cos_a * sin_d * math.sin(sun))
        + e * k * (math.cos(pi) * cos_e * q + cos_a * sin_d * math.sin(pi))
    )
    return EquatorialCorrection(d_ra_deg=math.degrees(d_ra), d_dec_deg=math.degrees(d_dec))


def ecliptic_aberration(jd: float, lon: Angle, lat: Angle) -> EclipticCorrection:
    """Annual aberration in ecliptic longitude and latitude (Meeus 23.2)."""
    k = aberration_constant()
    e = orbit_eccentricity(jd)
    sun = math.radians(true_longitude(jd))
    pi = math.radians(perihelion_longitude(jd))
    l = math.radians(lon)
    b = math.radians(lat)

    d_lon = (-k * math.cos(sun - l) + e * k * math.cos(pi - l)) / math.cos(b)
    d_lat = -k * math.sin(b) * (math.sin(sun - l) - e * math.sin(pi - l))
    return EclipticCorrection(d_lon_deg=d_lon, d_lat_deg=d_lat)


def equatorial_nutation(jd: float, ra: Angle, dec: Angle) -> EquatorialCorrection:
    """Nutation in right ascension and declination (Meeus 23.1)."""
    nut = nutation(jd)
    eps = math.radians(ecliptic_obliquity(jd))
    a = math.radians(ra)
    tan_d = math.tan(math.radians(dec))

    d_ra = (math.cos(eps) + math.sin(eps) * math.sin(a) * tan_d) * nut.longitude_deg - math.cos(a) * tan_d * nut.obliquity_deg
    d_dec = math.sin(eps) * math.cos(a) * nut.longitude_deg + math.sin(a) * nut.obliquity_deg
    return EquatorialCorrection(d_ra_deg=d_ra, d_dec_deg=d_dec)


def ecliptic_nutation(jd: float) -> EclipticCorrection:
    """Nutation shifts ecliptic longitude only."""
    return EclipticCorrection(d_lon_deg=nutation(jd).longitude_deg, d_lat_deg=0.0)


# ============================================================
# Star
# ============================================================

class Star(TrackedBody):
    """
    A fixed star given by its J2000 position and proper motion.

        star = Star(from_hours(20, 41, 25, 900), from_degrees(45, 16, 49),
                    from_degrees(0, 0, 0, 1.99), from_degrees(0, 0, 0, 1.95))
        star.update_position(CalendarDate(2011, 10, 13.5))
        hz = star.local_coordinates(loc)

    Before the first update `position` is the J2000 catalogue position;
    local_coordinates still requires an update.

    Not internally synchronized; callers must serialize access per instance.
    """

    def __init__(
        self,
        ra2000: Angle,
        dec2000: Angle,
        ra_motion: Angle = 0.0,
        dec_motion: Angle = 0.0,
        delta_t: Optional[DeltaTModel] = None,
    ) -> None:
        super().__init__()
        self.elements = StarElements(
            ra2000_deg=reduce(ra2000),
            dec2000_deg=reduce(dec2000),
            ra_motion_deg=reduce(ra_motion),
            dec_motion_deg=reduce(dec_motion),
        )
        self.delta_t = delta_t or DEFAULT_DELTA_T
        self._catalogue = BodyPosition(
            ra_deg=self.elements.ra2000_deg,
            dec_deg=self.elements.dec2000_deg,
            jd=J2000,
            jd_ut=J2000,
        )

    @property
    def position(self) -> BodyPosition:
        return self._position if self._position is not None else self._catalogue

    def update_position(self, date: CalendarDate) -> BodyPosition:
        jd_ut = from_calendar_date(date)
        jd = jd_ut + dynamical_time_offset(jd_ut, self.delta_t)

        mean = precession(jd, self.elements)
        ab = equatorial_aberration(jd, mean.ra_deg, mean.dec_deg)
        nu = equatorial_nutation(jd, mean.ra_deg, mean.dec_deg)

        self._position = BodyPosition(
            ra_deg=reduce(mean.ra_deg + ab.d_ra_deg + nu.d_ra_deg),
            dec_deg=mean.dec_deg + ab.d_dec_deg + nu.d_dec_deg,
            jd=jd,
            jd_ut=jd_ut,
        )
        return self._position

    def local_coordinates(self, loc: GeoLocation) -> HorizontalCoordinates:
        """Azimuth/altitude without parallax."""
        pos = self._require_position()
        return equatorial_to_local(pos.jd_ut, loc, pos.ra_deg, pos.dec_deg)
