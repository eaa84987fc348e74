"""
Frame transforms between equatorial, ecliptic and local horizontal
coordinates (Meeus ch. 13). The ecliptic frame uses the mean obliquity.

Local azimuth is measured from SOUTH, positive towards the west, and the
observer longitude is positive WEST of Greenwich.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Tuple

from scalib.core.errors import InvalidInputError
from scalib.core.time import require_jd
from scalib.core.types import (
    Angle,
    BodyPosition,
    EclipticCoordinates,
    EquatorialCoordinates,
    GeoLocation,
    HorizontalCoordinates,
)
from .angle import normalize
from .earth import ecliptic_obliquity, equatorial_parallax
from .julian_day import sidereal_time


def equatorial_to_ecliptic(jd: float, ra: Angle, dec: Angle) -> EclipticCoordinates:
    eps = math.radians(ecliptic_obliquity(jd))
    a = math.radians(ra)
    d = math.radians(dec)

    lon = math.atan2(math.sin(a) * math.cos(eps) + math.tan(d) * math.sin(eps), math.cos(a))
    lat = math.asin(math.sin(d) * math.cos(eps) - math.cos(d) * math.sin(eps) * math.sin(a))
    return EclipticCoordinates(lon_deg=math.degrees(lon), lat_deg=math.degrees(lat))


def ecliptic_to_equatorial(jd: float, lon: Angle, lat: Angle) -> EquatorialCoordinates:
    eps = math.radians(ecliptic_obliquity(jd))
    l = math.radians(lon)
    b = math.radians(lat)

    ra = math.atan2(math.sin(l) * math.cos(eps) - math.tan(b) * math.sin(eps), math.cos(l))
    dec = math.asin(math.sin(b) * math.cos(eps) + math.cos(b) * math.sin(eps) * math.sin(l))
    return EquatorialCoordinates(ra_deg=math.degrees(ra), dec_deg=math.degrees(dec))


def equatorial_to_local(jd: float, loc: GeoLocation, ra: Angle, dec: Angle) -> HorizontalCoordinates:
    """
    Azimuth/altitude for an observer at `loc`.

        H = theta0 - L - ra
        tan A = sin H / (cos H sin phi - tan dec cos phi)
        sin h = sin phi sin dec + cos phi cos dec cos H
    """
    jd = require_jd(jd)
    if loc is None:
        raise InvalidInputError("loc is required")

    H = math.radians(sidereal_time(jd) - loc.longitude_deg - ra)
    phi = math.radians(loc.latitude_deg)
    d = math.radians(dec)

    az = math.atan2(math.sin(H), math.cos(H) * math.sin(phi) - math.tan(d) * math.cos(phi))
    alt = math.asin(math.sin(phi) * math.sin(d) + math.cos(phi) * math.cos(d) * math.cos(H))
    return HorizontalCoordinates(azimuth_deg=math.degrees(az), altitude_deg=math.degrees(alt))


def azimuth_from_north(azimuth_deg: Angle) -> Angle:
    """Convert a south-based azimuth to the navigational (north-based, eastward) convention."""
    return normalize(azimuth_deg + 180.0)


def topocentric_local(position: BodyPosition, loc: GeoLocation) -> Tuple[BodyPosition, HorizontalCoordinates]:
    """
    Shift a geocentric position by the observer's parallax, then convert it to
    azimuth/altitude. Returns the shifted position together with the result.

    Sidereal time is evaluated at the position's UT instant.
    """
    if position.distance_au is None:
        raise InvalidInputError("parallax needs the body distance")
    par = equatorial_parallax(position.jd_ut, position.distance_au, loc, position.ra_deg, position.dec_deg)
    shifted = replace(
        position,
        ra_deg=position.ra_deg + par.d_ra_deg,
        dec_deg=position.dec_deg + par.d_dec_deg,
    )
    return shifted, equatorial_to_local(position.jd_ut, loc, shifted.ra_deg, shifted.dec_deg)
