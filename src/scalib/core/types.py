from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from .errors import InvalidInputError

# Decimal degrees. Not normalized on construction; see reference.angle.reduce.
Angle = float


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class Planet(IntEnum):
    MERCURY = 1
    VENUS = 2
    EARTH = 3
    MARS = 4
    JUPITER = 5
    SATURN = 6
    URANUS = 7
    NEPTUNE = 8


@dataclass(frozen=True)
class CalendarDate:
    """
    Civil date in astronomical year numbering (0 = 1 B.C.).

    The fractional part of `day` encodes the time of day (UT), e.g.
    14.5 is noon on the 14th.
    """
    year: int
    month: int
    day: float

    def __post_init__(self):
        if not 1 <= int(self.month) <= 12:
            raise InvalidInputError(f"month must be in 1..12, got {self.month!r}")
        if not 1.0 <= float(self.day) < 32.0:
            raise InvalidInputError(f"day must be in [1, 32), got {self.day!r}")

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CalendarDate":
        """Build from a datetime; naive values are taken as UTC."""
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        secs = dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1e6
        return cls(dt.year, dt.month, dt.day + secs / 86400.0)


@dataclass(frozen=True)
class GeoLocation:
    """Observer location. Longitude is positive WEST of Greenwich, latitude positive north."""
    longitude_deg: Angle
    latitude_deg: Angle

    @classmethod
    def from_east_longitude(cls, lon_deg_east: float, lat_deg: float) -> "GeoLocation":
        return cls(longitude_deg=-lon_deg_east, latitude_deg=lat_deg)


@dataclass(frozen=True)
class EquatorialCoordinates:
    ra_deg: Angle
    dec_deg: Angle


@dataclass(frozen=True)
class EclipticCoordinates:
    lon_deg: Angle
    lat_deg: Angle


@dataclass(frozen=True)
class HorizontalCoordinates:
    azimuth_deg: Angle   # from south, positive westward
    altitude_deg: Angle


@dataclass(frozen=True)
class Nutation:
    longitude_deg: Angle  # delta psi
    obliquity_deg: Angle  # delta epsilon


@dataclass(frozen=True)
class EquatorialCorrection:
    """Offsets to add to (ra, dec): parallax, aberration or nutation."""
    d_ra_deg: Angle
    d_dec_deg: Angle


@dataclass(frozen=True)
class EclipticCorrection:
    d_lon_deg: Angle
    d_lat_deg: Angle


@dataclass(frozen=True)
class HeliocentricPosition:
    """Heliocentric ecliptic coordinates (mean equinox of date)."""
    lon_deg: Angle
    lat_deg: Angle
    distance_au: float


@dataclass(frozen=True)
class BodyPosition:
    """
    Last computed apparent position of a body.

    jd is the instant the position was evaluated at (TT for Sun/Star, UT for
    the Moon); jd_ut is the civil instant the caller asked for and is the one
    sidereal time is evaluated at.
    """
    ra_deg: Angle
    dec_deg: Angle
    jd: float
    jd_ut: float
    distance_au: Optional[float] = None
