"""
scalib.reference.julian_day
---------------------------
Calendar <-> Julian Day conversions (Meeus ch. 7), sidereal time (ch. 12)
and the dynamical time offset.

Dates use astronomical year numbering on the Julian calendar up to
1582-10-04 and the Gregorian calendar from 1582-10-15 on. Julian Days are
never negative: the lower bound is -4712-01-01 12:00.
"""

from __future__ import annotations

import math
from typing import Optional

from scalib.core.errors import InvalidInputError
from scalib.core.time import J2000, SECS_IN_DAY, require_jd
from scalib.core.types import Angle, CalendarDate, Weekday
from .angle import reduce
from .astro_args import T_centuries, tau_millennia
from .deltat import DEFAULT_DELTA_T, DeltaTModel

MIN_YEAR = -4712
GREGORIAN_START = (1582, 10, 15)
GREGORIAN_START_JD = 2299161  # integer part of jd + 0.5 at 1582-10-15


# ============================================================
# Calendar rules
# ============================================================

def is_gregorian(date: CalendarDate) -> bool:
    """True if `date` falls on or after the Gregorian reform (1582-10-15)."""
    return (date.year, int(date.month), float(date.day)) >= GREGORIAN_START


def is_leap_year(year: int) -> bool:
    """Julian rule through 1582, Gregorian rule afterwards."""
    if year <= GREGORIAN_START[0]:
        return year % 4 == 0
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


# ============================================================
# Calendar <-> JD
# ============================================================

def from_calendar_date(date: CalendarDate) -> float:
    """
    Julian Day of a calendar date (Meeus 7.1).

    Example (Meeus 7.a): 1957-10-04.81 -> 2436116.31
    """
    if date is None:
        raise InvalidInputError("date is required")
    if date.year < MIN_YEAR:
        raise InvalidInputError(f"year must be >= {MIN_YEAR}, got {date.year}")

    y, m = date.year, int(date.month)
    if m <= 2:
        y -= 1
        m += 12

    b = 0
    if is_gregorian(date):
        a = y // 100
        b = 2 - a + a // 4

    jd = math.trunc(365.25 * (y + 4716)) + math.trunc(30.6001 * (m + 1)) + float(date.day) + b - 1524.5
    if jd < 0.0:
        raise InvalidInputError(f"{date} precedes the Julian Day epoch")
    return jd


def to_calendar_date(jd: float) -> CalendarDate:
    """Inverse of from_calendar_date (Meeus ch. 7)."""
    jd = require_jd(jd) + 0.5
    z = math.trunc(jd)
    f = jd - z

    if z < GREGORIAN_START_JD:
        a = z
    else:
        alpha = math.trunc((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.trunc(alpha / 4)

    b = a + 1524
    c = math.trunc((b - 122.1) / 365.25)
    d = math.trunc(365.25 * c)
    e = math.trunc((b - d) / 30.6001)

    day = b - d - math.trunc(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return CalendarDate(year, month, day)


def weekday(jd: float) -> Weekday:
    jd = require_jd(jd)
    return Weekday(int(math.fmod(jd + 1.5, 7.0)))


def day_of_year(jd: float) -> int:
    """Ordinal day of the year (1 = January 1st)."""
    date = to_calendar_date(jd)
    k = 1 if is_leap_year(date.year) else 2
    m = date.month
    return (275 * m) // 9 - k * ((m + 9) // 12) + int(date.day) - 30


def from_day_of_year(year: int, num: float) -> float:
    """Julian Day of day `num` of `year`; a fractional part of `num` is the time of day."""
    if year < MIN_YEAR:
        raise InvalidInputError(f"year must be >= {MIN_YEAR}, got {year}")
    leap = is_leap_year(year)
    if num < 1 or num >= (367 if leap else 366):
        raise InvalidInputError(f"day number out of range for {year}: {num!r}")

    n = int(num)
    k = 1 if leap else 2
    month = 1 if n < 32 else int(9.0 * (k + n) / 275.0 + 0.98)
    day = n - (275 * month) // 9 + k * ((month + 9) // 12) + 30
    return from_calendar_date(CalendarDate(year, month, day + (num - n)))


# ============================================================
# Time scales
# ============================================================

def centuries_since_2000(jd: float) -> float:
    return T_centuries(require_jd(jd))


def millennia_since_2000(jd: float) -> float:
    return tau_millennia(require_jd(jd))


def dynamical_time_offset(jd: float, model: Optional[DeltaTModel] = None) -> float:
    """Delta T as a fraction of a day, to be added to a UT Julian Day."""
    jd = require_jd(jd)
    model = model or DEFAULT_DELTA_T
    return model.delta_t_seconds_jd(jd) / SECS_IN_DAY


# ============================================================
# Sidereal time
# ============================================================

def mean_sidereal_time(jd: float) -> Angle:
    """Mean sidereal time at Greenwich (Meeus 12.4), reduced."""
    jd = require_jd(jd)
    t = T_centuries(jd)
    theta0 = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t * t
        - (t ** 3) / 38710000.0
    )
    return reduce(theta0)


def sidereal_time(jd: float) -> Angle:
    """
    Apparent sidereal time at Greenwich, reduced.

    Mean sidereal time plus the equation of the equinoxes (delta psi * cos eps).
    Example (Meeus 12.a): 1987-04-10 0h UT -> 13h10m46.1351s
    """
    # earth imports this module
    from . import earth

    jd = require_jd(jd)
    nut = earth.nutation(jd)
    eps = math.radians(earth.ecliptic_obliquity(jd))
    return reduce(mean_sidereal_time(jd) + nut.longitude_deg * math.cos(eps))
