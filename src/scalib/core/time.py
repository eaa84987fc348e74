from __future__ import annotations

import math

from .errors import InvalidInputError

SECS_IN_DAY = 86400.0
DAYS_IN_CENTURY = 36525.0
DAYS_IN_MILLENNIUM = 365250.0
AU_KM = 149597870.7
J2000 = 2451545.0  # 2000-01-01 12:00


def day_fraction(hours: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    """Time of day as a fraction of a day, for building CalendarDate.day values."""
    return (hours * 3600.0 + minutes * 60.0 + seconds) / SECS_IN_DAY


def require_jd(jd: float) -> float:
    """Return jd as float, or raise InvalidInputError if it is negative or not finite."""
    jd = float(jd)
    if not math.isfinite(jd):
        raise InvalidInputError(f"Julian Day must be finite, got {jd!r}")
    if jd < 0.0:
        raise InvalidInputError(f"Julian Day must be non-negative, got {jd!r}")
    return jd
