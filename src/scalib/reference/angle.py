"""
scalib.reference.angle
----------------------
Angles as plain floats of decimal degrees.

Nothing here normalizes on construction. `reduce` is the explicit
normalization step and every reader (to_*, get_*, trig helpers) applies it
first, so reduce(a) always lies in (-360, 360) with the sign of `a`.

Sign convention for piecewise values (d/m/s/ms or h/m/s/ms): components are
magnitudes and the whole angle is negative if any component is negative.
On extraction the first non-zero component carries the sign:

    from_degrees(30, 23, 50)   -> 30, 23, 50, 0
    from_degrees(0, -24, 34)   -> 0, -24, 34, 0
    from_degrees(0, 0, -5)     -> 0, 0, -5, 0
"""

from __future__ import annotations

import math
from math import fmod
from typing import Tuple

from scalib.core.types import Angle


# ------------------------------------------------------------
# Normalization
# ------------------------------------------------------------

def reduce(angle: Angle) -> Angle:
    """angle - 360*trunc(angle/360); truncation toward zero."""
    return fmod(angle, 360.0)

def normalize(angle: Angle) -> Angle:
    """Wrap degrees to [0,360)."""
    y = fmod(angle, 360.0)
    if y < 0:
        y += 360.0
    return y

def wrap180(angle: Angle) -> Angle:
    """Wrap degrees to [-180,180)."""
    return (angle + 180.0) % 360.0 - 180.0

def arcsec_to_deg(arcsec: float) -> float:
    return arcsec / 3600.0


# ------------------------------------------------------------
# Construction
# ------------------------------------------------------------

def _signed(magnitude: float, *components: float) -> Angle:
    return -magnitude if any(c < 0 for c in components) else magnitude

def from_degrees(degrees: int, arcmins: int = 0, arcsecs: int = 0, marcsecs: float = 0.0) -> Angle:
    mag = abs(degrees) + (abs(arcmins) + (abs(arcsecs) + abs(marcsecs) / 1000.0) / 60.0) / 60.0
    return _signed(mag, degrees, arcmins, arcsecs, marcsecs)

def from_hours(hours: int, mins: int = 0, secs: int = 0, msecs: float = 0.0) -> Angle:
    mag = abs(hours) + (abs(mins) + (abs(secs) + abs(msecs) / 1000.0) / 60.0) / 60.0
    return _signed(15.0 * mag, hours, mins, secs, msecs)

def from_radians(rads: float) -> Angle:
    return math.degrees(rads)

def from_decimal_degrees(value: float) -> Angle:
    return float(value)


# ------------------------------------------------------------
# Conversion (all reduce first)
# ------------------------------------------------------------

def to_degrees(angle: Angle) -> float:
    return reduce(angle)

def to_hours(angle: Angle) -> float:
    return reduce(angle) / 15.0

def to_radians(angle: Angle) -> float:
    return math.radians(reduce(angle))


# ------------------------------------------------------------
# Sexagesimal components
# ------------------------------------------------------------

def _split(value: float) -> Tuple[int, int, int, float]:
    """
    Split |value| into (units, 1/60, 1/3600, 1/3600000) and give the sign to
    the first non-zero part.

    Works on the total count of 1/3600 units rounded to 1e-9, which keeps
    values like 30 + 23/60 + 50/3600 from reading back as 49.999...
    """
    total = round(abs(value) * 3600.0, 9)
    whole = int(total // 3600.0)
    rest = total - whole * 3600.0
    minutes = int(rest // 60.0)
    rest -= minutes * 60.0
    seconds = int(rest)
    millis = round((rest - seconds) * 1000.0, 6)

    parts = [whole, minutes, seconds, millis]
    if value < 0:
        for i, p in enumerate(parts):
            if p != 0:
                parts[i] = -p
                break
    return parts[0], parts[1], parts[2], parts[3]

def to_dms(angle: Angle) -> Tuple[int, int, int, float]:
    """(degrees, arcmins, arcsecs, milliarcsecs) of the reduced angle."""
    return _split(reduce(angle))

def to_hms(angle: Angle) -> Tuple[int, int, int, float]:
    """(hours, mins, secs, milliseconds) of the reduced angle."""
    return _split(reduce(angle) / 15.0)

def get_degrees(angle: Angle) -> int:
    return to_dms(angle)[0]

def get_arcmins(angle: Angle) -> int:
    return to_dms(angle)[1]

def get_arcsecs(angle: Angle) -> int:
    return to_dms(angle)[2]

def get_milliarcsecs(angle: Angle) -> float:
    return to_dms(angle)[3]

def get_hours(angle: Angle) -> int:
    return to_hms(angle)[0]

def get_mins(angle: Angle) -> int:
    return to_hms(angle)[1]

def get_secs(angle: Angle) -> int:
    return to_hms(angle)[2]

def get_milliseconds(angle: Angle) -> float:
    return to_hms(angle)[3]


# ------------------------------------------------------------
# Trigonometry
# ------------------------------------------------------------

def get_sin(angle: Angle) -> float:
    return math.sin(to_radians(angle))

def get_cos(angle: Angle) -> float:
    return math.cos(to_radians(angle))

def get_sincos(angle: Angle) -> Tuple[float, float]:
    r = to_radians(angle)
    return math.sin(r), math.cos(r)
