"""scalib public API.

Keep this surface small: users should mostly interact with names re-exported here.
Lower-level helpers live in scalib.reference.* and scalib.ephemeris.
"""

from .core.errors import (
    InvalidInputError,
    PlanetDataUnavailableError,
    PositionNotComputedError,
    ScalibError,
)
from .core.time import day_fraction
from .core.types import (
    BodyPosition,
    CalendarDate,
    EclipticCoordinates,
    EquatorialCoordinates,
    GeoLocation,
    HorizontalCoordinates,
    Month,
    Planet,
    Weekday,
)
from .ephemeris import planet_data, register_provider, set_default_provider
from .reference.angle import from_degrees, from_hours, from_radians
from .reference.deltat import ConstantDeltaT, StephensonHouldenDeltaT
from .reference.julian_day import from_calendar_date, sidereal_time, to_calendar_date
from .reference.lunar import Moon
from .reference.solar import Sun
from .reference.stellar import Star

__all__ = [
    "ScalibError",
    "InvalidInputError",
    "PositionNotComputedError",
    "PlanetDataUnavailableError",
    "day_fraction",
    "BodyPosition",
    "CalendarDate",
    "EclipticCoordinates",
    "EquatorialCoordinates",
    "GeoLocation",
    "HorizontalCoordinates",
    "Month",
    "Planet",
    "Weekday",
    "planet_data",
    "register_provider",
    "set_default_provider",
    "from_degrees",
    "from_hours",
    "from_radians",
    "ConstantDeltaT",
    "StephensonHouldenDeltaT",
    "from_calendar_date",
    "to_calendar_date",
    "sidereal_time",
    "Sun",
    "Moon",
    "Star",
]
