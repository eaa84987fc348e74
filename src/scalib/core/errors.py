class ScalibError(Exception):
    """Base error."""

class InvalidInputError(ScalibError, ValueError):
    """Raised for out-of-domain input (negative JD, year < -4712, bad day number, ...)."""

class PositionNotComputedError(ScalibError, RuntimeError):
    """Raised when local coordinates are requested before any position update."""

class PlanetDataUnavailableError(ScalibError, RuntimeError):
    """Raised when a planet data provider cannot serve a request (or is not installed)."""
