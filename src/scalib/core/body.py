from __future__ import annotations
from typing import Optional, Protocol

from .errors import PositionNotComputedError
from .types import BodyPosition, CalendarDate, GeoLocation, HorizontalCoordinates


class CelestialBody(Protocol):
    @property
    def position(self) -> BodyPosition: ...
    def update_position(self, date: CalendarDate) -> BodyPosition: ...
    def local_coordinates(self, loc: GeoLocation) -> HorizontalCoordinates: ...


class TrackedBody:
    """
    Holds the most recently computed position of a body.

    States: unpositioned (after construction) and positioned (after the first
    update_position). Local-coordinate queries in the unpositioned state raise
    PositionNotComputedError.

    Instances are not internally synchronized; callers must serialize access
    per instance.
    """

    def __init__(self) -> None:
        self._position: Optional[BodyPosition] = None

    @property
    def is_positioned(self) -> bool:
        return self._position is not None

    @property
    def position(self) -> BodyPosition:
        return self._require_position()

    def _require_position(self) -> BodyPosition:
        if self._position is None:
            raise PositionNotComputedError(
                f"{type(self).__name__}: update_position() must be called before querying local coordinates"
            )
        return self._position

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self._position!r})"
