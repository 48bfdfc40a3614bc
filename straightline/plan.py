"""High-level entrypoint that turns loose coordinates into a routed line."""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

from .assemble import RouteResult, assemble_route
from .geo import Coordinate, GeoPoint, Waypoint
from .logger import Logger, LoggingMode
from .options import RouterOptions

WaypointLike = Union[Waypoint, GeoPoint, Coordinate]


def plan(
    waypoints: Sequence[WaypointLike],
    options: RouterOptions | Mapping[str, Any] | None = None,
    logging_mode: LoggingMode | str = LoggingMode.NONE,
) -> RouteResult:
    """Build a straight-line route visiting `waypoints` in order.

    Parameters
    ----------
    waypoints:
        `Waypoint`, `GeoPoint` or `(lon, lat)` entries, in visiting order.
    options:
        Router options, or a mapping of overrides on the defaults.
    logging_mode:
        Controls log verbosity. Accepts `LoggingMode` values or their
        lowercase string names.

    """
    logger = Logger(LoggingMode.from_value(logging_mode))
    resolved = RouterOptions.from_value(options)
    logger.debug("route.options", interval=resolved.interval)
    return assemble_route([as_waypoint(item) for item in waypoints], resolved, logger)


def as_waypoint(value: WaypointLike) -> Waypoint:
    """Coerce a loose coordinate into a `Waypoint`."""
    if isinstance(value, Waypoint):
        return value
    if isinstance(value, GeoPoint):
        return Waypoint(value)
    return Waypoint(GeoPoint.from_coordinate(value))
