"""Assemble interpolated legs into a single routing alternative."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import pairwise
from typing import Any, Sequence

from shapely.geometry import LineString

from .errors import InsufficientWaypoints, InvalidCoordinate
from .geo import GeoPoint, Waypoint
from .interpolate import interpolate
from .logger import Logger
from .options import RouterOptions

# Only maneuver a straight line can produce.
INSTRUCTION_TYPE = "Straight"
MIN_WAYPOINTS = 2


@dataclass(slots=True)
class Instruction:
    """One instruction per leg, pointing at the leg's first coordinate."""

    text: str
    distance: float
    time: float
    index: int
    type: str = INSTRUCTION_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "text": self.text,
            "distance": self.distance,
            "time": self.time,
            "index": self.index,
        }


@dataclass(slots=True)
class RouteSummary:
    total_distance: float = 0.0
    total_time: float = 0.0
    # Elevation is not modelled.
    total_ascend: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "totalDistance": self.total_distance,
            "totalTime": self.total_time,
            "totalAscend": self.total_ascend,
        }


@dataclass(slots=True)
class RouteResult:
    """A routing alternative in the shape itinerary and line renderers expect.

    Attributes
    ----------
    coordinates:
        Every leg's points concatenated in order. Leg boundaries are kept
        twice since each leg carries both of its endpoints.
    instructions:
        One `Instruction` per leg.
    summary:
        Distance/time/ascend totals.
    input_waypoints:
        The caller's waypoints, untouched.
    actual_waypoints:
        First and last coordinate, named after the first and last waypoint.
    waypoint_indices:
        Position in `coordinates` of each input waypoint.

    """

    coordinates: list[GeoPoint]
    instructions: list[Instruction]
    summary: RouteSummary
    input_waypoints: tuple[Waypoint, ...]
    actual_waypoints: tuple[Waypoint, Waypoint]
    waypoint_indices: list[int]
    name: str = ""

    def to_linestring(self) -> LineString:
        """Return the route geometry as a `(lng, lat)` LineString."""
        return LineString([point.as_coordinate() for point in self.coordinates])

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "coordinates": [_point_dict(point) for point in self.coordinates],
            "instructions": [item.to_dict() for item in self.instructions],
            "summary": self.summary.to_dict(),
            "inputWaypoints": [_waypoint_dict(wp) for wp in self.input_waypoints],
            "actualWaypoints": [_waypoint_dict(wp) for wp in self.actual_waypoints],
            "waypointIndices": list(self.waypoint_indices),
        }


def assemble_route(
    waypoints: Sequence[Waypoint],
    options: RouterOptions | None = None,
    logger: Logger | None = None,
) -> RouteResult:
    """Build one straight-line route through `waypoints`, in order.

    Raises
    ------
    InsufficientWaypoints
        Fewer than two waypoints were given.
    InvalidCoordinate
        A waypoint has a non-finite latitude or longitude.
    InvalidInterval
        The interval would oversample one of the legs.

    """
    if options is None:
        options = RouterOptions()
    if logger is None:
        logger = Logger()
    waypoints = tuple(waypoints)
    validate_waypoints(waypoints)

    coordinates: list[GeoPoint] = []
    instructions: list[Instruction] = []
    waypoint_indices: list[int] = []
    summary = RouteSummary()

    with logger.phase("route.assemble", waypoints=len(waypoints)):
        for index, (start, end) in enumerate(pairwise(waypoints)):
            leg = interpolate(
                start.lat_lng,
                end.lat_lng,
                options.interval,
                normalize=options.normalize_longitude,
            )
            logger.leg(index, leg)

            instructions.append(
                Instruction(
                    text=f"Azimuth {round_half_up(leg.azimuth)}",
                    distance=leg.distance,
                    time=leg.time,
                    index=len(coordinates),
                ),
            )
            summary.total_distance += leg.distance
            summary.total_time += leg.time
            waypoint_indices.append(len(coordinates))
            coordinates.extend(leg.points)

        waypoint_indices.append(len(coordinates) - 1)

    result = RouteResult(
        coordinates=coordinates,
        instructions=instructions,
        summary=summary,
        input_waypoints=waypoints,
        actual_waypoints=(
            Waypoint(coordinates[0], waypoints[0].name),
            Waypoint(coordinates[-1], waypoints[-1].name),
        ),
        waypoint_indices=waypoint_indices,
    )
    logger.route_stats(result)
    return result


def validate_waypoints(waypoints: Sequence[Waypoint]) -> None:
    """Reject inputs that cannot form a route."""
    if len(waypoints) < MIN_WAYPOINTS:
        msg = f"At least {MIN_WAYPOINTS} waypoints are required, got {len(waypoints)}."
        raise InsufficientWaypoints(msg)

    for index, waypoint in enumerate(waypoints):
        if not waypoint.lat_lng.is_finite():
            msg = (
                f"Waypoint #{index} has a non-finite coordinate: "
                f"lat={waypoint.lat_lng.lat!r}, lng={waypoint.lat_lng.lng!r}"
            )
            raise InvalidCoordinate(msg)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def _point_dict(point: GeoPoint) -> dict[str, float]:
    return {"lat": point.lat, "lng": point.lng}


def _waypoint_dict(waypoint: Waypoint) -> dict[str, Any]:
    return {"latLng": _point_dict(waypoint.lat_lng), "name": waypoint.name}
