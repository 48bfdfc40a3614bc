"""Validation errors raised before any route is computed."""

from __future__ import annotations


class StraightLineError(ValueError):
    """Base class for rejected routing requests."""


class InvalidInterval(StraightLineError):  # noqa: N818
    """The sampling interval is not a positive, finite number of meters."""


class InsufficientWaypoints(StraightLineError):  # noqa: N818
    """Fewer than two waypoints were supplied."""


class InvalidCoordinate(StraightLineError):  # noqa: N818
    """A waypoint carries a non-finite latitude or longitude."""
