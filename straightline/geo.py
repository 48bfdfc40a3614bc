"""Spherical-Earth helpers shared across routing modules."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import osmnx as ox

Coordinate = tuple[float, float]  # (lon, lat)

# WGS-84 equatorial radius, used as the sphere radius for every computation.
EARTH_RADIUS_M = 6378137.0

_GREAT_CIRCLE = getattr(ox.distance, "great_circle", None)
if _GREAT_CIRCLE is None:
    try:
        _GREAT_CIRCLE = ox.distance.great_circle_vec
    except AttributeError as exc:  # pragma: no cover - legacy fallback guard
        msg = "OSMnx distance helpers lack both `great_circle` and `great_circle_vec`."
        raise AttributeError(msg) from exc


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in degrees."""

    lat: float
    lng: float

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> GeoPoint:
        """Build a point from a `(lon, lat)` pair."""
        lon, lat = coordinate
        return cls(lat=float(lat), lng=float(lon))

    def as_coordinate(self) -> Coordinate:
        return (self.lng, self.lat)

    def distance_to(self, other: GeoPoint) -> float:
        """Return the great-circle distance to `other` in meters."""
        return great_circle_meters(self.lat, self.lng, other.lat, other.lng)

    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lng)


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A caller-supplied stop with an optional display name."""

    lat_lng: GeoPoint
    name: str | None = None

    @classmethod
    def at(cls, lat: float, lng: float, name: str | None = None) -> Waypoint:
        return cls(GeoPoint(lat, lng), name)


def great_circle_meters(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Return the great-circle distance between two lat/lon points in meters."""
    return float(_GREAT_CIRCLE(lat1, lon1, lat2, lon2, earth_radius=EARTH_RADIUS_M))


def destination_points(
    origin: GeoPoint,
    azimuth: float,
    distances: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Project `origin` along `azimuth` by every distance in `distances`.

    Parameters
    ----------
    origin:
        Starting point.
    azimuth:
        Compass bearing in degrees (0 = north, clockwise).
    distances:
        One-dimensional array of distances in meters.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        Parallel arrays of destination latitudes and longitudes in degrees.
        Longitudes are not wrapped into [-180, 180].

    """
    brng = np.radians(azimuth)
    lat1 = np.radians(origin.lat)
    lon1 = np.radians(origin.lng)
    angular = np.asarray(distances, dtype=float) / EARTH_RADIUS_M

    lat2 = np.arcsin(
        np.sin(lat1) * np.cos(angular)
        + np.cos(lat1) * np.sin(angular) * np.cos(brng),
    )
    lon2 = lon1 + np.arctan2(
        np.sin(brng) * np.sin(angular) * np.cos(lat1),
        np.cos(angular) - np.sin(lat1) * np.sin(lat2),
    )
    return np.degrees(lat2), np.degrees(lon2)


def destination_point(origin: GeoPoint, azimuth: float, distance: float) -> GeoPoint:
    """Return the point `distance` meters from `origin` along `azimuth`."""
    lats, lngs = destination_points(origin, azimuth, np.array([distance]))
    return GeoPoint(float(lats[0]), float(lngs[0]))


def normalize_longitude(lng: float | np.ndarray) -> float | np.ndarray:
    """Wrap a longitude (or an array of them) into [-180, 180)."""
    return (lng + 180.0) % 360.0 - 180.0


def bearing_to(start: GeoPoint, end: GeoPoint) -> float:
    """Return the Mercator-derived initial bearing from `start` to `end`.

    The latitude term is the difference of Mercator-projected latitudes and
    the longitude delta takes the shorter way around the antimeridian. The
    result lies in [0, 360); coincident points yield 0.
    """
    start_lat = math.radians(start.lat)
    start_lng = math.radians(start.lng)
    end_lat = math.radians(end.lat)
    end_lng = math.radians(end.lng)

    # A pole makes one tangent zero; let NumPy carry the resulting infinities.
    with np.errstate(divide="ignore", invalid="ignore"):
        d_phi = float(
            np.log(
                np.tan(end_lat / 2.0 + np.pi / 4.0)
                / np.tan(start_lat / 2.0 + np.pi / 4.0),
            ),
        )
    if math.isnan(d_phi):
        d_phi = 0.0

    d_lng = end_lng - start_lng
    if abs(d_lng) > math.pi:
        if d_lng > 0.0:
            d_lng = -(2.0 * math.pi - d_lng)
        else:
            d_lng = 2.0 * math.pi + d_lng

    return (math.degrees(math.atan2(d_lng, d_phi)) + 360.0) % 360.0
