"""Great-circle sampling between two consecutive waypoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .errors import InvalidInterval
from .geo import GeoPoint, bearing_to, destination_points, normalize_longitude
from .options import validate_interval

# Upper bound on sampled points between two waypoints. Allows the default
# 10 m interval over half the globe.
MAX_SAMPLES_PER_LEG = 10_000_000


@dataclass(slots=True)
class Leg:
    """Container for one interpolated leg."""

    points: list[GeoPoint]
    azimuth: float
    distance: float
    time: float = 0.0


def sample_distances(distance: float, interval: float) -> Iterator[float]:
    """Yield `interval, 2*interval, ...` while strictly below `distance`.

    Offsets are accumulated by repeated addition so the sample count matches
    a running counter rather than `n * interval`.
    """
    counter = interval
    while counter < distance:
        yield counter
        counter += interval


def interpolate(
    start: GeoPoint,
    end: GeoPoint,
    interval: float,
    *,
    normalize: bool = False,
) -> Leg:
    """Sample the path from `start` to `end` every `interval` meters.

    Parameters
    ----------
    start, end:
        Leg endpoints. Both are always present in the result, unchanged.
    interval:
        Sampling distance in meters; must be positive, finite and coarse
        enough to keep the leg within `MAX_SAMPLES_PER_LEG` samples.
    normalize:
        Wrap the longitudes of sampled (not endpoint) points into [-180, 180).

    Returns
    -------
    Leg
        Points from `start` to `end` inclusive, with the leg's azimuth and
        great-circle distance. Travel time is not modelled and stays 0.

    """
    interval = validate_interval(interval)

    distance = start.distance_to(end)
    azimuth = bearing_to(start, end)
    if distance / interval > MAX_SAMPLES_PER_LEG:
        msg = (
            f"Interval {interval!r} m would sample more than "
            f"{MAX_SAMPLES_PER_LEG} points over a {distance:.1f} m leg."
        )
        raise InvalidInterval(msg)

    offsets = np.fromiter(sample_distances(distance, interval), dtype=float)
    lats, lngs = destination_points(start, azimuth, offsets)
    if normalize:
        lngs = normalize_longitude(lngs)

    points = [start]
    points.extend(GeoPoint(float(lat), float(lng)) for lat, lng in zip(lats, lngs))
    points.append(end)
    return Leg(points=points, azimuth=azimuth, distance=distance)

