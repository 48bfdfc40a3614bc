"""Router configuration as an immutable value."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .errors import InvalidInterval

LOGGER = logging.getLogger(__name__)

# Default distance between two sampled points (meters).
DEFAULT_INTERVAL_M = 10.0

# Host-side spellings mapped onto field names.
_ALIASES = {"normalizeLongitude": "normalize_longitude"}


@dataclass(frozen=True, slots=True)
class RouterOptions:
    """Options recognised by the straight-line router.

    Attributes
    ----------
    interval:
        Distance in meters between consecutive sampled points on a leg.
    normalize_longitude:
        Wrap projected longitudes into [-180, 180). Off by default, which
        leaves antimeridian-crossing legs with longitudes beyond +/-180.

    """

    interval: float = DEFAULT_INTERVAL_M
    normalize_longitude: bool = False

    def __post_init__(self) -> None:
        validate_interval(self.interval)

    @classmethod
    def from_value(cls, value: RouterOptions | Mapping[str, Any] | None) -> RouterOptions:
        """Normalize arbitrary user input into `RouterOptions`."""
        if isinstance(value, cls):
            return value
        return cls().merged(value)

    def merged(
        self,
        overrides: RouterOptions | Mapping[str, Any] | None,
    ) -> RouterOptions:
        """Return a new value with `overrides` applied on top of these options."""
        if overrides is None:
            return self
        if isinstance(overrides, RouterOptions):
            return overrides

        known = {field.name for field in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                LOGGER.debug("Ignoring unsupported router option %r", key)
                continue
            changes[name] = value
        return replace(self, **changes)


def validate_interval(interval: object) -> float:
    """Return `interval` as a float or raise `InvalidInterval`."""
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        msg = f"Interval must be a number of meters, got {interval!r}."
        raise InvalidInterval(msg)
    if not math.isfinite(interval) or interval <= 0:
        msg = f"Interval must be a positive, finite number of meters, got {interval!r}."
        raise InvalidInterval(msg)
    return float(interval)
