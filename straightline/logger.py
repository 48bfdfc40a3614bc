"""Deterministic, tab-separated progress output for route computation."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import TYPE_CHECKING, Any, Iterator, TextIO

if TYPE_CHECKING:
    from .assemble import RouteResult
    from .interpolate import Leg


class LoggingMode(str, Enum):
    """Supported logging verbosity for routing."""

    NONE = "none"
    INFO = "info"
    DEBUG = "debug"

    @classmethod
    def _missing_(cls, value: object) -> LoggingMode | None:
        if isinstance(value, str):
            lowered = value.lower()
            for mode in cls:
                if mode.value == lowered:
                    return mode
        return None

    @classmethod
    def from_value(cls, value: LoggingMode | str | None) -> LoggingMode:
        """Normalize arbitrary user input into a `LoggingMode`."""
        if value is None:
            return cls.NONE
        try:
            return cls(value)
        except ValueError as exc:
            valid = ", ".join(mode.value for mode in cls)
            msg = f"Invalid logging mode: {value!r}. Expected one of {{{valid}}}."
            raise ValueError(msg) from exc


@dataclass(slots=True)
class Logger:
    """Emit `[LEVEL]\\tmessage\\tkey=value` lines for route phases.

    A logger in `LoggingMode.NONE` is silent and is the default everywhere a
    logger is optional.
    """

    mode: LoggingMode = LoggingMode.NONE
    stream: TextIO | None = None

    @property
    def is_info_enabled(self) -> bool:  # noqa: D102
        return self.mode is not LoggingMode.NONE

    @property
    def is_debug_enabled(self) -> bool:  # noqa: D102
        return self.mode is LoggingMode.DEBUG

    def info(self, message: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_info_enabled:
            self._emit("INFO", message, context)

    def debug(self, message: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_debug_enabled:
            self._emit("DEBUG", message, context)

    def leg(self, index: int, leg: Leg) -> None:
        """Log one interpolated leg (debug only)."""
        self.debug(
            "route.leg",
            index=index,
            points=len(leg.points),
            azimuth=f"{leg.azimuth:.2f}",
            distance_m=f"{leg.distance:.1f}",
        )

    def route_stats(self, result: RouteResult) -> None:
        """Log the size and totals of an assembled route."""
        self.info(
            "route.stats",
            coordinates=len(result.coordinates),
            instructions=len(result.instructions),
            distance_m=f"{result.summary.total_distance:.1f}",
        )

    @contextmanager
    def phase(self, name: str, **details: Any) -> Iterator[None]:  # noqa: ANN401
        """Emit start/complete (or failed) messages around a block."""
        if not self.is_info_enabled:
            yield
            return

        self.info(f"{name}.start", **details)
        started = perf_counter()
        try:
            yield
        except Exception as exc:
            self.info(f"{name}.failed", error=type(exc).__name__, reason=str(exc))
            raise
        self.info(f"{name}.complete", **details)
        self.debug(f"{name}.elapsed", seconds=f"{perf_counter() - started:.3f}")

    def _emit(self, level: str, message: str, context: dict[str, Any]) -> None:
        fields = [f"[{level}]", message]
        fields.extend(
            f"{key}={value}" for key, value in context.items() if value is not None
        )
        print("\t".join(fields), file=self.stream)
