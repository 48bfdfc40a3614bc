"""Router-plugin surface: compute synchronously, deliver on a later loop turn."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence, Union

from .assemble import RouteResult, assemble_route
from .logger import Logger, LoggingMode
from .options import RouterOptions

if TYPE_CHECKING:
    from .geo import Waypoint

RouteCallback = Callable[..., Any]
OptionsLike = Union[RouterOptions, Mapping[str, Any], None]


class StraightLineRouter:
    """Drop-in router that connects waypoints with sampled great circles.

    The instance options are fixed at construction. Options passed to a
    single `route` call are overlaid onto a fresh `RouterOptions` for that
    call only.
    """

    def __init__(
        self,
        options: OptionsLike = None,
        logging_mode: LoggingMode | str = LoggingMode.NONE,
    ) -> None:
        self.options = RouterOptions.from_value(options)
        self.logger = Logger(LoggingMode.from_value(logging_mode))

    def compute(
        self,
        waypoints: Sequence[Waypoint],
        options: OptionsLike = None,
    ) -> RouteResult:
        """Return the single route alternative for `waypoints` right away."""
        return assemble_route(waypoints, self.options.merged(options), self.logger)

    def route(
        self,
        waypoints: Sequence[Waypoint],
        callback: RouteCallback,
        context: object | None = None,
        options: OptionsLike = None,
    ) -> StraightLineRouter:
        """Route through `waypoints` and hand the result to `callback`.

        `callback(error, routes)` runs on a later turn of the running asyncio
        event loop, never before this method returns. `error` is always
        `None` and `routes` holds exactly one `RouteResult`. When `context`
        is given it is passed first, in the position of a bound `self`.

        Invalid input raises here, synchronously, and nothing is scheduled.
        Calling this without a running event loop raises `RuntimeError`.
        """
        loop = asyncio.get_running_loop()
        result = self.compute(waypoints, options)

        if context is not None:
            callback = partial(callback, context)
        loop.call_soon(callback, None, [result])
        return self

    async def route_async(
        self,
        waypoints: Sequence[Waypoint],
        options: OptionsLike = None,
    ) -> list[RouteResult]:
        """Coroutine form of `route`: returns the alternatives list."""
        result = self.compute(waypoints, options)
        # Resolve on a later loop turn, as callback delivery does.
        await asyncio.sleep(0)
        return [result]


def straight_line(options: OptionsLike = None, **kwargs: Any) -> StraightLineRouter:  # noqa: ANN401
    """Return a new `StraightLineRouter`; keyword options override `options`."""
    merged = RouterOptions.from_value(options).merged(kwargs or None)
    return StraightLineRouter(merged)
