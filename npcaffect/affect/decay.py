"""
Decay: how emotions fade between appraisals.

Decay functions take the current intensity, the engine's decay factor and
the milliseconds since the last decay pass. Because elapsed time is part of
the input, the rate stays the same whatever cadence decay is driven at; a
longer interval just produces bigger steps.

DecayTicker is the optional driver: an asyncio task that calls
``engine.decay_all()`` on a fixed interval. Games with their own update loop
can skip it and call ``decay_all()`` from there.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Callable, Optional

import structlog

if TYPE_CHECKING:
    from npcaffect.affect.engine import AppraisalEngine

logger = structlog.get_logger(__name__)

DecayFunction = Callable[[float, float, float], float]


def linear_decay(value: float, factor: float, ms_passed: float) -> float:
    """Subtract ``factor`` per second."""
    return value - factor * (ms_passed / 1000)


def exponential_decay(value: float, factor: float, ms_passed: float) -> float:
    """Multiply by ``factor`` per second."""
    return value * factor ** (ms_passed / 1000)


DECAY_FUNCTIONS: dict[str, DecayFunction] = {
    "linear": linear_decay,
    "exponential": exponential_decay,
}


def resolve_decay_function(name: str) -> DecayFunction:
    try:
        return DECAY_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown decay function {name!r}; choose from {sorted(DECAY_FUNCTIONS)}"
        ) from None


class DecayTicker:
    """
    Calls ``engine.decay_all()`` every ``interval`` seconds.

    The interval is the frame rate of decay, not its rate: that is set by the
    engine's decay factor and function. A failing tick is logged and the
    ticker keeps going.
    """

    def __init__(self, engine: AppraisalEngine, interval: float) -> None:
        if interval <= 0:
            raise ValueError("decay interval must be positive")
        self._engine = engine
        self._interval = interval
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._tick_count = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self) -> None:
        """Schedule the ticker on the running event loop."""
        if self._running:
            logger.warning("decay_ticker.already_running")
            return
        loop = asyncio.get_running_loop()
        self._running = True
        self._task = loop.create_task(self._loop())
        logger.info("decay_ticker.started", interval=self._interval)

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("decay_ticker.stopped", total_ticks=self._tick_count)

    async def _loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            try:
                self._engine.decay_all()
                self._tick_count += 1
            except Exception as e:
                logger.error("decay_ticker.tick_failed", error=str(e), exc_info=True)
