from __future__ import annotations
import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional

from .keyboard.config import kcfg

Update = Callable[[], Awaitable[None]]
Delay = Callable[[], float]


class FixedInterval:
    """Always the same delay, in seconds."""

    def __init__(self, seconds: float):
        if seconds < 0:
            raise ValueError(f"interval must not be negative, got {seconds!r}")
        self.seconds = float(seconds)

    def __call__(self) -> float:
        return self.seconds

    def __str__(self) -> str:
        return f"fixed {self.seconds * 1000.0:.1f} ms"


class JitterInterval:
    """Delay drawn uniformly from [min_ms, max_ms] on every call, in seconds."""

    def __init__(
        self,
        min_ms: float = kcfg.MIN_INTERVAL_MS,
        max_ms: float = kcfg.MAX_INTERVAL_MS,
        rng: Optional[random.Random] = None,
    ):
        if min_ms < 0 or max_ms < 0:
            raise ValueError("interval bounds must not be negative")
        if min_ms > max_ms:
            raise ValueError(f"min interval {min_ms} ms exceeds max {max_ms} ms")
        self.min_ms = float(min_ms)
        self.max_ms = float(max_ms)
        self.rng = rng if rng is not None else random.Random()

    def __call__(self) -> float:
        return self.rng.uniform(self.min_ms, self.max_ms) / 1000.0

    def __str__(self) -> str:
        return f"jitter {self.min_ms:.0f}-{self.max_ms:.0f} ms"


def pointer_interval(updates_per_sec: float) -> FixedInterval:
    if not updates_per_sec > 0:
        raise ValueError(f"updates_per_sec must be positive, got {updates_per_sec!r}")
    return FixedInterval(1.0 / updates_per_sec)


async def _wait_or_stop(stop: asyncio.Event, delay: float) -> bool:
    """Sleep for ``delay`` seconds; return True early if ``stop`` gets set."""
    try:
        await asyncio.wait_for(stop.wait(), timeout=max(0.0, delay))
        return True
    except asyncio.TimeoutError:
        return False


async def run_periodic(
    update: Update, next_delay: Delay, stop: asyncio.Event, *, name: str = "task"
) -> None:
    """Call ``update`` then sleep ``next_delay()`` until ``stop`` is set.

    Ticks never overlap: the next update starts only after the previous one
    and its sleep finished. Exceptions from ``update`` propagate unchanged.
    """
    logger = logging.getLogger(__name__)
    ticks = 0
    while not stop.is_set():
        await update()
        ticks += 1
        if await _wait_or_stop(stop, next_delay()):
            break
    logger.debug("%s loop stopped after %d ticks", name, ticks)


async def run_agents(
    pointer_agent,
    pointer_delay: Delay,
    keystroke_agent=None,
    keystroke_delay: Optional[Delay] = None,
    stop: Optional[asyncio.Event] = None,
) -> None:
    """Drive the pointer (and optionally keystroke) agent until one loop ends.

    The run ends when ``stop`` is set or when the first loop finishes by error.
    Loops still in flight are then cancelled, including a tick stuck in a
    backend call, and any error from a finished loop is re-raised.
    """
    if keystroke_agent is not None and keystroke_delay is None:
        raise ValueError("keystroke_delay is required with a keystroke agent")
    stop = stop if stop is not None else asyncio.Event()

    tasks: List[asyncio.Task] = [
        asyncio.create_task(
            run_periodic(pointer_agent.update, pointer_delay, stop, name="pointer"),
            name="pointer",
        )
    ]
    if keystroke_agent is not None:
        tasks.append(
            asyncio.create_task(
                run_periodic(
                    keystroke_agent.update, keystroke_delay, stop, name="keystroke"
                ),
                name="keystroke",
            )
        )
    stop_waiter = asyncio.create_task(stop.wait(), name="stop")

    try:
        done, _ = await asyncio.wait(
            tasks + [stop_waiter], return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        stop.set()
        for task in tasks + [stop_waiter]:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, stop_waiter, return_exceptions=True)

    for task in tasks:
        if task in done and not task.cancelled() and task.exception() is not None:
            raise task.exception()
