"""Fixed-interval timer and time-of-day gate."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from datetime import time as time_of_day
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_START = time_of_day(9, 0)
DEFAULT_WINDOW_END = time_of_day(21, 0)


class TimeZoneResolutionError(LookupError):
    """Raised when a named time zone is unknown to the host."""


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Daily window of allowed local times, start inclusive and end exclusive."""

    start: time_of_day = DEFAULT_WINDOW_START
    end: time_of_day = DEFAULT_WINDOW_END

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError("TimeWindow start must be earlier than end.")

    def contains(self, moment: datetime) -> bool:
        """Return whether the wall-clock time of ``moment`` lies in the window."""
        return self.start <= moment.time() < self.end


def load_timezone(name: str) -> ZoneInfo:
    """Look up an IANA zone by name."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise TimeZoneResolutionError(f"Unknown time zone '{name}'.") from error


def resolve_timezone(name: str) -> tzinfo | None:
    """Resolve ``name``, or return ``None`` to read host local time on every tick."""
    try:
        return load_timezone(name)
    except TimeZoneResolutionError as error:
        logger.warning("%s Falling back to host local time.", error)
        return None


def run_schedule(
    on_tick: Callable[[], object],
    *,
    period_seconds: float,
    run_immediately: bool = False,
    max_ticks: int | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Fire ``on_tick`` every ``period_seconds`` and return the number of ticks.

    The first tick fires one full period after startup unless
    ``run_immediately`` is set. Deadlines advance from the previous scheduled
    firing, so time spent inside ``on_tick`` is not added to the period. When a
    tick overruns one or more periods, the missed deadlines are dropped and the
    next tick fires right away. Runs forever unless ``max_ticks`` is given.
    """
    if period_seconds <= 0:
        raise ValueError("period_seconds must be greater than zero.")

    ticks = 0
    if run_immediately and (max_ticks is None or max_ticks > 0):
        on_tick()
        ticks += 1

    next_deadline = clock() + period_seconds
    while max_ticks is None or ticks < max_ticks:
        remaining = next_deadline - clock()
        if remaining > 0:
            sleep(remaining)
        on_tick()
        ticks += 1

        next_deadline += period_seconds
        now = clock()
        missed = int((now - next_deadline) // period_seconds) if next_deadline < now else 0
        if missed:
            logger.warning("Tick overran the schedule; dropping %d missed tick(s).", missed)
            next_deadline += missed * period_seconds
    return ticks
