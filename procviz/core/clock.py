"""Clock implementation for cycle timing."""

from __future__ import annotations

import time
from typing import Callable, List

from procviz.interfaces.clock import ClockSubscriber, IClock

Sleeper = Callable[[float], None]


class Clock(IClock):
    """Cycle delay plus a simple pub/sub notifier.

    hold() suspends the caller for one cycle using the injected sleeper
    (time.sleep by default, in seconds). tick() counts completed cycles and
    notifies subscribers; the engine calls it only once a hold has finished
    for a sequence that is still current.
    Tests inject a recording sleeper so timing is deterministic.
    """

    def __init__(self, cycle_time_ms: float = 0, sleep: Sleeper = time.sleep):
        self._cycle_time_ms = 0.0
        self.cycle_time_ms = cycle_time_ms
        self._sleep = sleep
        self._cycle_count = 0
        self._subscribers: List[ClockSubscriber] = []

    @property
    def cycle_time_ms(self) -> float:
        return self._cycle_time_ms

    @cycle_time_ms.setter
    def cycle_time_ms(self, value: float) -> None:
        if value < 0:
            raise ValueError("cycle time must be >= 0")
        self._cycle_time_ms = value

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    def subscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def hold(self) -> None:
        self._sleep(self._cycle_time_ms / 1000.0)

    def tick(self, cycles: int = 1) -> None:
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        if cycles == 0:
            return

        self._cycle_count += cycles

        for subscriber in list(self._subscribers):
            subscriber.tick(cycles)

    def reset(self) -> None:
        self._cycle_count = 0
