"""Clock interface for cycle timing and pub/sub tick propagation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol


class ClockSubscriber(Protocol):
    """Anything that wants to observe completed bus cycles."""

    def tick(self, cycles: int = 1) -> None:
        """Called after the given number of cycles elapsed."""
        ...


class IClock(ABC):
    """Clock interface used by the execution engine."""

    @property
    @abstractmethod
    def cycle_time_ms(self) -> float:
        """Duration of one cycle in milliseconds."""
        ...

    @cycle_time_ms.setter
    @abstractmethod
    def cycle_time_ms(self, value: float) -> None:
        ...

    @property
    @abstractmethod
    def cycle_count(self) -> int:
        """Total number of cycles elapsed."""
        ...

    @abstractmethod
    def subscribe(self, subscriber: ClockSubscriber) -> None:
        """Subscribe a component to clock ticks."""
        ...

    @abstractmethod
    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        """Unsubscribe a component from clock ticks."""
        ...

    @abstractmethod
    def hold(self) -> None:
        """Suspend the caller for one cycle without ticking."""
        ...

    @abstractmethod
    def tick(self, cycles: int = 1) -> None:
        """Advance the cycle count and notify subscribers."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset cycle count to zero."""
        ...
