"""IScheduler interface — host timers, plus an owned optional handle."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional


class TimerHandle(ABC):
    """A live one-shot timer or periodic interval."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the timer. Cancelling twice, or after a one-shot fired, is a no-op."""


class Scheduler(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* once after *delay* seconds."""

    @abstractmethod
    def call_every(self, period: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* every *period* seconds until cancelled."""


class TimerSlot:
    """Holds at most one :class:`TimerHandle` and owns its cancellation.

    ``clear()`` is always safe: on an empty slot it does nothing.
    """

    __slots__ = ("_handle",)

    def __init__(self) -> None:
        self._handle: Optional[TimerHandle] = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def arm(self, handle: TimerHandle) -> None:
        """Store *handle*, cancelling whatever the slot held before."""
        self.clear()
        self._handle = handle

    def release(self) -> None:
        """Forget the handle without cancelling it (it already fired)."""
        self._handle = None

    def clear(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()
