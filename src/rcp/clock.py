"""Injectable time sources for time-bound checksums."""

from __future__ import annotations

import time
from typing import Protocol

__all__ = ["Clock", "SystemClock", "FixedClock", "ManualClock"]


class Clock(Protocol):
    """Minimal contract for reading wall-clock time."""

    def now(self) -> float:
        """Return seconds since the UNIX epoch."""
        ...


class SystemClock:
    """Real wall clock backed by ``time.time()``."""

    def now(self) -> float:
        return time.time()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock frozen at a single instant (tests, replaying recorded requests)."""

    def __init__(self, value: float) -> None:
        self._value = float(value)

    def now(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"FixedClock({self._value!r})"


class ManualClock:
    """Clock that only moves when told to, for sequenced time in tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._value = float(start)

    def now(self) -> float:
        return self._value

    def advance(self, seconds: float) -> float:
        """Move forward (or backward, if negative) and return the new time."""
        self._value += seconds
        return self._value

    def set(self, value: float) -> None:
        self._value = float(value)

    def __repr__(self) -> str:
        return f"ManualClock({self._value!r})"
