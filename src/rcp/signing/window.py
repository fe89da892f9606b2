"""Symmetric replay window over epoch-second time buckets.

A checksum is a one-way hash, so the verifier cannot read the sender's
timestamp back out of it. Instead it recomputes the digest for every second
in ``[now - delta, now + delta]`` and accepts the candidate if any of them
matches. Cost grows linearly with ``delta``; keep it to a few seconds.
"""

from __future__ import annotations

import hmac as hmac_mod
import math
from collections.abc import Callable
from dataclasses import dataclass

from rcp.clock import Clock
from rcp.errors import ConfigError

__all__ = ["TimeWindow"]


@dataclass(frozen=True)
class TimeWindow:
    """Accepts checksums generated within ``delta`` seconds of now (inclusive)."""

    delta: int

    def __post_init__(self) -> None:
        if isinstance(self.delta, bool) or not isinstance(self.delta, int):
            raise ConfigError(f"time_delta must be an int, got {type(self.delta).__name__}")
        if self.delta < 0:
            raise ConfigError(f"time_delta must be >= 0, got {self.delta}")

    @property
    def size(self) -> int:
        return 2 * self.delta + 1

    @staticmethod
    def current_bucket(clock: Clock) -> int:
        """Epoch second the clock currently reads."""
        return int(math.floor(clock.now()))

    def buckets(self, now: int) -> range:
        """Every bucket from ``now - delta`` to ``now + delta``, both included."""
        return range(now - self.delta, now + self.delta + 1)

    def matches(self, candidate: bytes, compute: Callable[[int], str], now: int) -> bool:
        """Check ``candidate`` against the digest of every bucket in the window.

        Every bucket is compared with ``hmac.compare_digest`` and the loop
        never exits early, so timing does not reveal which bucket matched.
        """
        matched = False
        for bucket in self.buckets(now):
            expected = compute(bucket).encode("ascii")
            matched |= hmac_mod.compare_digest(expected, candidate)
        return matched
