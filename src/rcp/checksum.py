"""Checksum configuration for communicating with a single partner.

Usage::

    config = ChecksumConfig(shared_secret="s3cret", use_time_component=True, time_delta=5)

    # Sender
    checksum = config.get_checksum({"user": "42", "action": "delete"}, salt="/api/items")

    # Receiver
    ok = config.validate_checksum(attributes, "/api/items", checksum)

When signing HTTP calls, the endpoint path is a good salt: it stops a
checksum captured on one endpoint from being replayed against another.
"""

from __future__ import annotations

import hmac as hmac_mod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rcp.clock import Clock, SystemClock
from rcp.logging import get_logger
from rcp.signing.canonical import encode
from rcp.signing.digest import DIGEST_SIZE, digest, secret_bytes
from rcp.signing.window import TimeWindow

if TYPE_CHECKING:
    from rcp.settings import Settings
    from rcp.signing.canonical import Attributes

__all__ = ["ChecksumConfig", "MAX_RECOMMENDED_TIME_DELTA"]


def _logger() -> Any:
    # Resolved per call so a later configure_logging() always takes effect.
    return get_logger(component="rcp.checksum")


# Beyond this the validator hashes over a hundred candidates per call.
MAX_RECOMMENDED_TIME_DELTA = 60


@dataclass(frozen=True)
class ChecksumConfig:
    """Shared secret and replay policy for one partner.

    Immutable and free of mutable state: a single instance can serve any
    number of concurrent ``get_checksum`` / ``validate_checksum`` calls.
    """

    shared_secret: str | bytes = field(default="", repr=False)
    use_time_component: bool = True
    time_delta: int = 5
    clock: Clock = field(default_factory=SystemClock, compare=False)
    _key: bytes = field(init=False, repr=False, compare=False)
    _window: TimeWindow = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_key", secret_bytes(self.shared_secret))
        object.__setattr__(self, "_window", TimeWindow(self.time_delta))
        if self.use_time_component and self.time_delta > MAX_RECOMMENDED_TIME_DELTA:
            _logger().warning(
                "checksum.time_delta_large",
                time_delta=self.time_delta,
                candidates_per_validation=self._window.size,
                recommended_max=MAX_RECOMMENDED_TIME_DELTA,
            )

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock | None = None) -> ChecksumConfig:
        """Build a config from environment-driven settings."""
        kwargs: dict[str, Any] = {
            "shared_secret": settings.shared_secret.get_secret_value(),
            "use_time_component": settings.use_time_component,
            "time_delta": settings.time_delta,
        }
        if clock is not None:
            kwargs["clock"] = clock
        return cls(**kwargs)

    def _digest(self, canonical: bytes, salt: str | bytes, time_bucket: int | None) -> str:
        return digest(self._key, salt, canonical, time_bucket)

    def get_checksum(self, attributes: Attributes, salt: str | bytes = "") -> str:
        """Calculate a request's checksum from its attributes and a salt.

        Raises:
            EncodingError: a key, value or the salt is not well-formed text.
        """
        canonical = encode(attributes)
        bucket = TimeWindow.current_bucket(self.clock) if self.use_time_component else None
        checksum = self._digest(canonical, salt, bucket)
        _logger().debug("checksum.generated", time_bound=bucket is not None)
        return checksum

    def validate_checksum(
        self, attributes: Attributes, salt: str | bytes, checksum: str
    ) -> bool:
        """Check whether ``checksum`` matches the attributes and salt.

        Without the time component this is a constant-time comparison against
        ``get_checksum``. With it, every second within ``time_delta`` of now
        is tried. A mismatch returns False; only unencodable input raises.

        Raises:
            EncodingError: a key, value or the salt is not well-formed text.
        """
        canonical = encode(attributes)
        candidate = _candidate_bytes(checksum)

        if not self.use_time_component:
            expected = self._digest(canonical, salt, None)
            valid = hmac_mod.compare_digest(expected.encode("ascii"), candidate)
            _logger().debug("checksum.validated", valid=valid, time_bound=False)
            return valid

        now = TimeWindow.current_bucket(self.clock)
        valid = self._window.matches(candidate, lambda b: self._digest(canonical, salt, b), now)
        _logger().debug(
            "checksum.validated", valid=valid, time_bound=True, window=self._window.size
        )
        return valid


def _candidate_bytes(checksum: object) -> bytes:
    """ASCII bytes of the candidate; b"" (never equal to a digest) if malformed."""
    if not isinstance(checksum, str) or not checksum.isascii():
        return b""
    if len(checksum) != DIGEST_SIZE:
        return b""
    return checksum.encode("ascii")
