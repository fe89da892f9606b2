"""Exception hierarchy for checksum computation and validation."""

from __future__ import annotations

__all__ = ["ChecksumError", "EncodingError", "ConfigError"]


class ChecksumError(Exception):
    """Base class for every error raised by rcp."""


class EncodingError(ChecksumError, ValueError):
    """A key, value, salt or secret cannot be turned into well-formed bytes.

    Raised before any digest is computed. A checksum mismatch is never an
    EncodingError; validation reports it as ``False``.
    """


class ConfigError(ChecksumError, ValueError):
    """Checksum configuration is invalid (e.g. negative time_delta)."""
