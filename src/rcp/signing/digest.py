"""HMAC-SHA512 keyed digest over salt, canonical attributes and time bucket."""

from __future__ import annotations

import hashlib
import hmac as hmac_mod

from rcp.errors import EncodingError
from rcp.signing.canonical import frame, to_bytes

__all__ = ["DIGEST_SIZE", "digest", "secret_bytes", "signing_message"]

_HASH = hashlib.sha512
DIGEST_SIZE = _HASH().digest_size * 2  # hex characters


def secret_bytes(secret: str | bytes) -> bytes:
    """Shared secrets are opaque: bytes pass through, str is UTF-8 encoded."""
    if isinstance(secret, bytes):
        return secret
    if not isinstance(secret, str):
        raise EncodingError(f"shared secret must be str or bytes, got {type(secret).__name__}")
    try:
        return secret.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError("shared secret cannot be encoded as UTF-8") from exc


def signing_message(salt: str | bytes, canonical: bytes, time_bucket: int | None = None) -> bytes:
    """Assemble ``frame(salt) || frame(canonical) [|| frame(time_bucket)]``.

    The time bucket is written as ASCII decimal, matching the epoch-second
    strings other implementations append.
    """
    message = frame(to_bytes(salt, what="salt")) + frame(canonical)
    if time_bucket is not None:
        message += frame(str(int(time_bucket)).encode("ascii"))
    return message


def digest(
    secret: str | bytes,
    salt: str | bytes,
    canonical: bytes,
    time_bucket: int | None = None,
) -> str:
    """Return the lowercase hex HMAC-SHA512 checksum of the signing message."""
    key = secret_bytes(secret)
    return hmac_mod.new(key, signing_message(salt, canonical, time_bucket), _HASH).hexdigest()
