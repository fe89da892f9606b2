"""Canonical byte encoding of an attribute map for checksum signing."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Mapping

from rcp.errors import EncodingError

__all__ = ["Attributes", "encode", "frame", "to_bytes"]

Text = str | bytes
Value = str | bytes | int
Attributes = Mapping[Text, Value] | Iterable[tuple[Text, Value]]

_LENGTH = struct.Struct(">Q")  # 8-byte big-endian unsigned


def frame(data: bytes) -> bytes:
    """Length-prefix ``data`` so concatenated frames stay unambiguous."""
    return _LENGTH.pack(len(data)) + data


def to_bytes(item: object, *, what: str, allow_int: bool = False) -> bytes:
    """Return the UTF-8 bytes of ``item``.

    Args:
        item: A str, UTF-8 bytes, or (when allow_int) a non-bool int.
        what: Human label used in error messages ("key", "value", "salt").
        allow_int: Render ints in decimal instead of rejecting them.

    Raises:
        EncodingError: item is of an unsupported type or not well-formed UTF-8.
    """
    if isinstance(item, bytes):
        try:
            item.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(f"{what} is not valid UTF-8: {exc.reason}") from exc
        return item
    if allow_int and isinstance(item, int) and not isinstance(item, bool):
        return str(item).encode("ascii")
    if not isinstance(item, str):
        raise EncodingError(f"{what} must be str or bytes, got {type(item).__name__}")
    try:
        return item.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"{what} cannot be encoded as UTF-8: {exc.reason}") from exc


def _pairs(attributes: Attributes) -> Iterable[tuple[object, object]]:
    if isinstance(attributes, Mapping):
        return attributes.items()
    if isinstance(attributes, (str, bytes)):
        raise EncodingError("attributes must be a mapping or an iterable of pairs")
    return attributes


def encode(attributes: Attributes) -> bytes:
    """Produce the canonical bytes of an attribute map.

    Entries are sorted by the UTF-8 bytes of their keys and serialised as
    ``frame(key) || frame(value)``. The caller's iteration order never
    matters, and no two distinct maps share an encoding. An empty map
    encodes to ``b""``.

    Args:
        attributes: A mapping, or an iterable of ``(key, value)`` pairs.

    Returns:
        Deterministic bytes suitable for keyed hashing.

    Raises:
        EncodingError: a key or value is not well-formed text, an entry is not
            a pair, or two entries share the same key.
    """
    entries: dict[bytes, bytes] = {}
    try:
        for key, value in _pairs(attributes):
            raw_key = to_bytes(key, what="key")
            if raw_key in entries:
                raise EncodingError(f"duplicate key {raw_key!r}")
            entries[raw_key] = to_bytes(value, what=f"value of {raw_key!r}", allow_int=True)
    except EncodingError:
        raise
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"attributes must be (key, value) pairs: {exc}") from exc

    return b"".join(frame(k) + frame(entries[k]) for k in sorted(entries))
