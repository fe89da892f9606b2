"""Tests for canonical attribute encoding."""

from __future__ import annotations

from collections import OrderedDict

import pytest

from rcp.errors import EncodingError
from rcp.signing.canonical import encode, frame, to_bytes


class TestFrame:
    def test_length_prefix_is_eight_bytes_big_endian(self) -> None:
        assert frame(b"abc") == b"\x00\x00\x00\x00\x00\x00\x00\x03abc"

    def test_empty_frame(self) -> None:
        assert frame(b"") == b"\x00" * 8


class TestEncode:
    def test_empty_map(self) -> None:
        assert encode({}) == b""
        assert encode([]) == b""

    def test_single_entry_layout(self) -> None:
        assert encode({"a": "b"}) == frame(b"a") + frame(b"b")

    def test_sorted_keys(self) -> None:
        result = encode({"z": "1", "a": "2"})
        assert result == frame(b"a") + frame(b"2") + frame(b"z") + frame(b"1")

    def test_order_independent(self) -> None:
        forward = {"a": "1", "b": "2", "c": "3"}
        backward = OrderedDict(reversed(list(forward.items())))
        pairs = [("c", "3"), ("a", "1"), ("b", "2")]
        assert encode(forward) == encode(backward) == encode(pairs)

    def test_bytewise_order_not_locale(self) -> None:
        # "B" (0x42) sorts before "a" (0x61); "z" (0x7a) before "é" (0xc3 0xa9)
        result = encode({"a": "1", "B": "2", "é": "3", "z": "4"})
        keys = [b"B", b"a", b"z", "é".encode()]
        assert result == b"".join(frame(k) + frame(v) for k, v in zip(keys, [b"2", b"1", b"4", b"3"]))

    def test_split_point_is_unambiguous(self) -> None:
        assert encode({"ab": "c"}) != encode({"a": "bc"})
        assert encode({"a": "b", "c": "d"}) != encode({"a": "bcd"})
        assert encode({"a": ""}) != encode({})

    def test_value_containing_delimiter_like_bytes(self) -> None:
        tricky = frame(b"x").decode()
        assert encode({"a": "1" + tricky}) != encode({"a": "1", "x": ""})

    def test_bytes_and_str_encode_identically(self) -> None:
        assert encode({b"k": b"v"}) == encode({"k": "v"})

    def test_int_values_rendered_in_decimal(self) -> None:
        assert encode({"n": 42, "m": -7}) == encode({"n": "42", "m": "-7"})

    def test_deterministic(self) -> None:
        attributes = {"action": "delete", "user": "42", "note": "ünïcödé"}
        assert encode(attributes) == encode(dict(attributes))


class TestEncodeErrors:
    def test_invalid_utf8_bytes(self) -> None:
        with pytest.raises(EncodingError):
            encode({"k": b"\xff\xfe"})

    def test_lone_surrogate(self) -> None:
        with pytest.raises(EncodingError):
            encode({"\ud800": "v"})

    def test_duplicate_keys_in_pairs(self) -> None:
        with pytest.raises(EncodingError, match="duplicate"):
            encode([("a", "1"), (b"a", "2")])

    @pytest.mark.parametrize("value", [True, 1.5, None, ["x"]])
    def test_unsupported_value_types(self, value: object) -> None:
        with pytest.raises(EncodingError):
            encode({"k": value})  # type: ignore[dict-item]

    def test_int_key_rejected(self) -> None:
        with pytest.raises(EncodingError):
            encode({1: "v"})  # type: ignore[dict-item]

    def test_non_pair_items(self) -> None:
        with pytest.raises(EncodingError):
            encode([("only-one",)])  # type: ignore[list-item]

    def test_string_is_not_a_map(self) -> None:
        with pytest.raises(EncodingError):
            encode("key=value")  # type: ignore[arg-type]

    def test_encoding_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            encode({"k": b"\xc3"})


class TestToBytes:
    def test_bool_never_treated_as_int(self) -> None:
        with pytest.raises(EncodingError):
            to_bytes(False, what="value", allow_int=True)

    def test_int_rejected_without_flag(self) -> None:
        with pytest.raises(EncodingError, match="salt"):
            to_bytes(5, what="salt")
