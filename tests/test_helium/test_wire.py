"""Tests for the canonical wire encoding — helium/wire.py."""

from __future__ import annotations

import pytest

from helium_wallet.errors.wallet_errors import SerializationError
from helium_wallet.helium.wire import (
    encode_bytes,
    encode_message,
    encode_repeated_bytes,
    encode_string,
    encode_uint64,
    encode_varint,
    field_key,
)


class TestVarInt:
    """Base-128 varint encoding."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, b"\x00"),
            (1, b"\x01"),
            (127, b"\x7f"),
            (128, b"\x80\x01"),
            (300, b"\xac\x02"),
            (16_383, b"\xff\x7f"),
            (16_384, b"\x80\x80\x01"),
        ],
    )
    def test_encode(self, value: int, expected: bytes) -> None:
        assert encode_varint(value) == expected

    def test_max_uint64_is_ten_bytes(self) -> None:
        assert len(encode_varint((1 << 64) - 1)) == 10

    @pytest.mark.parametrize("value", [-1, 1 << 64])
    def test_out_of_range(self, value: int) -> None:
        with pytest.raises(SerializationError, match="uint64"):
            encode_varint(value)

    @pytest.mark.parametrize("value", [True, 1.5, "1", None])
    def test_rejects_non_int(self, value: object) -> None:
        with pytest.raises(SerializationError):
            encode_varint(value)  # type: ignore[arg-type]


class TestFields:
    """Field keys and per-type field encoders."""

    def test_field_key_single_byte(self) -> None:
        assert field_key(8, 2) == b"\x42"

    def test_field_key_two_bytes_from_field_16(self) -> None:
        assert field_key(15, 2) == b"\x7a"
        assert field_key(21, 2) == b"\xaa\x01"

    def test_uint64_zero_omitted(self) -> None:
        assert encode_uint64(3, 0) == b""

    def test_uint64(self) -> None:
        assert encode_uint64(3, 10_000) == b"\x18\x90\x4e"

    def test_bytes_empty_omitted(self) -> None:
        assert encode_bytes(1, b"") == b""

    def test_bytes(self) -> None:
        assert encode_bytes(1, b"abc") == b"\x0a\x03abc"

    def test_bytes_rejects_str(self) -> None:
        with pytest.raises(SerializationError, match="expects bytes"):
            encode_bytes(1, "abc")  # type: ignore[arg-type]

    def test_message_written_when_empty(self) -> None:
        assert encode_message(2, b"") == b"\x12\x00"

    def test_string(self) -> None:
        assert encode_string(7, "8c2") == b"\x3a\x038c2"

    def test_string_rejects_bytes(self) -> None:
        with pytest.raises(SerializationError, match="expects str"):
            encode_string(7, b"8c2")  # type: ignore[arg-type]

    def test_repeated_bytes(self) -> None:
        assert encode_repeated_bytes(2, [b"a", b""]) == b"\x12\x01a\x12\x00"
