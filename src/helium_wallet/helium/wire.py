"""Canonical wire encoding — protobuf-compatible field serialization.

Transactions travel to the node as protobuf messages wrapped in a
``blockchain_txn`` envelope. Only the subset needed for encoding is
implemented here:
- Base-128 varint encoding
- Field keys (field number + wire type)
- ``uint64`` / ``bytes`` / ``string`` / embedded message fields

Proto3 semantics apply: scalar fields holding their default value (``0``,
empty bytes, empty string) are omitted from the output, which is why the
serialized size of a transaction depends on its amounts and fee.
"""

from __future__ import annotations

from helium_wallet.errors.wallet_errors import SerializationError

# ---------------------------------------------------------------------------
# Wire types
# ---------------------------------------------------------------------------

WIRE_VARINT = 0
WIRE_LENGTH_DELIMITED = 2

_MAX_UINT64 = (1 << 64) - 1


# ---------------------------------------------------------------------------
# Varint encoding
# ---------------------------------------------------------------------------


def encode_varint(n: int) -> bytes:
    """Encode a non-negative integer as a protobuf base-128 varint.

    Raises:
        SerializationError: If ``n`` is not an integer in the uint64 range.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        msg = f"varint value must be an int, got {type(n).__name__}"
        raise SerializationError(msg)
    if n < 0 or n > _MAX_UINT64:
        msg = f"varint value out of uint64 range: {n}"
        raise SerializationError(msg)
    result = bytearray()
    while n > 0x7F:
        result.append((n & 0x7F) | 0x80)
        n >>= 7
    result.append(n)
    return bytes(result)


def field_key(field_number: int, wire_type: int) -> bytes:
    """Encode the key (tag) preceding a field value."""
    return encode_varint((field_number << 3) | wire_type)


# ---------------------------------------------------------------------------
# Field encoders
# ---------------------------------------------------------------------------


def encode_uint64(field_number: int, value: int) -> bytes:
    """Encode a ``uint64``/``uint32`` field; zero is omitted."""
    if value == 0:
        return b""
    return field_key(field_number, WIRE_VARINT) + encode_varint(value)


def encode_bytes(field_number: int, value: bytes, *, always: bool = False) -> bytes:
    """Encode a ``bytes`` field; empty values are omitted unless *always*.

    *always* is used for embedded messages and repeated entries, which are
    written even when their encoding is empty.
    """
    if not isinstance(value, (bytes, bytearray)):
        msg = f"field {field_number} expects bytes, got {type(value).__name__}"
        raise SerializationError(msg)
    if not value and not always:
        return b""
    return field_key(field_number, WIRE_LENGTH_DELIMITED) + encode_varint(len(value)) + bytes(value)


def encode_string(field_number: int, value: str) -> bytes:
    """Encode a UTF-8 ``string`` field; empty strings are omitted."""
    if not isinstance(value, str):
        msg = f"field {field_number} expects str, got {type(value).__name__}"
        raise SerializationError(msg)
    return encode_bytes(field_number, value.encode("utf-8"))


def encode_message(field_number: int, payload: bytes) -> bytes:
    """Encode an embedded message field (present even if empty)."""
    return encode_bytes(field_number, payload, always=True)


def encode_repeated_bytes(field_number: int, values: list[bytes]) -> bytes:
    """Encode a ``repeated bytes`` field, one key per element."""
    return b"".join(encode_bytes(field_number, v, always=True) for v in values)
