"""Keys and addresses — ed25519 keypairs, binary public keys, base58 addresses.

A public key travels in transactions as 33 bytes: a tag byte followed by the
32-byte ed25519 key. The tag packs the network and key type::

    tag = (network << 4) | key_type

Addresses are the base58 encoding of ``0x00 || tag || key`` with a
4-byte double-SHA256 checksum.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Self

from ecdsa import BadSignatureError, Ed25519, SigningKey

from helium_wallet.errors.wallet_errors import InvalidInputError
from helium_wallet.utils.crypto import sha256d

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

KEY_TYPE_ED25519 = 1
ED25519_KEY_SIZE = 32
PUBKEY_BIN_SIZE = ED25519_KEY_SIZE + 1

# Version byte prefixed to the binary key before Base58Check encoding
_ADDRESS_VERSION = b"\x00"


class KeyNetwork(enum.IntEnum):
    """Network nibble of a key tag."""

    MAINNET = 0
    TESTNET = 1


# ---------------------------------------------------------------------------
# Base58 (address text form)
# ---------------------------------------------------------------------------

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_CHECKSUM_SIZE = 4


def b58encode(payload: bytes, *, check: bool = False) -> str:
    """Base58 text of *payload*, optionally suffixed with a SHA256d checksum."""
    if check:
        payload += sha256d(payload)[:_CHECKSUM_SIZE]
    body = payload.lstrip(b"\x00")
    n = int.from_bytes(body, "big")
    digits: list[str] = []
    while n:
        n, digit = divmod(n, 58)
        digits.append(_B58_ALPHABET[digit])
    return "1" * (len(payload) - len(body)) + "".join(reversed(digits))


def b58decode(text: str, *, check: bool = False) -> bytes:
    """Inverse of :func:`b58encode`; with *check* the checksum is verified and stripped.

    Raises:
        ValueError: On characters outside the alphabet or a bad checksum.
    """
    n = 0
    for char in text:
        digit = _B58_ALPHABET.find(char)
        if digit < 0:
            msg = f"invalid base58 character {char!r}"
            raise ValueError(msg)
        n = n * 58 + digit
    zeros = len(text) - len(text.lstrip("1"))
    raw = bytes(zeros) + (n.to_bytes((n.bit_length() + 7) // 8, "big") if n else b"")
    if not check:
        return raw
    payload, checksum = raw[:-_CHECKSUM_SIZE], raw[-_CHECKSUM_SIZE:]
    if len(raw) < _CHECKSUM_SIZE or checksum != sha256d(payload)[:_CHECKSUM_SIZE]:
        msg = "base58 checksum mismatch"
        raise ValueError(msg)
    return payload


# ---------------------------------------------------------------------------
# PublicKey
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PublicKey:
    """An ed25519 public key bound to a network.

    Attributes:
        key: 32-byte ed25519 public key.
        network: Network the key belongs to.
    """

    key: bytes
    network: KeyNetwork = KeyNetwork.MAINNET

    @property
    def tag(self) -> int:
        return (self.network << 4) | KEY_TYPE_ED25519

    def to_bytes(self) -> bytes:
        """33-byte binary form used inside transactions."""
        return bytes([self.tag]) + self.key

    @property
    def address(self) -> str:
        """Base58Check address string."""
        return b58encode(_ADDRESS_VERSION + self.to_bytes(), check=True)

    def __str__(self) -> str:
        return self.address

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """Parse the 33-byte binary form.

        Raises:
            InvalidInputError: On a bad length, key type or network.
        """
        if len(data) != PUBKEY_BIN_SIZE:
            msg = f"invalid public key length: {len(data)}"
            raise InvalidInputError(msg)
        tag = data[0]
        if tag & 0x0F != KEY_TYPE_ED25519:
            msg = f"unsupported key type: {tag & 0x0F}"
            raise InvalidInputError(msg)
        try:
            network = KeyNetwork(tag >> 4)
        except ValueError:
            msg = f"unsupported key network: {tag >> 4}"
            raise InvalidInputError(msg) from None
        return cls(key=bytes(data[1:]), network=network)

    @classmethod
    def from_address(cls, address: str) -> Self:
        """Parse a Base58Check address.

        Raises:
            InvalidInputError: If the address is malformed.
        """
        try:
            payload = b58decode(address, check=True)
        except ValueError as exc:
            msg = f"invalid address {address!r}: {exc}"
            raise InvalidInputError(msg) from exc
        if payload[:1] != _ADDRESS_VERSION:
            msg = f"invalid address {address!r}: unknown version byte"
            raise InvalidInputError(msg)
        return cls.from_bytes(payload[1:])


# ---------------------------------------------------------------------------
# Keypair
# ---------------------------------------------------------------------------


class Keypair:
    """An ed25519 signing keypair."""

    def __init__(self, signing_key: SigningKey, network: KeyNetwork = KeyNetwork.MAINNET) -> None:
        self._signing_key = signing_key
        self.public_key = PublicKey(
            key=signing_key.get_verifying_key().to_string(),
            network=network,
        )

    @classmethod
    def from_seed(cls, seed: bytes, network: KeyNetwork = KeyNetwork.MAINNET) -> Self:
        """Build a keypair from a 32-byte ed25519 seed."""
        if len(seed) != ED25519_KEY_SIZE:
            msg = f"ed25519 seed must be {ED25519_KEY_SIZE} bytes, got {len(seed)}"
            raise InvalidInputError(msg)
        return cls(SigningKey.from_string(seed, curve=Ed25519), network)

    @classmethod
    def from_entropy(cls, entropy: bytes, network: KeyNetwork = KeyNetwork.MAINNET) -> Self:
        """Build the keypair a mnemonic's entropy restores."""
        return cls.from_seed(entropy[:ED25519_KEY_SIZE], network)

    @classmethod
    def generate(cls, network: KeyNetwork = KeyNetwork.MAINNET) -> Self:
        """Generate a fresh random keypair."""
        return cls.from_seed(os.urandom(ED25519_KEY_SIZE), network)

    def sign(self, data: bytes) -> bytes:
        """Sign *data*, returning the 64-byte ed25519 signature."""
        return self._signing_key.sign(data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        """Verify a signature made by this keypair."""
        try:
            return self._signing_key.get_verifying_key().verify(signature, data)
        except BadSignatureError:
            return False

    def pubkey_bin(self) -> bytes:
        """33-byte binary public key."""
        return self.public_key.to_bytes()
