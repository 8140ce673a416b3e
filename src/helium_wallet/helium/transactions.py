"""Transaction drafts — the closed set of transaction kinds the wallet builds.

Each kind is a dataclass carrying its payload fields, a universal ``fee``
field and one or more signature slots. A kind declares:
- ``ENVELOPE_FIELD``: its field number inside the ``blockchain_txn`` envelope
- ``SIGNATURE_FIELDS``: the signature slots always present at broadcast time
- ``HAS_PAYER``: whether it carries an optional ``payer`` / ``payer_signature``

Field numbers follow the node's protobuf definitions and must not change.
"""

from __future__ import annotations

import base64
import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Self

from helium_wallet.helium.wire import (
    encode_bytes,
    encode_message,
    encode_repeated_bytes,
    encode_string,
    encode_uint64,
)

if TYPE_CHECKING:
    from helium_wallet.helium.keys import Keypair

# Length of an ed25519 signature as produced by the signer
SIGNATURE_SIZE = 64


# ---------------------------------------------------------------------------
# Base draft
# ---------------------------------------------------------------------------


class TransactionDraft:
    """Common behaviour shared by every transaction kind."""

    KIND: ClassVar[str] = ""
    ENVELOPE_FIELD: ClassVar[int] = 0
    SIGNATURE_FIELDS: ClassVar[tuple[str, ...]] = ("signature",)
    HAS_PAYER: ClassVar[bool] = False

    fee: int

    def encode(self) -> bytes:
        """Serialize the transaction body (without envelope)."""
        raise NotImplementedError

    def in_envelope(self) -> bytes:
        """Serialize the transaction wrapped in its ``blockchain_txn`` envelope."""
        return encode_message(self.ENVELOPE_FIELD, self.encode())

    def to_b64(self) -> str:
        """Base64 of the enveloped transaction, as submitted to the node."""
        return base64.b64encode(self.in_envelope()).decode("ascii")

    def copy(self, **changes: object) -> Self:
        """Return a shallow copy with *changes* applied."""
        return dataclasses.replace(self, **changes)  # type: ignore[type-var]

    def _signature_slots(self) -> tuple[str, ...]:
        if self.HAS_PAYER:
            return (*self.SIGNATURE_FIELDS, "payer_signature")
        return self.SIGNATURE_FIELDS

    def fee_sizing_copy(self) -> Self:
        """Copy used to size the transaction for fee calculation.

        The fee is zeroed and every signature slot holds a zero placeholder
        of the real signature length. The payer signature is only counted
        when a payer is set.
        """
        placeholder = bytes(SIGNATURE_SIZE)
        changes: dict[str, object] = {"fee": 0}
        for name in self.SIGNATURE_FIELDS:
            changes[name] = placeholder
        if self.HAS_PAYER:
            changes["payer_signature"] = placeholder if getattr(self, "payer", b"") else b""
        return self.copy(**changes)

    def signing_payload(self) -> bytes:
        """Bytes every signer signs: the body with all signature slots empty."""
        return self.copy(**{name: b"" for name in self._signature_slots()}).encode()

    def sign(self, keypair: Keypair, slot: str | None = None) -> bytes:
        """Sign the draft and store the signature in *slot*.

        Args:
            keypair: Signing keypair.
            slot: Signature field to fill; defaults to the first slot.

        Returns:
            The 64-byte signature.
        """
        slot = slot or self.SIGNATURE_FIELDS[0]
        if slot not in self._signature_slots():
            msg = f"{self.KIND} has no signature slot {slot!r}"
            raise ValueError(msg)
        signature = keypair.sign(self.signing_payload())
        setattr(self, slot, signature)
        return signature


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


@dataclass
class PaymentV1(TransactionDraft):
    """Single-payee payment."""

    KIND: ClassVar[str] = "payment_v1"
    ENVELOPE_FIELD: ClassVar[int] = 8

    payer: bytes = b""
    payee: bytes = b""
    amount: int = 0
    fee: int = 0
    nonce: int = 0
    signature: bytes = b""

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.payer)
            + encode_bytes(2, self.payee)
            + encode_uint64(3, self.amount)
            + encode_uint64(4, self.fee)
            + encode_uint64(5, self.nonce)
            + encode_bytes(6, self.signature)
        )


@dataclass
class Payment:
    """One payee/amount pair of a multi-payee payment."""

    payee: bytes
    amount: int = 0

    def encode(self) -> bytes:
        return encode_bytes(1, self.payee) + encode_uint64(2, self.amount)


@dataclass
class PaymentV2(TransactionDraft):
    """Multi-payee payment; at most one payment may be a sweep."""

    KIND: ClassVar[str] = "payment_v2"
    ENVELOPE_FIELD: ClassVar[int] = 21

    payer: bytes = b""
    payments: list[Payment] = field(default_factory=list)
    fee: int = 0
    nonce: int = 0
    signature: bytes = b""

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.payer)
            + b"".join(encode_message(2, p.encode()) for p in self.payments)
            + encode_uint64(3, self.fee)
            + encode_uint64(4, self.nonce)
            + encode_bytes(5, self.signature)
        )

    @property
    def total(self) -> int:
        """Sum of all payment amounts in bones."""
        return sum(p.amount for p in self.payments)


# ---------------------------------------------------------------------------
# HTLC
# ---------------------------------------------------------------------------


@dataclass
class CreateHtlcV1(TransactionDraft):
    """Hash time-locked contract creation."""

    KIND: ClassVar[str] = "create_htlc_v1"
    ENVELOPE_FIELD: ClassVar[int] = 4

    payer: bytes = b""
    payee: bytes = b""
    address: bytes = b""
    hashlock: bytes = b""
    timelock: int = 0
    amount: int = 0
    fee: int = 0
    signature: bytes = b""
    nonce: int = 0

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.payer)
            + encode_bytes(2, self.payee)
            + encode_bytes(3, self.address)
            + encode_bytes(4, self.hashlock)
            + encode_uint64(5, self.timelock)
            + encode_uint64(6, self.amount)
            + encode_uint64(7, self.fee)
            + encode_bytes(8, self.signature)
            + encode_uint64(9, self.nonce)
        )


@dataclass
class RedeemHtlcV1(TransactionDraft):
    """Hash time-locked contract redemption."""

    KIND: ClassVar[str] = "redeem_htlc_v1"
    ENVELOPE_FIELD: ClassVar[int] = 11

    payee: bytes = b""
    address: bytes = b""
    preimage: bytes = b""
    fee: int = 0
    signature: bytes = b""

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.payee)
            + encode_bytes(2, self.address)
            + encode_bytes(3, self.preimage)
            + encode_uint64(4, self.fee)
            + encode_bytes(5, self.signature)
        )


# ---------------------------------------------------------------------------
# Security tokens / burns
# ---------------------------------------------------------------------------


@dataclass
class SecurityExchangeV1(TransactionDraft):
    """Transfer of security tokens."""

    KIND: ClassVar[str] = "security_exchange_v1"
    ENVELOPE_FIELD: ClassVar[int] = 14

    payer: bytes = b""
    payee: bytes = b""
    amount: int = 0
    fee: int = 0
    nonce: int = 0
    signature: bytes = b""

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.payer)
            + encode_bytes(2, self.payee)
            + encode_uint64(3, self.amount)
            + encode_uint64(4, self.fee)
            + encode_uint64(5, self.nonce)
            + encode_bytes(6, self.signature)
        )


@dataclass
class TokenBurnV1(TransactionDraft):
    """Burn of HNT into data credits for a payee."""

    KIND: ClassVar[str] = "token_burn_v1"
    ENVELOPE_FIELD: ClassVar[int] = 17

    payer: bytes = b""
    payee: bytes = b""
    amount: int = 0
    nonce: int = 0
    signature: bytes = b""
    fee: int = 0
    memo: int = 0

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.payer)
            + encode_bytes(2, self.payee)
            + encode_uint64(3, self.amount)
            + encode_uint64(4, self.nonce)
            + encode_bytes(5, self.signature)
            + encode_uint64(6, self.fee)
            + encode_uint64(7, self.memo)
        )


# ---------------------------------------------------------------------------
# Hotspots and routing
# ---------------------------------------------------------------------------


@dataclass
class AddGatewayV1(TransactionDraft):
    """Hotspot onboarding, signed by owner and gateway (and optional payer)."""

    KIND: ClassVar[str] = "add_gateway_v1"
    ENVELOPE_FIELD: ClassVar[int] = 1
    SIGNATURE_FIELDS: ClassVar[tuple[str, ...]] = ("owner_signature", "gateway_signature")
    HAS_PAYER: ClassVar[bool] = True

    owner: bytes = b""
    gateway: bytes = b""
    owner_signature: bytes = b""
    gateway_signature: bytes = b""
    payer: bytes = b""
    payer_signature: bytes = b""
    staking_fee: int = 0
    fee: int = 0

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.owner)
            + encode_bytes(2, self.gateway)
            + encode_bytes(3, self.owner_signature)
            + encode_bytes(4, self.gateway_signature)
            + encode_bytes(5, self.payer)
            + encode_bytes(6, self.payer_signature)
            + encode_uint64(7, self.staking_fee)
            + encode_uint64(8, self.fee)
        )


@dataclass
class AssertLocationV1(TransactionDraft):
    """Hotspot location assertion (h3 index as hex string)."""

    KIND: ClassVar[str] = "assert_location_v1"
    ENVELOPE_FIELD: ClassVar[int] = 2
    SIGNATURE_FIELDS: ClassVar[tuple[str, ...]] = ("owner_signature", "gateway_signature")
    HAS_PAYER: ClassVar[bool] = True

    gateway: bytes = b""
    owner: bytes = b""
    payer: bytes = b""
    gateway_signature: bytes = b""
    owner_signature: bytes = b""
    payer_signature: bytes = b""
    location: str = ""
    nonce: int = 0
    staking_fee: int = 0
    fee: int = 0

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.gateway)
            + encode_bytes(2, self.owner)
            + encode_bytes(3, self.payer)
            + encode_bytes(4, self.gateway_signature)
            + encode_bytes(5, self.owner_signature)
            + encode_bytes(6, self.payer_signature)
            + encode_string(7, self.location)
            + encode_uint64(8, self.nonce)
            + encode_uint64(9, self.staking_fee)
            + encode_uint64(10, self.fee)
        )


@dataclass
class OuiV1(TransactionDraft):
    """Organizationally unique identifier (router) registration."""

    KIND: ClassVar[str] = "oui_v1"
    ENVELOPE_FIELD: ClassVar[int] = 7
    SIGNATURE_FIELDS: ClassVar[tuple[str, ...]] = ("owner_signature",)
    HAS_PAYER: ClassVar[bool] = True

    owner: bytes = b""
    addresses: list[bytes] = field(default_factory=list)
    filter: bytes = b""
    requested_subnet_size: int = 0
    payer: bytes = b""
    staking_fee: int = 0
    fee: int = 0
    owner_signature: bytes = b""
    payer_signature: bytes = b""
    oui: int = 0

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.owner)
            + encode_repeated_bytes(2, self.addresses)
            + encode_bytes(3, self.filter)
            + encode_uint64(4, self.requested_subnet_size)
            + encode_bytes(5, self.payer)
            + encode_uint64(6, self.staking_fee)
            + encode_uint64(7, self.fee)
            + encode_bytes(8, self.owner_signature)
            + encode_bytes(9, self.payer_signature)
            + encode_uint64(10, self.oui)
        )


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


@dataclass
class StakeValidatorV1(TransactionDraft):
    """Stake HNT to a validator address."""

    KIND: ClassVar[str] = "stake_validator_v1"
    ENVELOPE_FIELD: ClassVar[int] = 28
    SIGNATURE_FIELDS: ClassVar[tuple[str, ...]] = ("owner_signature",)

    address: bytes = b""
    owner: bytes = b""
    stake: int = 0
    owner_signature: bytes = b""
    fee: int = 0

    def encode(self) -> bytes:
        return (
            encode_bytes(1, self.address)
            + encode_bytes(2, self.owner)
            + encode_uint64(3, self.stake)
            + encode_bytes(4, self.owner_signature)
            + encode_uint64(5, self.fee)
        )


TRANSACTION_KINDS: tuple[type[TransactionDraft], ...] = (
    PaymentV1,
    PaymentV2,
    CreateHtlcV1,
    RedeemHtlcV1,
    SecurityExchangeV1,
    TokenBurnV1,
    AddGatewayV1,
    AssertLocationV1,
    OuiV1,
    StakeValidatorV1,
)
