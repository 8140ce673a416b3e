"""Transaction fee model — size-based DC fees and per-kind staking fees.

The transaction fee is a pure function of the canonical encoding of a
transaction with a zero fee and placeholder signatures:

    billable_units = ceil(payload_size / dc_unit_size), at least 1
    fee            = billable_units * fee_multiplier

Staking fees are flat per kind (or per requested subnet size for OUIs)
and independent of the payload size.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from helium_wallet.errors.wallet_errors import InvalidInputError
from helium_wallet.helium.transactions import AddGatewayV1, AssertLocationV1, OuiV1

if TYPE_CHECKING:
    from helium_wallet.helium.transactions import TransactionDraft

LEGACY_STAKING_FEE = 1
LEGACY_TXN_FEE = 0

# Payload bytes covered by one data credit while fees are active
DC_PAYLOAD_SIZE = 24


# ---------------------------------------------------------------------------
# Fee configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeeConfig:
    """Chain fee parameters, loaded once per run.

    Attributes:
        fees_active: Whether transaction fees are enabled on chain.
        fee_multiplier: Multiplier applied to the billable unit count.
        staking_fee_add_gateway: Staking fee (DC) for adding a gateway.
        staking_fee_assert_location: Staking fee (DC) for asserting a location.
        staking_fee_oui: Base staking fee (DC) for an OUI.
        staking_fee_oui_per_address: Staking fee (DC) per requested OUI address.
    """

    fees_active: bool = False
    fee_multiplier: int = 0
    staking_fee_add_gateway: int = LEGACY_STAKING_FEE
    staking_fee_assert_location: int = LEGACY_STAKING_FEE
    staking_fee_oui: int = LEGACY_STAKING_FEE
    staking_fee_oui_per_address: int = 0

    @classmethod
    def legacy(cls) -> FeeConfig:
        """Configuration of a chain without transaction fees."""
        return cls()

    @classmethod
    def from_chain_vars(cls, data: dict[str, Any]) -> FeeConfig:
        """Build from the node's chain variables (``/v1/vars``).

        A chain without ``txn_fees`` (or with it disabled) is legacy.
        """
        if not data.get("txn_fees", False):
            return cls.legacy()
        return cls(
            fees_active=True,
            fee_multiplier=int(data.get("txn_fee_multiplier", 0)),
            staking_fee_add_gateway=int(data.get("staking_fee_txn_add_gateway_v1", 0)),
            staking_fee_assert_location=int(data.get("staking_fee_txn_assert_location_v1", 0)),
            staking_fee_oui=int(data.get("staking_fee_txn_oui_v1", 0)),
            staking_fee_oui_per_address=int(data.get("staking_fee_txn_oui_v1_per_address", 0)),
        )

    @property
    def dc_unit_size(self) -> int:
        """Payload bytes paid for by one billable unit."""
        return DC_PAYLOAD_SIZE if self.fees_active else 1


# ---------------------------------------------------------------------------
# Fee functions
# ---------------------------------------------------------------------------


def billable_units(payload_size: int, config: FeeConfig) -> int:
    """Number of billable units for a payload of *payload_size* bytes."""
    unit = config.dc_unit_size
    if payload_size <= unit:
        return 1
    return -(-payload_size // unit)


def txn_fee(draft: TransactionDraft, config: FeeConfig) -> int:
    """Compute the DC transaction fee for *draft*.

    The draft itself is not modified.

    Raises:
        SerializationError: If the draft cannot be encoded.
    """
    payload = draft.fee_sizing_copy().in_envelope()
    return billable_units(len(payload), config) * config.fee_multiplier


def txn_staking_fee(draft: TransactionDraft, config: FeeConfig) -> int:
    """Compute the DC staking fee for *draft*.

    Raises:
        InvalidInputError: If the transaction kind carries no staking fee.
    """
    if isinstance(draft, AddGatewayV1):
        return config.staking_fee_add_gateway
    if isinstance(draft, AssertLocationV1):
        return config.staking_fee_assert_location
    if isinstance(draft, OuiV1):
        return config.staking_fee_oui + draft.requested_subnet_size * config.staking_fee_oui_per_address
    msg = f"{draft.KIND} has no staking fee"
    raise InvalidInputError(msg)
