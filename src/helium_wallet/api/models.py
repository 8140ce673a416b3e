"""Node API data models — accounts, oracle prices, pending transactions.

Data classes for the JSON objects the node API returns. Responses wrap
their payload in a ``data`` key; the ``from_dict`` constructors take the
unwrapped payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

# Oracle prices are reported as integer USD with 8 implied decimals
ORACLE_PRICE_SCALE = Decimal(100_000_000)


def oracle_price_to_decimal(raw: int | str) -> Decimal:
    """Convert an API oracle price integer to USD per HNT."""
    return Decimal(raw) / ORACLE_PRICE_SCALE


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Account:
    """Snapshot of an account's balances and nonce.

    Attributes:
        address: Base58 account address.
        balance: HNT balance in bones.
        dc_balance: Data credit balance.
        speculative_nonce: Last nonce including pending transactions.
    """

    address: str
    balance: int = 0
    dc_balance: int = 0
    speculative_nonce: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        """Create an Account from the ``/v1/accounts/<address>`` payload."""
        return cls(
            address=data.get("address", ""),
            balance=int(data.get("balance", 0)),
            dc_balance=int(data.get("dc_balance", 0)),
            speculative_nonce=int(data.get("speculative_nonce", 0)),
        )


# ---------------------------------------------------------------------------
# Oracle prices
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OraclePrice:
    """A current or predicted oracle price.

    Attributes:
        timestamp: Unix seconds at which the price applies.
        price: USD per HNT.
    """

    timestamp: int
    price: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OraclePrice:
        """Create from an ``/v1/oracle/predictions`` entry."""
        return cls(
            timestamp=int(data.get("time", data.get("timestamp", 0))),
            price=oracle_price_to_decimal(data.get("price", 0)),
        )


# ---------------------------------------------------------------------------
# Pending transaction
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PendingTxnStatus:
    """Result of submitting a transaction.

    Attributes:
        hash: Hash the node assigned to the pending transaction.
    """

    hash: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingTxnStatus:
        """Create from the ``/v1/pending_transactions`` response payload."""
        return cls(hash=data.get("hash", ""))
