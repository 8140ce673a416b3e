"""Payment service — build, fee-price, sign and optionally submit payments.

Implements the payment lifecycle:
1. Validate payees (at most one sweep payee)
2. Fetch the payer account and build a payment_v2 draft
3. Resolve the fee (and the sweep amount when a sweep payee is present)
4. Sign, then submit only when committing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from helium_wallet.errors.wallet_errors import InvalidInputError
from helium_wallet.helium.amounts import hnt_to_bones
from helium_wallet.helium.fees import txn_fee
from helium_wallet.helium.keys import PublicKey
from helium_wallet.helium.sweep import resolve_sweep
from helium_wallet.helium.transactions import Payment, PaymentV2

if TYPE_CHECKING:
    from helium_wallet.api.models import PendingTxnStatus
    from helium_wallet.engine.client import WalletEngine

logger = logging.getLogger(__name__)

SWEEP = "sweep"


# ---------------------------------------------------------------------------
# Payees
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Payee:
    """A payment destination.

    Attributes:
        address: Payee public key.
        amount: Amount in bones, or None for the sweep payee.
    """

    address: PublicKey
    amount: int | None = None

    @property
    def is_sweep(self) -> bool:
        return self.amount is None

    @classmethod
    def parse(cls, value: str) -> Payee:
        """Parse ``<address>=<hnt>`` or ``<address>=sweep``.

        Raises:
            InvalidInputError: On a malformed address or amount.
        """
        address, sep, amount = value.partition("=")
        if not sep:
            msg = f"invalid KEY=value: missing `=` in `{value}`"
            raise InvalidInputError(msg)
        payee = PublicKey.from_address(address.strip())
        amount = amount.strip()
        if amount == SWEEP:
            return cls(address=payee)
        return cls(address=payee, amount=hnt_to_bones(amount))


@dataclass
class PaymentResult:
    """Outcome of :meth:`PaymentService.pay`.

    Attributes:
        txn: The signed payment.
        envelope: Base64 of the enveloped transaction.
        status: Pending status when the payment was submitted.
    """

    txn: PaymentV2
    envelope: str
    status: PendingTxnStatus | None = None


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class PaymentService:
    """Business logic for payments, including sweeps."""

    def __init__(self, engine: WalletEngine) -> None:
        self._engine = engine

    async def pay(
        self,
        payees: list[Payee],
        *,
        fee: int | None = None,
        oracle_window: int | None = None,
        commit: bool = False,
    ) -> PaymentResult:
        """Build, price and sign a payment to *payees*.

        Args:
            payees: Destinations; at most one may be a sweep.
            fee: Manual DC fee; computed from chain vars if None.
            oracle_window: Minutes of oracle predictions for sweeps;
                defaults to the configured window.
            commit: Submit the signed payment to the node.

        Returns:
            The signed payment and, when committed, its pending status.

        Raises:
            InvalidInputError: On empty payees, a negative oracle window
                or more than one sweep payee.
        """
        if not payees:
            msg = "at least one payee is required"
            raise InvalidInputError(msg)
        if oracle_window is not None and oracle_window < 0:
            msg = f"oracle window must be non-negative, got {oracle_window}"
            raise InvalidInputError(msg)

        payments: list[Payment] = []
        sweep_index: int | None = None
        pay_total = 0
        for idx, payee in enumerate(payees):
            if payee.amount is None:
                if sweep_index is not None:
                    msg = "cannot sweep to two addresses in the same transaction"
                    raise InvalidInputError(msg)
                sweep_index = idx
                amount = 0
            else:
                amount = payee.amount
                pay_total += amount
            payments.append(Payment(payee=payee.address.to_bytes(), amount=amount))

        engine = self._engine
        client = engine.client
        keypair = engine.keypair
        settings = engine.config.fees

        account = await client.get_account(keypair.public_key.address)
        txn = PaymentV2(
            payer=keypair.pubkey_bin(),
            payments=payments,
            nonce=account.speculative_nonce + 1,
        )

        if sweep_index is None:
            txn.fee = fee if fee is not None else txn_fee(txn, await client.get_fee_config())
        else:
            fee_config = await client.get_fee_config() if fee is None else None
            await resolve_sweep(
                client,
                account,
                txn,
                sweep_index,
                fee_config,
                fixed_payment_total=pay_total,
                manual_fee=fee,
                oracle_window=settings.oracle_window if oracle_window is None else oracle_window,
                max_iterations=settings.sweep_max_iterations,
            )

        txn.sign(keypair)
        envelope = txn.to_b64()
        logger.info(
            "Built payment of %d bones to %d payees (fee %d DC, nonce %d)",
            txn.total,
            len(txn.payments),
            txn.fee,
            txn.nonce,
        )

        status = await client.submit_txn(envelope) if commit else None
        return PaymentResult(txn=txn, envelope=envelope, status=status)
