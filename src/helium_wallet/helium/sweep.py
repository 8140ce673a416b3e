"""Sweep resolution — pay "whatever remains" to one payee.

The fee of a payment depends on its encoded size, and the encoded size
depends on the swept amount (varints grow with the value). The sweep amount
in turn depends on the fee whenever the fee must be paid by an implicit HNT
burn. :func:`resolve_sweep` iterates until the fee computed from the
updated draft equals the fee the sweep amount was derived from.

When the account holds more data credits than the fee, the fee is paid in
DC and the sweep is simply the balance left after the fixed payments.
Otherwise enough HNT is reserved to burn for the fee at the oracle price:

    bones_needed = ceil(fee_dc * 1000 / usd_per_hnt)

(one DC is $0.00001 and one HNT is 10^8 bones).
"""

from __future__ import annotations

import logging
import time
from decimal import ROUND_CEILING, Decimal, DecimalException
from typing import TYPE_CHECKING

from helium_wallet.errors.wallet_errors import (
    ArithmeticFailureError,
    ConvergenceError,
    InsufficientFundsError,
    InvalidInputError,
)
from helium_wallet.helium.fees import txn_fee

if TYPE_CHECKING:
    from collections.abc import Iterable

    from helium_wallet.api.client import HeliumClient
    from helium_wallet.api.models import Account, OraclePrice
    from helium_wallet.helium.fees import FeeConfig
    from helium_wallet.helium.transactions import PaymentV2

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10

# DC ($10^-5) to bones (HNT 10^-8) scale
DC_TO_BONES_SCALE = 1000

_MAX_UINT64 = (1 << 64) - 1


# ---------------------------------------------------------------------------
# Oracle price selection
# ---------------------------------------------------------------------------


def select_oracle_price(
    current: Decimal,
    predictions: Iterable[OraclePrice],
    window_minutes: int,
    now: int,
) -> Decimal:
    """Highest price among *current* and the predictions inside the window.

    Predictions already in the past are kept (the API may lag real time);
    future ones are kept when less than ``window_minutes`` minutes ahead.
    """
    window = window_minutes * 60
    price = current
    for prediction in predictions:
        if prediction.timestamp >= now and prediction.timestamp - now >= window:
            continue
        price = max(price, prediction.price)
    return price


async def fetch_oracle_price(
    client: HeliumClient,
    window_minutes: int,
    *,
    now: int | None = None,
) -> Decimal:
    """Oracle price used to reserve HNT for a fee burn.

    A window of 0 uses the current price verbatim.
    """
    current = await client.get_oracle_price_current()
    if window_minutes == 0:
        return current
    predictions = await client.get_oracle_price_predicted()
    if now is None:
        now = int(time.time())
    return select_oracle_price(current, predictions, window_minutes, now)


# ---------------------------------------------------------------------------
# Remaining balance
# ---------------------------------------------------------------------------


def bones_for_fee(fee: int, oracle_price: Decimal) -> int:
    """Bones that must be burned to cover *fee* DC at *oracle_price* USD/HNT.

    Raises:
        ArithmeticFailureError: On a non-positive price or a result that
            does not fit in a uint64.
    """
    if oracle_price <= 0:
        msg = f"oracle price must be positive, got {oracle_price}"
        raise ArithmeticFailureError(msg)
    try:
        needed = (Decimal(fee) * DC_TO_BONES_SCALE / oracle_price).to_integral_value(
            rounding=ROUND_CEILING
        )
    except DecimalException as exc:
        msg = f"failed to convert fee {fee} at price {oracle_price}: {exc}"
        raise ArithmeticFailureError(msg) from exc
    if needed > _MAX_UINT64:
        msg = f"bones needed for fee {fee} overflow uint64: {needed}"
        raise ArithmeticFailureError(msg)
    return int(needed)


def remaining_bones(
    account: Account,
    fixed_payment_total: int,
    fee: int,
    oracle_price: Decimal | None = None,
) -> int:
    """Amount left for the sweep payee after fixed payments and the fee.

    *oracle_price* is only needed when the DC balance does not exceed the fee.

    Raises:
        InsufficientFundsError: If the result would be negative.
        InvalidInputError: If the fee must be burned and no price is given.
    """
    required = fixed_payment_total
    if account.dc_balance <= fee:
        if oracle_price is None:
            msg = "oracle price required when the fee is paid by burning HNT"
            raise InvalidInputError(msg)
        required += bones_for_fee(fee, oracle_price)
    if required > account.balance:
        raise InsufficientFundsError(balance=account.balance, required=required)
    return account.balance - required


# ---------------------------------------------------------------------------
# Fixed-point resolution
# ---------------------------------------------------------------------------


async def resolve_sweep(
    client: HeliumClient,
    account: Account,
    draft: PaymentV2,
    sweep_index: int,
    config: FeeConfig | None,
    *,
    fixed_payment_total: int,
    manual_fee: int | None = None,
    oracle_window: int = 120,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    now: int | None = None,
) -> tuple[int, int]:
    """Resolve the fee and the sweep amount of *draft*.

    The sweep payment (``draft.payments[sweep_index]``) and ``draft.fee`` are
    updated in place.

    Args:
        client: Source of oracle prices.
        account: Payer account snapshot.
        draft: Payment holding the sweep payment.
        sweep_index: Index of the sweep payment in ``draft.payments``.
        config: Fee configuration; only needed without a manual fee.
        fixed_payment_total: Sum of the non-sweep payments, in bones.
        manual_fee: Fee set by the caller; skips the fixed-point iteration.
        oracle_window: Minutes of predicted prices to consider (0 = current).
        max_iterations: Cap on fixed-point iterations.
        now: Unix time used for oracle window filtering (defaults to now).

    Returns:
        ``(fee, sweep_amount)``

    Raises:
        InsufficientFundsError: If the sweep amount would be negative.
        InvalidInputError: Without a manual fee or a fee configuration.
        ArithmeticFailureError: On invalid oracle prices.
        ConvergenceError: If the fee does not settle within *max_iterations*.
    """
    payment = draft.payments[sweep_index]
    oracle_price: Decimal | None = None

    async def _remaining(fee: int) -> int:
        nonlocal oracle_price
        if account.dc_balance <= fee and oracle_price is None:
            oracle_price = await fetch_oracle_price(client, oracle_window, now=now)
        return remaining_bones(account, fixed_payment_total, fee, oracle_price)

    if manual_fee is not None:
        payment.amount = await _remaining(manual_fee)
        draft.fee = manual_fee
        return manual_fee, payment.amount

    if config is None:
        msg = "a fee configuration is required without a manual fee"
        raise InvalidInputError(msg)

    payment.amount = 0
    fee = txn_fee(draft, config)
    for iteration in range(1, max_iterations + 1):
        payment.amount = await _remaining(fee)
        new_fee = txn_fee(draft, config)
        logger.debug(
            "Sweep iteration %d: fee %d -> %d, sweep %d bones",
            iteration,
            fee,
            new_fee,
            payment.amount,
        )
        if new_fee == fee:
            draft.fee = fee
            return fee, payment.amount
        fee = new_fee

    raise ConvergenceError(max_iterations, last_fee=fee)
