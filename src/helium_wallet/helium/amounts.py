"""HNT amounts — decimal token strings to integer bones and back."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from helium_wallet.errors.wallet_errors import InvalidInputError

BONES_PER_HNT = 100_000_000
HNT_DECIMALS = 8


def hnt_to_bones(value: str | Decimal) -> int:
    """Convert an HNT amount (e.g. ``"1.5"``) to bones.

    Raises:
        InvalidInputError: If the value is not a non-negative number with at
            most 8 decimal places.
    """
    try:
        amount = Decimal(value)
    except InvalidOperation:
        msg = f"invalid HNT amount: {value!r}"
        raise InvalidInputError(msg) from None
    if not amount.is_finite() or amount < 0:
        msg = f"invalid HNT amount: {value!r}"
        raise InvalidInputError(msg)
    bones = amount * BONES_PER_HNT
    if bones != bones.to_integral_value():
        msg = f"HNT amount {value!r} has more than {HNT_DECIMALS} decimals"
        raise InvalidInputError(msg)
    return int(bones)


def bones_to_hnt(bones: int) -> Decimal:
    """Convert bones to an HNT ``Decimal`` with 8 decimal places."""
    return (Decimal(bones) / BONES_PER_HNT).quantize(Decimal(1).scaleb(-HNT_DECIMALS))
