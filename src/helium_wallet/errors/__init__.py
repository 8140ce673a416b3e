"""Error kinds raised by the wallet core and the node client."""

from helium_wallet.errors.api_errors import APIError
from helium_wallet.errors.wallet_errors import (
    ArithmeticFailureError,
    ChecksumMismatchError,
    ConvergenceError,
    InsufficientFundsError,
    InvalidInputError,
    SerializationError,
    WalletError,
    WordNotFoundError,
)

__all__ = [
    "APIError",
    "ArithmeticFailureError",
    "ChecksumMismatchError",
    "ConvergenceError",
    "InsufficientFundsError",
    "InvalidInputError",
    "SerializationError",
    "WalletError",
    "WordNotFoundError",
]
