"""WalletError — base exception class and the transaction-core error kinds."""

from __future__ import annotations


class WalletError(Exception):
    """Base error for all wallet operations.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code string.
    """

    def __init__(self, message: str, *, code: str = "wallet-error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class InvalidInputError(WalletError):
    """Malformed caller input: word count, address, amount, sweep payees."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="invalid-input")


class WordNotFoundError(WalletError):
    """A mnemonic word matched no entry of the wordlist."""

    def __init__(self, word: str) -> None:
        super().__init__(f"seed word {word!r} not found in wordlist", code="word-not-found")
        self.word = word


class ChecksumMismatchError(WalletError):
    """Mnemonic checksum bits were not the expected all-zero value."""

    def __init__(self, checksum: str) -> None:
        super().__init__(f"invalid mnemonic checksum: {checksum}", code="checksum-mismatch")
        self.checksum = checksum


class ArithmeticFailureError(WalletError):
    """Decimal/integer conversion failed (non-positive price, overflow)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="arithmetic-failure")


class InsufficientFundsError(WalletError):
    """The balance cannot cover the fixed payments plus the implicit burn."""

    def __init__(self, *, balance: int, required: int) -> None:
        super().__init__(
            f"insufficient funds: balance {balance} bones, required {required} bones",
            code="insufficient-funds",
        )
        self.balance = balance
        self.required = required


class SerializationError(WalletError):
    """A transaction draft could not be encoded."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="serialization-failure")


class ConvergenceError(WalletError):
    """Sweep fee resolution did not reach a fixed point within the cap."""

    def __init__(self, iterations: int, *, last_fee: int) -> None:
        super().__init__(
            f"sweep fee did not converge after {iterations} iterations (last fee {last_fee})",
            code="convergence-failure",
        )
        self.iterations = iterations
        self.last_fee = last_fee
