"""Tests for error classes."""

from __future__ import annotations

import pytest

from helium_wallet.errors import (
    APIError,
    ArithmeticFailureError,
    ChecksumMismatchError,
    ConvergenceError,
    InsufficientFundsError,
    InvalidInputError,
    SerializationError,
    WalletError,
    WordNotFoundError,
)

# ---------------------------------------------------------------------------
# WalletError base class
# ---------------------------------------------------------------------------


class TestWalletError:
    def test_default_attributes(self) -> None:
        err = WalletError("something broke")
        assert str(err) == "something broke"
        assert err.message == "something broke"
        assert err.code == "wallet-error"

    def test_custom_code(self) -> None:
        assert WalletError("bad", code="bad-thing").code == "bad-thing"

    def test_is_exception(self) -> None:
        with pytest.raises(WalletError, match="boom"):
            raise WalletError("boom")


# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------


class TestErrorKinds:
    @pytest.mark.parametrize(
        ("err", "code"),
        [
            (InvalidInputError("bad input"), "invalid-input"),
            (WordNotFoundError("xyzzy"), "word-not-found"),
            (ChecksumMismatchError("0101"), "checksum-mismatch"),
            (ArithmeticFailureError("overflow"), "arithmetic-failure"),
            (InsufficientFundsError(balance=1, required=2), "insufficient-funds"),
            (SerializationError("bad field"), "serialization-failure"),
            (ConvergenceError(10, last_fee=35_000), "convergence-failure"),
            (APIError("down"), "api-error"),
        ],
    )
    def test_codes(self, err: WalletError, code: str) -> None:
        assert isinstance(err, WalletError)
        assert err.code == code

    def test_word_not_found(self) -> None:
        err = WordNotFoundError("xyzzy")
        assert err.word == "xyzzy"
        assert "xyzzy" in str(err)

    def test_checksum_mismatch(self) -> None:
        err = ChecksumMismatchError("0101")
        assert err.checksum == "0101"
        assert "0101" in str(err)

    def test_insufficient_funds(self) -> None:
        err = InsufficientFundsError(balance=100, required=250)
        assert err.balance == 100
        assert err.required == 250
        assert "250" in err.message

    def test_convergence(self) -> None:
        err = ConvergenceError(10, last_fee=35_000)
        assert err.iterations == 10
        assert err.last_fee == 35_000

    def test_api_error_status(self) -> None:
        assert APIError("down").status_code == 502
        assert APIError("missing", status_code=404).status_code == 404
