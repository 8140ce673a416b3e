"""Tests for PaymentService — payees, fees, sweeps and submission."""

from __future__ import annotations

from decimal import Decimal

import pytest

from helium_wallet.api.models import Account
from helium_wallet.engine.services.payment_service import Payee
from helium_wallet.errors.api_errors import APIError
from helium_wallet.errors.wallet_errors import InsufficientFundsError, InvalidInputError
from helium_wallet.helium.fees import txn_fee
from helium_wallet.helium.keys import PublicKey

_PAYEE_A = PublicKey(key=b"\x44" * 32)
_PAYEE_B = PublicKey(key=b"\x55" * 32)


# ---------------------------------------------------------------------------
# Payee parsing
# ---------------------------------------------------------------------------


class TestPayeeParse:
    def test_amount(self) -> None:
        payee = Payee.parse(f"{_PAYEE_A.address}=1.5")
        assert payee.address == _PAYEE_A
        assert payee.amount == 150_000_000
        assert payee.is_sweep is False

    def test_sweep(self) -> None:
        payee = Payee.parse(f"{_PAYEE_A.address}=sweep")
        assert payee.amount is None
        assert payee.is_sweep is True

    def test_missing_separator(self) -> None:
        with pytest.raises(InvalidInputError, match="missing `=`"):
            Payee.parse(_PAYEE_A.address)

    def test_bad_address(self) -> None:
        with pytest.raises(InvalidInputError, match="invalid address"):
            Payee.parse("not-an-address=1")

    def test_bad_amount(self) -> None:
        with pytest.raises(InvalidInputError, match="invalid HNT amount"):
            Payee.parse(f"{_PAYEE_A.address}=lots")


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class TestPay:
    @pytest.mark.asyncio
    async def test_fixed_payment(self, make_engine, make_client, keypair, fee_config) -> None:
        client = make_client(account=Account(address="", balance=10**10, speculative_nonce=4))
        engine = await make_engine(client)

        result = await engine.payment_service.pay([Payee(_PAYEE_A, 100_000_000)])

        txn = result.txn
        assert txn.payer == keypair.pubkey_bin()
        assert txn.nonce == 5
        assert txn.total == 100_000_000
        assert txn.fee == txn_fee(txn, fee_config)
        assert keypair.verify(txn.signature, txn.signing_payload())
        assert result.envelope == txn.to_b64()
        assert result.status is None
        assert client.calls == ["get_account", "get_fee_config"]
        assert client.submitted == []

    @pytest.mark.asyncio
    async def test_manual_fee(self, make_engine, make_client) -> None:
        client = make_client(account=Account(address="", balance=10**10))
        engine = await make_engine(client)

        result = await engine.payment_service.pay([Payee(_PAYEE_A, 1)], fee=12_345)

        assert result.txn.fee == 12_345
        assert "get_fee_config" not in client.calls

    @pytest.mark.asyncio
    async def test_commit(self, make_engine, make_client) -> None:
        client = make_client(account=Account(address="", balance=10**10))
        engine = await make_engine(client)

        result = await engine.payment_service.pay([Payee(_PAYEE_A, 1)], commit=True)

        assert result.status is not None
        assert result.status.hash == "pending-hash"
        assert client.submitted == [result.envelope]

    @pytest.mark.asyncio
    async def test_submit_error_propagates(self, make_engine, make_client) -> None:
        client = make_client(
            account=Account(address="", balance=10**10),
            submit_error=APIError("rejected", status_code=400),
        )
        engine = await make_engine(client)

        with pytest.raises(APIError, match="rejected"):
            await engine.payment_service.pay([Payee(_PAYEE_A, 1)], commit=True)

    @pytest.mark.asyncio
    async def test_no_payees(self, make_engine, make_client) -> None:
        client = make_client()
        engine = await make_engine(client)

        with pytest.raises(InvalidInputError, match="at least one payee"):
            await engine.payment_service.pay([])
        assert client.calls == []


# ---------------------------------------------------------------------------
# Sweeps
# ---------------------------------------------------------------------------


class TestSweep:
    @pytest.mark.asyncio
    async def test_sweep_uses_configured_window(self, make_engine, make_client) -> None:
        client = make_client(
            account=Account(address="", balance=100_000_000),
            current_price=Decimal(10),
        )
        engine = await make_engine(client)

        result = await engine.payment_service.pay([Payee(_PAYEE_A)])

        assert result.txn.fee == 35_000
        assert result.txn.payments[0].amount == 96_500_000
        assert client.calls == [
            "get_account",
            "get_fee_config",
            "get_oracle_price_current",
            "get_oracle_price_predicted",
        ]

    @pytest.mark.asyncio
    async def test_sweep_window_override(self, make_engine, make_client) -> None:
        client = make_client(account=Account(address="", balance=100_000_000))
        engine = await make_engine(client)

        await engine.payment_service.pay([Payee(_PAYEE_A)], oracle_window=0)

        assert "get_oracle_price_predicted" not in client.calls

    @pytest.mark.asyncio
    async def test_sweep_with_fixed_payment(self, make_engine, make_client) -> None:
        client = make_client(
            account=Account(address="", balance=5_000_000_000),
            current_price=Decimal(10),
        )
        engine = await make_engine(client)

        result = await engine.payment_service.pay(
            [Payee(_PAYEE_A, 1_000_000_000), Payee(_PAYEE_B)],
            oracle_window=0,
        )

        assert result.txn.fee == 45_000
        assert [p.amount for p in result.txn.payments] == [1_000_000_000, 3_995_500_000]

    @pytest.mark.asyncio
    async def test_sweep_manual_fee(self, make_engine, make_client) -> None:
        client = make_client(
            account=Account(address="", balance=100_000_000),
            current_price=Decimal(10),
        )
        engine = await make_engine(client)

        result = await engine.payment_service.pay([Payee(_PAYEE_A)], fee=20_000, oracle_window=0)

        assert result.txn.fee == 20_000
        assert result.txn.payments[0].amount == 98_000_000
        assert "get_fee_config" not in client.calls

    @pytest.mark.asyncio
    async def test_two_sweeps_rejected(self, make_engine, make_client) -> None:
        client = make_client()
        engine = await make_engine(client)

        with pytest.raises(InvalidInputError, match="two addresses"):
            await engine.payment_service.pay([Payee(_PAYEE_A), Payee(_PAYEE_B)])
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_sweep_insufficient_funds(self, make_engine, make_client) -> None:
        client = make_client(account=Account(address="", balance=1_000))
        engine = await make_engine(client)

        with pytest.raises(InsufficientFundsError):
            await engine.payment_service.pay([Payee(_PAYEE_A)], oracle_window=0)
        assert client.submitted == []

    @pytest.mark.asyncio
    async def test_negative_oracle_window_rejected(self, make_engine, make_client) -> None:
        client = make_client(account=Account(address="", balance=100_000_000))
        engine = await make_engine(client)

        with pytest.raises(InvalidInputError, match="oracle window"):
            await engine.payment_service.pay([Payee(_PAYEE_A)], oracle_window=-1)
        assert client.calls == []
