"""Shared test fixtures for the helium-wallet test suite."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from helium_wallet.api.models import Account, OraclePrice, PendingTxnStatus
from helium_wallet.helium.fees import FeeConfig
from helium_wallet.helium.keys import Keypair

STAKING_FEE_ASSERT_LOCATION = 40 * 100_000
STAKING_FEE_ADD_GATEWAY = 10 * 100_000
STAKING_FEE_OUI = 100 * 100_000
STAKING_FEE_OUI_PER_ADDRESS = 100 * 100_000


def active_fee_config() -> FeeConfig:
    """Fee configuration of a chain with transaction fees enabled."""
    return FeeConfig(
        fees_active=True,
        fee_multiplier=5000,
        staking_fee_add_gateway=STAKING_FEE_ADD_GATEWAY,
        staking_fee_assert_location=STAKING_FEE_ASSERT_LOCATION,
        staking_fee_oui=STAKING_FEE_OUI,
        staking_fee_oui_per_address=STAKING_FEE_OUI_PER_ADDRESS,
    )


class FakeHeliumClient:
    """In-memory stand-in for :class:`HeliumClient` recording every call."""

    def __init__(
        self,
        *,
        account: Account | None = None,
        fee_config: FeeConfig | None = None,
        current_price: Decimal = Decimal(10),
        predictions: list[OraclePrice] | None = None,
        submit_error: Exception | None = None,
    ) -> None:
        self.account = account or Account(address="", balance=0)
        self.fee_config = fee_config or active_fee_config()
        self.current_price = current_price
        self.predictions = predictions or []
        self.submit_error = submit_error
        self.calls: list[str] = []
        self.submitted: list[str] = []

    async def get_account(self, address: str) -> Account:
        self.calls.append("get_account")
        return Account(
            address=address,
            balance=self.account.balance,
            dc_balance=self.account.dc_balance,
            speculative_nonce=self.account.speculative_nonce,
        )

    async def get_oracle_price_current(self) -> Decimal:
        self.calls.append("get_oracle_price_current")
        return self.current_price

    async def get_oracle_price_predicted(self) -> list[OraclePrice]:
        self.calls.append("get_oracle_price_predicted")
        return list(self.predictions)

    async def get_fee_config(self) -> FeeConfig:
        self.calls.append("get_fee_config")
        return self.fee_config

    async def submit_txn(self, envelope_b64: str) -> PendingTxnStatus:
        self.calls.append("submit_txn")
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(envelope_b64)
        return PendingTxnStatus(hash="pending-hash")


@pytest.fixture
def fee_config() -> FeeConfig:
    return active_fee_config()


@pytest.fixture
def keypair() -> Keypair:
    """Deterministic wallet keypair."""
    return Keypair.from_seed(b"\x01" * 32)


@pytest.fixture
def other_keypair() -> Keypair:
    return Keypair.from_seed(b"\x02" * 32)


@pytest.fixture
def app_config():
    """Provide a test AppConfig with safe defaults."""
    from helium_wallet.config.settings import AppConfig, FeeSettings

    return AppConfig(fees=FeeSettings(oracle_window=120, sweep_max_iterations=10))


@pytest.fixture
def make_client():
    """Factory for :class:`FakeHeliumClient` instances."""

    def _make(**kwargs: Any) -> FakeHeliumClient:
        return FakeHeliumClient(**kwargs)

    return _make
