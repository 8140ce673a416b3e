"""Engine fixtures wired to the in-memory node client."""

from __future__ import annotations

import pytest

from helium_wallet.engine.client import WalletEngine


@pytest.fixture
def make_engine(app_config, keypair):
    """Factory for initialized engines around a given fake client."""
    async def _make(client) -> WalletEngine:
        engine = WalletEngine(app_config, keypair, client=client)
        await engine.initialize()
        return engine

    return _make
