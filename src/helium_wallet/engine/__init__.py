"""Wallet engine — node client wiring and transaction services."""

from helium_wallet.engine.client import WalletEngine

__all__ = ["WalletEngine"]
