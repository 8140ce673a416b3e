"""Transaction core — wire codec, drafts, fees, sweep resolution, keys, mnemonics."""

from helium_wallet.helium.fees import FeeConfig, txn_fee, txn_staking_fee
from helium_wallet.helium.mnemonic import decode_mnemonic
from helium_wallet.helium.sweep import resolve_sweep

__all__ = ["FeeConfig", "decode_mnemonic", "resolve_sweep", "txn_fee", "txn_staking_fee"]
