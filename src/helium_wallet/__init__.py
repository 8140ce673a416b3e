"""helium-wallet — offline transaction crafting: fees, sweeps, signing, mnemonics."""

__version__ = "0.1.0"
