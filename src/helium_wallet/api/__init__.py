"""Node API — account state, oracle prices, chain vars, submission."""

from helium_wallet.api.client import HeliumClient
from helium_wallet.api.models import Account, OraclePrice, PendingTxnStatus

__all__ = ["Account", "HeliumClient", "OraclePrice", "PendingTxnStatus"]
