"""Node API errors."""

from __future__ import annotations

from helium_wallet.errors.wallet_errors import WalletError


class APIError(WalletError):
    """Error from the blockchain node HTTP API."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message, code="api-error")
        self.status_code = status_code
