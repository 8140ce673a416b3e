"""Node API client — accounts, oracle prices, chain vars, submission.

Async HTTP client for the blockchain node API:
- GET  /v1/accounts/{address}     — balance, DC balance, speculative nonce
- GET  /v1/oracle/prices/current  — current HNT oracle price
- GET  /v1/oracle/predictions     — predicted upcoming oracle prices
- GET  /v1/vars                   — chain variables (transaction fee config)
- POST /v1/pending_transactions   — submit a signed transaction

No retries are performed; callers own any retry policy.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import httpx

from helium_wallet.api.models import (
    Account,
    OraclePrice,
    PendingTxnStatus,
    oracle_price_to_decimal,
)
from helium_wallet.errors.api_errors import APIError
from helium_wallet.helium.fees import FeeConfig

if TYPE_CHECKING:
    from helium_wallet.config.settings import APIConfig, Network

logger = logging.getLogger(__name__)


class HeliumClient:
    """Async HTTP client for the node API.

    Usage::

        client = HeliumClient(config.api, config.network)
        await client.connect()
        try:
            account = await client.get_account(address)
        finally:
            await client.close()
    """

    def __init__(self, config: APIConfig, network: Network) -> None:
        """Initialize the client.

        Args:
            config: API configuration (urls, timeout).
            network: Network whose API to target.
        """
        self._config = config
        self._base_url = config.url_for(network)
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url.rstrip("/"),
            headers={"Accept": "application/json"},
            timeout=self._config.timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HeliumClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_account(self, address: str) -> Account:
        """Fetch balances and nonce for *address*."""
        data = await self._get(f"/v1/accounts/{address}", "get_account")
        return Account.from_dict({"address": address, **data})

    async def get_oracle_price_current(self) -> Decimal:
        """Fetch the current oracle price in USD per HNT."""
        data = await self._get("/v1/oracle/prices/current", "get_oracle_price_current")
        return oracle_price_to_decimal(data.get("price", 0))

    async def get_oracle_price_predicted(self) -> list[OraclePrice]:
        """Fetch predicted oracle prices, in the order the node reports them."""
        data = await self._get("/v1/oracle/predictions", "get_oracle_price_predicted")
        return [OraclePrice.from_dict(item) for item in data]

    async def get_fee_config(self) -> FeeConfig:
        """Fetch the chain variables and build the fee configuration."""
        data = await self._get("/v1/vars", "get_fee_config")
        return FeeConfig.from_chain_vars(data)

    async def submit_txn(self, envelope_b64: str) -> PendingTxnStatus:
        """Submit a signed, base64-encoded transaction envelope.

        Returns:
            The pending transaction status (hash).

        Raises:
            APIError: On HTTP or API errors.
        """
        client = self._ensure_connected()
        try:
            response = await client.post("/v1/pending_transactions", json={"txn": envelope_b64})
        except httpx.HTTPError as exc:
            raise APIError(f"submit_txn failed: {exc}") from exc
        payload = self._unwrap(response, "submit_txn")
        status = PendingTxnStatus.from_dict(payload)
        logger.info("Submitted transaction %s", status.hash)
        return status

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _get(self, path: str, operation: str) -> Any:
        client = self._ensure_connected()
        try:
            response = await client.get(path)
        except httpx.HTTPError as exc:
            raise APIError(f"{operation} failed: {exc}") from exc
        return self._unwrap(response, operation)

    def _unwrap(self, response: httpx.Response, operation: str) -> Any:
        """Return the ``data`` payload or raise an APIError for non-2xx."""
        if response.is_success:
            body = response.json()
            return body.get("data", body) if isinstance(body, dict) else body

        status = response.status_code
        try:
            body = response.json()
            detail = body.get("error", response.text) if isinstance(body, dict) else response.text
        except ValueError:
            detail = response.text
        logger.warning("API %s returned %d: %s", operation, status, detail)
        raise APIError(f"API {operation} failed ({status}): {detail}", status_code=status)

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Return the HTTP client, raising if not connected."""
        if self._client is None:
            msg = "HeliumClient is not connected — call connect() first"
            raise RuntimeError(msg)
        return self._client
