"""WalletEngine — owns the node client, the signing keypair and the services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from helium_wallet.api.client import HeliumClient
    from helium_wallet.config.settings import AppConfig
    from helium_wallet.engine.services.payment_service import PaymentService
    from helium_wallet.engine.services.staking_service import StakingService
    from helium_wallet.helium.keys import Keypair

# Error messages
_ERR_NOT_INITIALIZED = "Engine not initialized. Call initialize() first."


class WalletEngine:
    """Central engine wiring the node client to the transaction services.

    Usage::

        engine = WalletEngine(config, keypair)
        await engine.initialize()
        try:
            result = await engine.payment_service.pay(payees, commit=True)
        finally:
            await engine.close()
    """

    def __init__(
        self,
        config: AppConfig,
        keypair: Keypair,
        *,
        client: HeliumClient | None = None,
    ) -> None:
        """Initialize engine with configuration.

        Args:
            config: Application configuration.
            keypair: Keypair signing every transaction.
            client: Pre-built node client; one is created from *config* if None.
        """
        self._config = config
        self._keypair = keypair
        self._client = client
        self._owns_client = client is None
        self._initialized = False

        self._payment_service: PaymentService | None = None
        self._staking_service: StakingService | None = None

    async def initialize(self) -> None:
        """Connect the node client and create the services.

        Raises:
            RuntimeError: If already initialized.
        """
        if self._initialized:
            msg = "Engine already initialized"
            raise RuntimeError(msg)

        if self._client is None:
            from helium_wallet.api.client import HeliumClient

            self._client = HeliumClient(self._config.api, self._config.network)
            await self._client.connect()

        from helium_wallet.engine.services.payment_service import PaymentService
        from helium_wallet.engine.services.staking_service import StakingService

        self._payment_service = PaymentService(self)
        self._staking_service = StakingService(self)
        self._initialized = True

    async def close(self) -> None:
        """Close the node client if the engine created it."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None
        self._payment_service = None
        self._staking_service = None
        self._initialized = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def keypair(self) -> Keypair:
        return self._keypair

    @property
    def client(self) -> HeliumClient:
        if self._client is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._client

    @property
    def payment_service(self) -> PaymentService:
        if self._payment_service is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._payment_service

    @property
    def staking_service(self) -> StakingService:
        if self._staking_service is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._staking_service
