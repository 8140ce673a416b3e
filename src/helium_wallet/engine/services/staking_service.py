"""Staking service — stake HNT to a validator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from helium_wallet.helium.fees import txn_fee
from helium_wallet.helium.transactions import StakeValidatorV1

if TYPE_CHECKING:
    from helium_wallet.api.models import PendingTxnStatus
    from helium_wallet.engine.client import WalletEngine
    from helium_wallet.helium.keys import PublicKey

logger = logging.getLogger(__name__)


@dataclass
class StakeResult:
    """Outcome of :meth:`StakingService.stake`."""

    txn: StakeValidatorV1
    envelope: str
    status: PendingTxnStatus | None = None


class StakingService:
    """Business logic for validator staking transactions."""

    def __init__(self, engine: WalletEngine) -> None:
        self._engine = engine

    async def stake(
        self,
        validator: PublicKey,
        stake: int,
        *,
        commit: bool = False,
    ) -> StakeResult:
        """Build, price and sign a stake of *stake* bones to *validator*.

        The wallet key is the owner and signs ``owner_signature``.
        """
        client = self._engine.client
        keypair = self._engine.keypair

        txn = StakeValidatorV1(
            address=validator.to_bytes(),
            owner=keypair.pubkey_bin(),
            stake=stake,
        )
        txn.fee = txn_fee(txn, await client.get_fee_config())
        txn.sign(keypair, "owner_signature")
        envelope = txn.to_b64()
        logger.info("Built stake of %d bones to %s (fee %d DC)", stake, validator, txn.fee)

        status = await client.submit_txn(envelope) if commit else None
        return StakeResult(txn=txn, envelope=envelope, status=status)
