"""Transaction services — payments and validator staking."""

from helium_wallet.engine.services.payment_service import Payee, PaymentResult, PaymentService
from helium_wallet.engine.services.staking_service import StakeResult, StakingService

__all__ = ["Payee", "PaymentResult", "PaymentService", "StakeResult", "StakingService"]
