"""
Payment models - payment methods, user payment history and order context.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


PaymentMethodType = Literal["escrow", "wallet", "card", "paypal", "cash", "barter"]
RiskTolerance = Literal["low", "medium", "high"]


class PaymentMethod(BaseModel):
    """A payment method offered at checkout."""
    method_id: str
    name: str
    method_type: PaymentMethodType
    transaction_fee: float = Field(description="Fee as a fraction of order value, e.g. 0.029")
    available: bool = True
    requires_online: bool = False


class PaymentHistory(BaseModel):
    """A user's track record with one payment method."""
    method_id: str
    success_count: int = 0
    total_attempts: int = 0
    last_used: datetime
    user_preferred: bool = False


class UserPaymentProfile(BaseModel):
    """Everything the payment ranker knows about the paying user."""
    user_id: str
    payment_history: list[PaymentHistory] = Field(default_factory=list)
    preferred_method_id: Optional[str] = None
    risk_tolerance: RiskTolerance = "medium"

    def get_history(self, method_id: str) -> Optional[PaymentHistory]:
        """Get the history entry for a method. The first match wins."""
        for entry in self.payment_history:
            if entry.method_id == method_id:
                return entry
        return None


class OrderContext(BaseModel):
    """Order-level risk signals used to pick a weight preset."""
    seller_verified: Optional[bool] = Field(
        default=None,
        description="False only when the seller is known to be unverified",
    )
    high_value: bool = False
