"""
Weight models - ranking coefficients and the named payment presets.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SearchWeights(BaseModel):
    """
    Coefficients for listing search ranking.
    The positive terms sum to 1.0; the staleness weight is subtracted.
    """
    model_config = ConfigDict(frozen=True)

    proximity: float = Field(default=0.35, ge=0)
    recency: float = Field(default=0.25, ge=0)
    availability: float = Field(default=0.15, ge=0)
    category_match: float = Field(default=0.15, ge=0)
    reputation: float = Field(default=0.10, ge=0)
    staleness_penalty: float = Field(default=0.10, ge=0)

    @property
    def positive_total(self) -> float:
        return (
            self.proximity
            + self.recency
            + self.availability
            + self.category_match
            + self.reputation
        )


class PaymentWeights(BaseModel):
    """Coefficients for payment method ranking. They sum to 1.0."""
    model_config = ConfigDict(frozen=True)

    trust_factor: float = Field(default=0.40, ge=0)
    user_preference: float = Field(default=0.25, ge=0)
    success_rate: float = Field(default=0.20, ge=0)
    cost_efficiency: float = Field(default=0.15, ge=0)

    @property
    def total(self) -> float:
        return self.trust_factor + self.user_preference + self.success_rate + self.cost_efficiency


class WeightPreset(str, Enum):
    """Named payment weight configurations selected from order context."""
    DEFAULT = "default"
    HIGH_VALUE = "high_value"
    UNVERIFIED_SELLER = "unverified_seller"


DEFAULT_SEARCH_WEIGHTS = SearchWeights()

PAYMENT_WEIGHT_PRESETS: dict[WeightPreset, PaymentWeights] = {
    WeightPreset.DEFAULT: PaymentWeights(),
    # Large orders lean on trust and proven success over habit and fees
    WeightPreset.HIGH_VALUE: PaymentWeights(
        trust_factor=0.50,
        user_preference=0.15,
        success_rate=0.25,
        cost_efficiency=0.10,
    ),
    # Unverified sellers push hard toward protected methods such as escrow
    WeightPreset.UNVERIFIED_SELLER: PaymentWeights(
        trust_factor=0.60,
        user_preference=0.15,
        success_rate=0.15,
        cost_efficiency=0.10,
    ),
}
