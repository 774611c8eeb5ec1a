"""
Scoring models - per-factor breakdowns and ranked results.
"""
from pydantic import BaseModel, Field

from .listing import Listing
from .payment import PaymentMethod
from .weights import PaymentWeights, SearchWeights


class SearchScoreBreakdown(BaseModel):
    """Complete scoring breakdown for a listing."""
    total: float = Field(ge=0, description="Final weighted score, floored at 0")

    # Component scores, each 0-1
    proximity: float
    recency: float
    availability: float
    category_match: float
    reputation: float
    # 0.0 or 0.2, subtracted after weighting
    staleness_penalty: float

    distance_km: float = Field(description="Great-circle distance from the user")
    weights: SearchWeights

    # Quick summary
    summary: str = Field(default="", description="One-line summary of why this score")


class RankedListing(BaseModel):
    """A listing with its rank, score and breakdown."""
    rank: int
    listing: Listing
    score: float
    breakdown: SearchScoreBreakdown

    @property
    def is_stale(self) -> bool:
        """Check if the staleness penalty was applied."""
        return self.breakdown.staleness_penalty > 0

    @property
    def is_nearby(self) -> bool:
        """Check if the listing earns any proximity credit."""
        return self.breakdown.proximity > 0


class PaymentScoreBreakdown(BaseModel):
    """Per-factor scores behind a payment method's total, for display."""
    trust_factor: float = Field(ge=0, le=1)
    user_preference: float = Field(ge=0, le=1)
    success_rate: float = Field(ge=0, le=1)
    cost_efficiency: float = Field(ge=0, le=1)


class RankedPaymentMethod(BaseModel):
    """A payment method with its rank, score and per-factor details."""
    rank: int
    method: PaymentMethod
    score: float = Field(ge=0, le=1)
    details: PaymentScoreBreakdown
    weights: PaymentWeights
