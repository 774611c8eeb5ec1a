"""
Pydantic models for marketrank.
All data contracts are defined here for strict validation.
"""

from .listing import GeoPoint, PickupWindow, Listing, SearchQuery
from .payment import (
    PaymentMethod,
    PaymentHistory,
    UserPaymentProfile,
    OrderContext,
)
from .weights import (
    SearchWeights,
    PaymentWeights,
    WeightPreset,
    DEFAULT_SEARCH_WEIGHTS,
    PAYMENT_WEIGHT_PRESETS,
)
from .scoring import (
    SearchScoreBreakdown,
    RankedListing,
    PaymentScoreBreakdown,
    RankedPaymentMethod,
)
from .export import RunMetadata, SearchRun

__all__ = [
    # Listing
    "GeoPoint",
    "PickupWindow",
    "Listing",
    "SearchQuery",
    # Payment
    "PaymentMethod",
    "PaymentHistory",
    "UserPaymentProfile",
    "OrderContext",
    # Weights
    "SearchWeights",
    "PaymentWeights",
    "WeightPreset",
    "DEFAULT_SEARCH_WEIGHTS",
    "PAYMENT_WEIGHT_PRESETS",
    # Scoring
    "SearchScoreBreakdown",
    "RankedListing",
    "PaymentScoreBreakdown",
    "RankedPaymentMethod",
    # Export
    "RunMetadata",
    "SearchRun",
]
