"""
Payment method ranking - orders checkout payment methods for a user and order.

score = 0.40*TrustFactor + 0.25*UserPreference + 0.20*SuccessRate + 0.15*CostEfficiency
"""
import logging
from datetime import datetime
from typing import Optional

from ..models.payment import OrderContext, PaymentMethod, UserPaymentProfile
from ..models.scoring import PaymentScoreBreakdown, RankedPaymentMethod
from ..models.weights import PAYMENT_WEIGHT_PRESETS, PaymentWeights, WeightPreset
from .timeutils import subtract_months, timestamp


logger = logging.getLogger(__name__)


TRUST_FACTORS: dict[str, float] = {
    "escrow": 1.0,   # protected transactions
    "wallet": 0.8,
    "card": 0.8,     # buyer protection
    "paypal": 0.7,
    "cash": 0.5,     # face-to-face only
    "barter": 0.4,   # value assessment required
}

DEFAULT_SUCCESS_RATES: dict[str, float] = {
    "escrow": 0.98,
    "wallet": 0.95,
    "card": 0.92,
    "paypal": 0.90,
    "cash": 0.85,
    "barter": 0.70,
}

HIGH_TRUST_THRESHOLD = 0.8
RECENT_USE_MONTHS = 3
MAX_FEE_FOR_SCORING = 0.05
HIGH_VALUE_ORDER_AMOUNT = 500.0


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def calculate_trust_factor(method: PaymentMethod, risk_tolerance: str) -> float:
    """
    Base trust for the method type, adjusted for the user's risk tolerance.

    low: high-trust methods (>= 0.8) gain 0.1, the rest lose 0.1
    high: every method gains 0.05
    medium: unchanged
    """
    trust = TRUST_FACTORS[method.method_type]

    if risk_tolerance == "low":
        if trust >= HIGH_TRUST_THRESHOLD:
            trust = trust + 0.1
        else:
            trust = trust - 0.1
    elif risk_tolerance == "high":
        trust = trust + 0.05

    return _clamp(trust)


def calculate_user_preference(
    method: PaymentMethod,
    profile: UserPaymentProfile,
    current_time: datetime,
) -> float:
    """1.0 for the explicit preference, 0.5 if used in the last 3 calendar months, else 0.0."""
    if profile.preferred_method_id == method.method_id:
        return 1.0

    history = profile.get_history(method.method_id)
    if history is None:
        return 0.0

    cutoff = subtract_months(current_time, RECENT_USE_MONTHS)
    if timestamp(history.last_used) >= timestamp(cutoff):
        return 0.5

    return 0.0


def calculate_success_rate(method: PaymentMethod, profile: UserPaymentProfile) -> float:
    """Historical success ratio, or the type default when there is no usable history."""
    history = profile.get_history(method.method_id)

    if history is None or history.total_attempts <= 0:
        return DEFAULT_SUCCESS_RATES[method.method_type]

    return _clamp(history.success_count / history.total_attempts)


def calculate_cost_efficiency(method: PaymentMethod, order_amount: float) -> float:
    """
    1.0 at zero fee, 0.0 at a 5% fee or more, linear in between.
    order_amount does not enter the formula.
    """
    score = (MAX_FEE_FOR_SCORING - method.transaction_fee) / MAX_FEE_FOR_SCORING
    return _clamp(score)


def score_breakdown(
    method: PaymentMethod,
    profile: UserPaymentProfile,
    order_amount: float,
    current_time: datetime,
) -> PaymentScoreBreakdown:
    return PaymentScoreBreakdown(
        trust_factor=calculate_trust_factor(method, profile.risk_tolerance),
        user_preference=calculate_user_preference(method, profile, current_time),
        success_rate=calculate_success_rate(method, profile),
        cost_efficiency=calculate_cost_efficiency(method, order_amount),
    )


def combine(details: PaymentScoreBreakdown, weights: PaymentWeights) -> float:
    score = (
        weights.trust_factor * details.trust_factor
        + weights.user_preference * details.user_preference
        + weights.success_rate * details.success_rate
        + weights.cost_efficiency * details.cost_efficiency
    )
    return _clamp(score)


def calculate_payment_ranking_score(
    method: PaymentMethod,
    profile: UserPaymentProfile,
    order_amount: float,
    current_time: datetime,
    weights: Optional[PaymentWeights] = None,
) -> float:
    """Overall score for one payment method. Unavailable methods score 0.0."""
    if not method.available:
        return 0.0

    weights = weights if weights is not None else PAYMENT_WEIGHT_PRESETS[WeightPreset.DEFAULT]
    details = score_breakdown(method, profile, order_amount, current_time)
    return combine(details, weights)


def rank_payment_methods(
    methods: list[PaymentMethod],
    profile: UserPaymentProfile,
    order_amount: float,
    current_time: datetime,
    weights: Optional[PaymentWeights] = None,
) -> list[RankedPaymentMethod]:
    """
    Rank the available payment methods, best first.

    Unavailable methods are dropped. Ties on score are broken by higher
    trust factor, then by history (a method with history beats one without,
    and the more recently used wins), then by name ignoring case.

    Args:
        methods: Candidate payment methods
        profile: The paying user's profile and history
        order_amount: Order value (accepted for cost scoring, currently unused)
        current_time: Evaluation time for the recent-use window
        weights: Override weights; defaults to the DEFAULT preset

    Returns:
        RankedPaymentMethod list with per-factor details
    """
    weights = weights if weights is not None else PAYMENT_WEIGHT_PRESETS[WeightPreset.DEFAULT]

    scored = []
    for method in methods:
        if not method.available:
            logger.debug(f"Skipping unavailable payment method {method.method_id}")
            continue

        details = score_breakdown(method, profile, order_amount, current_time)
        scored.append((method, combine(details, weights), details))

    def sort_key(item):
        method, score, details = item
        history = profile.get_history(method.method_id)
        if history is not None:
            recency_key = (0, -timestamp(history.last_used))
        else:
            recency_key = (1, 0.0)
        return (-score, -details.trust_factor, recency_key, method.name.casefold(), method.name)

    scored.sort(key=sort_key)

    return [
        RankedPaymentMethod(rank=rank, method=method, score=score, details=details, weights=weights)
        for rank, (method, score, details) in enumerate(scored, 1)
    ]


def select_weight_preset(
    order_amount: float,
    context: Optional[OrderContext] = None,
    high_value_threshold: float = HIGH_VALUE_ORDER_AMOUNT,
) -> WeightPreset:
    """
    Pick the weight preset for an order.
    An unverified seller outranks the high-value signal.
    """
    if context is None:
        return WeightPreset.DEFAULT
    if context.seller_verified is False:
        return WeightPreset.UNVERIFIED_SELLER
    if context.high_value and order_amount > high_value_threshold:
        return WeightPreset.HIGH_VALUE
    return WeightPreset.DEFAULT


def get_recommended_payment_method(
    methods: list[PaymentMethod],
    profile: UserPaymentProfile,
    order_amount: float,
    current_time: datetime,
    context: Optional[OrderContext] = None,
    high_value_threshold: float = HIGH_VALUE_ORDER_AMOUNT,
    weights: Optional[PaymentWeights] = None,
) -> Optional[RankedPaymentMethod]:
    """
    Best payment method for this order under context-adjusted weights, or None.
    Explicit weights bypass the preset selection.
    """
    if weights is None:
        preset = select_weight_preset(order_amount, context, high_value_threshold)
        logger.debug(f"Recommending payment for user {profile.user_id} with preset {preset.value}")
        weights = PAYMENT_WEIGHT_PRESETS[preset]

    ranked = rank_payment_methods(methods, profile, order_amount, current_time, weights)
    return ranked[0] if ranked else None
