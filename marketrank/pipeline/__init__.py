"""Ranking pipeline modules."""

from .filter import ListingFilter
from .search import SearchRanker, rank_listings, calculate_ranking_score
from .payment import (
    rank_payment_methods,
    calculate_payment_ranking_score,
    get_recommended_payment_method,
    select_weight_preset,
)
from .orchestrator import run_search, recommend_payment

__all__ = [
    "ListingFilter",
    "SearchRanker",
    "rank_listings",
    "calculate_ranking_score",
    "rank_payment_methods",
    "calculate_payment_ranking_score",
    "get_recommended_payment_method",
    "select_weight_preset",
    "run_search",
    "recommend_payment",
]
