"""
Pipeline orchestrator - runs filter and ranking for a search, and the
payment recommendation for a checkout, using configured limits.
"""
import logging
import uuid
from datetime import datetime
from typing import Optional

from ..config import get_config
from ..models.export import RunMetadata, SearchRun
from ..models.listing import Listing, SearchQuery
from ..models.payment import OrderContext, PaymentMethod, UserPaymentProfile
from ..models.scoring import RankedPaymentMethod
from ..models.weights import PaymentWeights, SearchWeights

from .filter import ListingFilter
from .payment import get_recommended_payment_method
from .search import SearchRanker


logger = logging.getLogger(__name__)


def run_search(
    listings: list[Listing],
    query: SearchQuery,
    top_k: Optional[int] = None,
    weights: Optional[SearchWeights] = None,
) -> SearchRun:
    """
    Run the full search pipeline.

    Pipeline steps:
    1. Drop unavailable and out-of-radius listings
    2. Score and rank the remaining candidates
    3. Return the top-k with run metadata

    Args:
        listings: Listings fetched from the catalog
        query: The search query
        top_k: Number of results to return (config default if None)
        weights: Override search weights

    Returns:
        SearchRun with results and metadata
    """
    config = get_config()
    run_id = str(uuid.uuid4())[:8]
    top_k = top_k if top_k is not None else config.search.top_k

    logger.info(f"Starting search run {run_id} with {len(listings)} listings")

    listing_filter = ListingFilter(
        max_radius_km=config.search.max_radius_km,
        max_candidates=config.search.candidate_limit,
    )
    ranker = SearchRanker(weights)

    # Step 1: Filter to candidates
    logger.info("Step 1: Filtering candidates")
    candidates = listing_filter.filter(listings, query)

    # Step 2: Score and rank
    logger.info("Step 2: Scoring and ranking")
    ranked = ranker.rank(candidates, query)

    metadata = RunMetadata(
        run_id=run_id,
        evaluated_at=query.current_time,
        keywords=query.keywords,
        category=query.category,
        total_listings=len(listings),
        listings_after_filter=len(candidates),
        listings_returned=min(top_k, len(ranked)),
    )
    if not candidates and listings:
        metadata.warnings.append("No listings within radius")

    run = SearchRun(metadata=metadata, query=query, top_results=ranked[:top_k])

    logger.info(f"Search completed: {len(run.top_results)} top results")
    return run


def recommend_payment(
    methods: list[PaymentMethod],
    profile: UserPaymentProfile,
    order_amount: float,
    current_time: datetime,
    context: Optional[OrderContext] = None,
    weights: Optional[PaymentWeights] = None,
) -> Optional[RankedPaymentMethod]:
    """Recommend a payment method using the configured high-value threshold."""
    config = get_config()

    best = get_recommended_payment_method(
        methods,
        profile,
        order_amount,
        current_time,
        context=context,
        high_value_threshold=config.payment.high_value_threshold,
        weights=weights,
    )

    if best is None:
        logger.warning(f"No available payment method for user {profile.user_id}")
    else:
        logger.info(f"Recommended {best.method.method_id} for user {profile.user_id} ({best.score:.3f})")
    return best
