"""
Search ranking - deterministic listing scoring with transparent breakdown.

score = 0.35*Proximity + 0.25*Recency + 0.15*Availability
        + 0.15*CategoryMatch + 0.10*Reputation - 0.10*StalenessPenalty
"""
import logging
from datetime import datetime
from typing import Optional

from ..models.listing import GeoPoint, Listing, PickupWindow, SearchQuery
from ..models.scoring import RankedListing, SearchScoreBreakdown
from ..models.weights import DEFAULT_SEARCH_WEIGHTS, SearchWeights
from .geo import distance_km
from .timeutils import hours_between, parse_hour, timestamp


logger = logging.getLogger(__name__)


PROXIMITY_CUTOFF_KM = 10.0
RECENCY_HALF_LIFE_HOURS = 24.0
STALE_AFTER_HOURS = 72.0
STALE_UNANSWERED_REQUESTS = 3
STALENESS_PENALTY = 0.2


def calculate_proximity_score(user_location: GeoPoint, item_location: GeoPoint) -> float:
    """Linear decay: 1.0 at 0 km down to 0.0 at 10 km and beyond."""
    return proximity_from_distance(distance_km(user_location, item_location))


def proximity_from_distance(distance: float) -> float:
    if distance >= PROXIMITY_CUTOFF_KM:
        return 0.0
    return max(0.0, (PROXIMITY_CUTOFF_KM - distance) / PROXIMITY_CUTOFF_KM)


def calculate_recency_score(listing_time: datetime, current_time: datetime) -> float:
    """
    Exponential decay with a 24 hour half-life.
    Listings timestamped in the future count as brand new.
    """
    hours_elapsed = max(0.0, hours_between(listing_time, current_time))
    return 0.5 ** (hours_elapsed / RECENCY_HALF_LIFE_HOURS)


def calculate_availability_score(
    pickup_window: PickupWindow,
    current_time: datetime,
    available: bool,
) -> float:
    """
    1.0 if the item is available and the current hour is inside the pickup
    window (inclusive), else 0.0. Minutes are ignored.
    """
    if not available:
        return 0.0

    current_hour = current_time.hour
    start_hour = parse_hour(pickup_window.start)
    end_hour = parse_hour(pickup_window.end)

    # Overnight window, e.g. 22:00 - 06:00
    if start_hour > end_hour:
        return 1.0 if (current_hour >= start_hour or current_hour <= end_hour) else 0.0

    return 1.0 if start_hour <= current_hour <= end_hour else 0.0


def calculate_category_match_score(
    query_category: Optional[str],
    query_keywords: str,
    item_category: str,
    item_tags: list[str],
) -> float:
    """
    1.0 on an exact category match, otherwise the average per-keyword match:
    full hit in category or tags counts 1.0, a 3-letter prefix hit counts 0.5.
    """
    if not query_category and not query_keywords:
        return 0.0

    keywords = [k for k in query_keywords.lower().split(" ") if k]
    category = item_category.lower()
    tags = [tag.lower() for tag in item_tags]

    if query_category and query_category.lower() == category:
        return 1.0

    match_score = 0.0
    total_checks = 0

    for keyword in keywords:
        total_checks += 1

        if keyword in category or any(keyword in tag for tag in tags):
            match_score += 1.0
            continue

        prefix = keyword[:3]
        if prefix in category or any(prefix in tag for tag in tags):
            match_score += 0.5

    if total_checks == 0:
        return 0.0
    return min(1.0, match_score / total_checks)


def calculate_reputation_score(seller_reputation: float) -> float:
    return max(0.0, min(1.0, seller_reputation))


def calculate_staleness_penalty(
    created_at: datetime,
    current_time: datetime,
    unanswered_requests: int,
) -> float:
    """0.2 if the listing is older than 72h or has more than 3 unanswered requests."""
    hours_old = hours_between(created_at, current_time)
    if hours_old > STALE_AFTER_HOURS or unanswered_requests > STALE_UNANSWERED_REQUESTS:
        return STALENESS_PENALTY
    return 0.0


class SearchRanker:
    """
    Deterministic listing ranker with transparent breakdown.
    All sub-scores are 0-1; the total is floored at 0.
    """

    def __init__(self, weights: Optional[SearchWeights] = None):
        self.weights = weights if weights is not None else DEFAULT_SEARCH_WEIGHTS

    def score(self, listing: Listing, query: SearchQuery) -> SearchScoreBreakdown:
        """
        Calculate full scoring breakdown for a listing.

        Args:
            listing: The listing to score
            query: Keywords, user location and evaluation time

        Returns:
            SearchScoreBreakdown with all components
        """
        w = self.weights
        distance = distance_km(query.user_location, listing.location)

        proximity = proximity_from_distance(distance)
        recency = calculate_recency_score(listing.listing_time, query.current_time)
        availability = calculate_availability_score(
            listing.pickup_window,
            query.current_time,
            listing.available,
        )
        category_match = calculate_category_match_score(
            query.category,
            query.keywords,
            listing.category,
            listing.tags,
        )
        reputation = calculate_reputation_score(listing.seller_reputation)
        staleness = calculate_staleness_penalty(
            listing.created_at,
            query.current_time,
            listing.unanswered_requests,
        )

        total = (
            w.proximity * proximity
            + w.recency * recency
            + w.availability * availability
            + w.category_match * category_match
            + w.reputation * reputation
            - w.staleness_penalty * staleness
        )
        total = max(0.0, total)

        breakdown = SearchScoreBreakdown(
            total=total,
            proximity=proximity,
            recency=recency,
            availability=availability,
            category_match=category_match,
            reputation=reputation,
            staleness_penalty=staleness,
            distance_km=distance,
            weights=w,
        )
        breakdown.summary = self._build_summary(breakdown)

        logger.debug(f"Scored listing {listing.listing_id}: {total:.4f} ({breakdown.summary})")
        return breakdown

    def _build_summary(self, breakdown: SearchScoreBreakdown) -> str:
        """Build one-line summary explanation."""
        parts = []

        if breakdown.proximity > 0:
            parts.append(f"{breakdown.distance_km:.1f} km away")
        else:
            parts.append("Out of range")

        if breakdown.recency >= 0.5:
            parts.append("Fresh")

        if breakdown.availability == 0:
            parts.append("Pickup closed")

        if breakdown.category_match >= 1.0:
            parts.append("Category match")
        elif breakdown.category_match > 0:
            parts.append("Partial match")

        if breakdown.staleness_penalty > 0:
            parts.append("Stale")

        return " | ".join(parts)

    def rank(self, listings: list[Listing], query: SearchQuery) -> list[RankedListing]:
        """
        Score and rank all listings.

        Unavailable listings are scored (their availability sub-score is 0)
        but not removed; callers filter them beforehand.

        Ties on score are broken by higher seller reputation, then newer
        created_at, then listing_id ascending (case-insensitive first, raw value
        second), so the order is total.
        """
        scored = [(listing, self.score(listing, query)) for listing in listings]

        scored.sort(
            key=lambda x: (
                -x[1].total,
                -x[0].seller_reputation,
                -timestamp(x[0].created_at),
                x[0].listing_id.casefold(),
                x[0].listing_id,
            )
        )

        return [
            RankedListing(rank=rank, listing=listing, score=breakdown.total, breakdown=breakdown)
            for rank, (listing, breakdown) in enumerate(scored, 1)
        ]


def calculate_ranking_score(
    listing: Listing,
    query: SearchQuery,
    weights: Optional[SearchWeights] = None,
) -> float:
    """Overall ranking score for one listing."""
    return SearchRanker(weights).score(listing, query).total


def rank_listings(
    listings: list[Listing],
    query: SearchQuery,
    weights: Optional[SearchWeights] = None,
) -> list[RankedListing]:
    """Rank listings for a query, best first."""
    return SearchRanker(weights).rank(listings, query)
