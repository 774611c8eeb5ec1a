"""
Listing filter - reduce the catalog to rankable candidates before scoring.
"""
import logging
from typing import Optional

import numpy as np

from ..models.listing import Listing, SearchQuery
from .geo import distances_km


logger = logging.getLogger(__name__)


class ListingFilter:
    """
    Drops listings the ranker should never see: unavailable ones and
    ones beyond the search radius. Optionally caps the candidate count,
    keeping the nearest listings.
    """

    def __init__(
        self,
        max_radius_km: Optional[float] = 25.0,
        max_candidates: Optional[int] = None,
    ):
        """
        Args:
            max_radius_km: Drop listings farther than this (None = no radius)
            max_candidates: Keep at most this many, nearest first (None = all)
        """
        self.max_radius_km = max_radius_km
        self.max_candidates = max_candidates

    def filter(self, listings: list[Listing], query: SearchQuery) -> list[Listing]:
        """
        Filter listings to rankable candidates.

        Args:
            listings: Listings fetched from the catalog
            query: The search query (for the user's location)

        Returns:
            Candidates in their original relative order
        """
        logger.info(f"Filtering {len(listings)} listings")

        if not listings:
            return []

        # Step 1: availability
        available = [listing for listing in listings if listing.available]
        logger.info(f"After availability: {len(available)} listings")

        if not available:
            return []

        # Step 2: radius
        distances = distances_km(query.user_location, [l.location for l in available])
        if self.max_radius_km is not None:
            keep = np.flatnonzero(distances <= self.max_radius_km)
        else:
            keep = np.arange(len(available))
        logger.info(f"After radius: {len(keep)} listings")

        # Step 3: cap, nearest first, stable on ties
        if self.max_candidates is not None and len(keep) > self.max_candidates:
            order = np.argsort(distances[keep], kind="stable")
            keep = np.sort(keep[order[: self.max_candidates]])

        candidates = [available[i] for i in keep]
        logger.info(f"Final candidates: {len(candidates)}")
        return candidates
