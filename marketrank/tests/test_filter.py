"""
Tests for listing filtering.
"""
import pytest

from marketrank.models.listing import GeoPoint, SearchQuery
from marketrank.pipeline.filter import ListingFilter
from marketrank.tests.factories import LONDON, make_listing, utc


class TestListingFilter:
    """Tests for ListingFilter."""

    @pytest.fixture
    def query(self) -> SearchQuery:
        return SearchQuery(keywords="phone", user_location=LONDON, current_time=utc(2024, 1, 15, 12))

    @pytest.fixture
    def sample_listings(self):
        """Listings at increasing distance north of LONDON."""
        return [
            make_listing("near", location=GeoPoint(lat=LONDON.lat + 0.01, lng=LONDON.lng)),    # ~1 km
            make_listing("mid", location=GeoPoint(lat=LONDON.lat + 0.1, lng=LONDON.lng)),      # ~11 km
            make_listing("here", location=LONDON),
            make_listing("closed", available=False),
            make_listing("far", location=GeoPoint(lat=52.2053, lng=0.1218)),                   # ~80 km
        ]

    def test_unavailable_removed(self, sample_listings, query):
        result = ListingFilter(max_radius_km=None).filter(sample_listings, query)

        ids = [l.listing_id for l in result]
        assert "closed" not in ids
        assert len(ids) == 4

    def test_radius_removes_far_listings(self, sample_listings, query):
        result = ListingFilter(max_radius_km=25.0).filter(sample_listings, query)

        # beyond the 10 km proximity cutoff but inside the radius still passes
        assert [l.listing_id for l in result] == ["near", "mid", "here"]

    def test_cap_keeps_nearest_in_original_order(self, sample_listings, query):
        result = ListingFilter(max_radius_km=None, max_candidates=2).filter(sample_listings, query)
        assert [l.listing_id for l in result] == ["near", "here"]

    def test_empty_listings_returns_empty(self, query):
        assert ListingFilter().filter([], query) == []

    def test_all_unavailable_returns_empty(self, query):
        listings = [make_listing("a", available=False), make_listing("b", available=False)]
        assert ListingFilter().filter(listings, query) == []
