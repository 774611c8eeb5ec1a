"""
Builders shared across the test modules.
"""
from datetime import datetime, timezone

from marketrank.models.listing import GeoPoint, Listing, PickupWindow


LONDON = GeoPoint(lat=51.5074, lng=-0.1278)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_listing(listing_id: str = "x", **overrides) -> Listing:
    """Listing at LONDON, created and listed at the query time, open 09-17."""
    data = dict(
        listing_id=listing_id,
        name=f"Item {listing_id}",
        category="Electronics",
        tags=["phone"],
        location=LONDON,
        listing_time=utc(2024, 1, 15, 12),
        created_at=utc(2024, 1, 15, 12),
        pickup_window=PickupWindow(start="09:00", end="17:00"),
        seller_reputation=0.9,
        unanswered_requests=0,
        available=True,
    )
    data.update(overrides)
    return Listing(**data)
