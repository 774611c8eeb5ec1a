"""
Shared fixtures: the two-listing phone search and the three-method checkout.
"""
from datetime import datetime

import pytest

from marketrank.models.listing import GeoPoint, Listing, PickupWindow, SearchQuery
from marketrank.models.payment import PaymentHistory, PaymentMethod, UserPaymentProfile
from marketrank.tests.factories import LONDON, utc


@pytest.fixture
def iphone() -> Listing:
    return Listing(
        listing_id="1",
        name="iPhone 13 Pro",
        category="Electronics",
        tags=["phone", "apple", "smartphone"],
        location=LONDON,
        listing_time=utc(2024, 1, 15, 10),
        created_at=utc(2024, 1, 15, 10),
        pickup_window=PickupWindow(start="09:00", end="17:00"),
        seller_reputation=0.95,
        unanswered_requests=1,
        available=True,
    )


@pytest.fixture
def samsung() -> Listing:
    return Listing(
        listing_id="2",
        name="Samsung Galaxy S23",
        category="Electronics",
        tags=["phone", "samsung", "android"],
        location=GeoPoint(lat=51.5174, lng=-0.1378),  # ~1.3 km from LONDON
        listing_time=utc(2024, 1, 14, 15),
        created_at=utc(2024, 1, 12, 10),
        pickup_window=PickupWindow(start="10:00", end="16:00"),
        seller_reputation=0.88,
        unanswered_requests=4,  # triggers the staleness penalty
        available=True,
    )


@pytest.fixture
def phone_query() -> SearchQuery:
    return SearchQuery(
        keywords="phone",
        category="Electronics",
        user_location=LONDON,
        current_time=utc(2024, 1, 15, 12),
    )


@pytest.fixture
def checkout_time() -> datetime:
    return utc(2024, 1, 15, 12)


@pytest.fixture
def payment_methods() -> list[PaymentMethod]:
    return [
        PaymentMethod(
            method_id="escrow_1",
            name="Escrow Payment",
            method_type="escrow",
            transaction_fee=0.02,
            requires_online=True,
        ),
        PaymentMethod(
            method_id="card_1",
            name="Credit/Debit Card",
            method_type="card",
            transaction_fee=0.029,
            requires_online=True,
        ),
        PaymentMethod(
            method_id="cash_1",
            name="Cash on Delivery",
            method_type="cash",
            transaction_fee=0.0,
            requires_online=False,
        ),
    ]


@pytest.fixture
def user_profile() -> UserPaymentProfile:
    return UserPaymentProfile(
        user_id="user_123",
        preferred_method_id="escrow_1",
        risk_tolerance="medium",
        payment_history=[
            PaymentHistory(
                method_id="escrow_1",
                success_count=48,
                total_attempts=50,
                last_used=utc(2024, 1, 10, 12),
                user_preferred=True,
            ),
            PaymentHistory(
                method_id="card_1",
                success_count=19,
                total_attempts=20,
                last_used=utc(2023, 12, 15, 14, 30),
            ),
        ],
    )
