"""
Listing models - marketplace listings and the search query ranked against them.
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


_WALL_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})$")


class GeoPoint(BaseModel):
    """A latitude/longitude pair in degrees."""
    lat: float
    lng: float


class PickupWindow(BaseModel):
    """
    Recurring daily pickup window as wall-clock "HH:MM" strings.
    A start later than the end means the window spans midnight.
    """
    start: str = Field(description="Window start, e.g. '09:00'")
    end: str = Field(description="Window end, e.g. '17:00'")

    @field_validator("start", "end")
    @classmethod
    def check_wall_clock(cls, v: str) -> str:
        """Reject anything that is not a valid HH:MM time."""
        match = _WALL_CLOCK.match(v.strip())
        if not match:
            raise ValueError(f"expected HH:MM, got {v!r}")
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            raise ValueError(f"time out of range: {v!r}")
        return v.strip()


class Listing(BaseModel):
    """
    A marketplace listing as supplied by the catalog store.
    Numeric fields are passed through as-is; the ranker clamps scores instead.
    """
    listing_id: str
    name: str
    category: str
    tags: list[str] = Field(default_factory=list)
    location: GeoPoint
    listing_time: datetime = Field(description="When the listing was (re)published")
    created_at: datetime = Field(description="When the listing was first created")
    pickup_window: PickupWindow
    seller_reputation: float = Field(description="Historical completion rate, nominally 0-1")
    unanswered_requests: int = 0
    available: bool = True


class SearchQuery(BaseModel):
    """A single search request."""
    keywords: str = ""
    category: Optional[str] = None
    user_location: GeoPoint
    current_time: datetime = Field(description="Evaluation time; never read from the clock")
