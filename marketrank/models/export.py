"""
Export models - search run metadata and full export structure.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from .listing import SearchQuery
from .scoring import RankedListing


class RunMetadata(BaseModel):
    """Metadata for a search run."""
    run_id: str = Field(description="Unique run identifier")
    evaluated_at: datetime = Field(description="The query's evaluation time")

    # Query info
    keywords: str
    category: Optional[str] = None

    # Processing stats
    total_listings: int = 0
    listings_after_filter: int = 0
    listings_returned: int = 0

    schema_version: str = "1.0.0"

    warnings: list[str] = Field(default_factory=list)


class SearchRun(BaseModel):
    """
    Complete export of a search run.
    Includes all data needed for debugging and analysis.
    """
    metadata: RunMetadata
    query: SearchQuery

    # Final ranked results
    top_results: list[RankedListing] = Field(default_factory=list)

    def to_minimal_export(self) -> dict[str, Any]:
        """Export minimal version without breakdowns."""
        return {
            "metadata": {
                "run_id": self.metadata.run_id,
                "keywords": self.metadata.keywords,
                "evaluated_at": self.metadata.evaluated_at.isoformat(),
            },
            "results": [
                {
                    "rank": r.rank,
                    "listing_id": r.listing.listing_id,
                    "name": r.listing.name,
                    "score": r.score,
                    "distance_km": r.breakdown.distance_km,
                    "summary": r.breakdown.summary,
                }
                for r in self.top_results
            ],
        }
