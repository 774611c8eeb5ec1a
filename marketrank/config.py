"""
Configuration and environment handling for marketrank.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class SearchConfig(BaseModel):
    """Listing search configuration."""
    max_radius_km: float = Field(
        default_factory=lambda: float(os.getenv("MARKETRANK_MAX_RADIUS_KM", "25")),
        description="Listings farther than this are dropped before ranking",
    )
    candidate_limit: int = Field(
        default_factory=lambda: int(os.getenv("MARKETRANK_CANDIDATE_LIMIT", "200")),
        description="Max candidates handed to the ranker",
    )
    top_k: int = Field(default=20, description="Final top results to return")


class PaymentConfig(BaseModel):
    """Payment recommendation configuration."""
    high_value_threshold: float = Field(
        default=500.0,
        description="Order amount above which a high-value order switches weight preset",
    )


class ApiConfig(BaseModel):
    """Backend API configuration used by the health check."""
    base_url: str = Field(default_factory=lambda: os.getenv("MARKETRANK_API_BASE_URL", "http://localhost:8000"))
    timeout: float = Field(default_factory=lambda: float(os.getenv("MARKETRANK_API_TIMEOUT", "10")))
    check_interval: float = Field(default=30.0, description="Seconds a health result stays fresh")


class Config(BaseModel):
    """Main configuration."""
    search: SearchConfig = Field(default_factory=SearchConfig)
    payment: PaymentConfig = Field(default_factory=PaymentConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)


_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the shared config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
