"""Backend API client helpers."""

from .health import ApiHealthCheck, ApiUnavailableError, HealthCheckResult

__all__ = ["ApiHealthCheck", "ApiUnavailableError", "HealthCheckResult"]
