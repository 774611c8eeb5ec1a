"""
Backend API health check with retry logic and cached status.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import requests
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from ..config import ApiConfig


logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


class ApiUnavailableError(RuntimeError):
    """Raised when the backend is unhealthy and no fallback was given."""


@dataclass
class HealthCheckResult:
    is_healthy: bool
    response_time: float
    error: Optional[str] = None


class ApiHealthCheck:
    """
    Health probe for one backend API.

    Constructed explicitly per base URL; results are cached for
    `check_interval` seconds unless a check is forced.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        check_interval: float = 30.0,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.check_interval = check_interval
        self.session = session or requests.Session()
        self._clock = clock
        self._sleep = sleep

        # Retry policy bound to the injected sleeper
        self._retrying = Retrying(
            stop=stop_after_attempt(2),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            reraise=True,
            sleep=sleep,
            before_sleep=lambda retry_state: logger.warning(
                f"Health check retry attempt {retry_state.attempt_number}"
            ),
        )

        self._healthy = True
        self._last_check: Optional[float] = None

    @classmethod
    def from_config(cls, config: ApiConfig, **kwargs) -> "ApiHealthCheck":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout,
            check_interval=config.check_interval,
            **kwargs,
        )

    def _get_health(self) -> requests.Response:
        return self._retrying(self.session.get, f"{self.base_url}/health", timeout=self.timeout)

    def check_health(self, force: bool = False) -> HealthCheckResult:
        """
        Probe the /health endpoint.

        Never raises: network failures and HTTP errors come back as an
        unhealthy result with the error message.
        """
        now = self._clock()

        if (
            not force
            and self._last_check is not None
            and (now - self._last_check) < self.check_interval
        ):
            return HealthCheckResult(is_healthy=self._healthy, response_time=0.0)

        started = self._clock()
        try:
            response = self._get_health()
            response_time = self._clock() - started

            if response.ok:
                result = HealthCheckResult(is_healthy=True, response_time=response_time)
            else:
                result = HealthCheckResult(
                    is_healthy=False,
                    response_time=response_time,
                    error=f"HTTP {response.status_code}: {response.reason}",
                )
        except requests.RequestException as e:
            result = HealthCheckResult(
                is_healthy=False,
                response_time=self._clock() - started,
                error=str(e) or type(e).__name__,
            )

        if not result.is_healthy:
            logger.warning(f"API health check failed for {self.base_url}: {result.error}")

        self._healthy = result.is_healthy
        self._last_check = now
        return result

    def is_healthy(self) -> bool:
        """Last known health status (True until a check says otherwise)."""
        return self._healthy

    def wait_for_healthy(self, timeout: float = 10.0, poll_interval: float = 1.0) -> bool:
        """Poll until the API reports healthy or the timeout runs out."""
        started = self._clock()

        while self._clock() - started < timeout:
            if self.check_health(force=True).is_healthy:
                return True
            self._sleep(poll_interval)

        return False

    def safe_api_call(self, call: Callable[[], T], fallback: Any = _MISSING) -> T:
        """
        Run an API call guarded by the last known health status.

        Returns the fallback when the API is unhealthy or the call fails;
        without a fallback the failure propagates.
        """
        if not self._healthy:
            logger.warning("API unhealthy, using fallback")
            if fallback is not _MISSING:
                return fallback
            raise ApiUnavailableError(f"API unavailable: {self.base_url}")

        try:
            return call()
        except Exception as e:
            logger.warning(f"API call failed: {e}")
            if fallback is not _MISSING:
                return fallback
            raise
