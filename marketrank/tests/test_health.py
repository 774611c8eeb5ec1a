"""
Tests for the API health check.
"""
from unittest.mock import MagicMock

import pytest
import requests

from marketrank.client.health import ApiHealthCheck, ApiUnavailableError
from marketrank.config import ApiConfig


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def response(status_code: int = 200, reason: str = "OK") -> MagicMock:
    resp = MagicMock()
    resp.ok = status_code < 400
    resp.status_code = status_code
    resp.reason = reason
    return resp


class TestApiHealthCheck:

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    @pytest.fixture
    def session(self) -> MagicMock:
        session = MagicMock()
        session.get.return_value = response()
        return session

    @pytest.fixture
    def checker(self, session, clock) -> ApiHealthCheck:
        return ApiHealthCheck(
            "https://api.example.test/",
            timeout=3.0,
            check_interval=30.0,
            session=session,
            clock=clock,
            sleep=clock.advance,
        )

    def test_healthy_response(self, checker, session):
        result = checker.check_health()

        assert result.is_healthy is True
        assert result.error is None
        session.get.assert_called_once_with("https://api.example.test/health", timeout=3.0)

    def test_result_cached_within_interval(self, checker, session, clock):
        checker.check_health()
        clock.advance(10)
        cached = checker.check_health()

        assert cached.is_healthy is True
        assert cached.response_time == 0.0
        assert session.get.call_count == 1

    def test_force_and_expiry_bypass_cache(self, checker, session, clock):
        checker.check_health()
        checker.check_health(force=True)
        clock.advance(31)
        checker.check_health()

        assert session.get.call_count == 3

    def test_http_error_is_unhealthy(self, checker, session):
        session.get.return_value = response(503, "Service Unavailable")

        result = checker.check_health()

        assert result.is_healthy is False
        assert result.error == "HTTP 503: Service Unavailable"
        assert checker.is_healthy() is False

    def test_network_error_is_unhealthy_not_raised(self, checker, session, clock):
        session.get.side_effect = requests.ConnectionError("connection refused")

        result = checker.check_health()

        assert result.is_healthy is False
        assert "connection refused" in result.error
        # one retry before giving up, backing off on the injected clock
        assert session.get.call_count == 2
        assert clock.now == pytest.approx(1000.5)
        assert result.response_time == pytest.approx(0.5)

    def test_wait_for_healthy_recovers(self, checker, session):
        session.get.side_effect = [response(503, "Down"), response(503, "Down"), response()]

        assert checker.wait_for_healthy(timeout=10) is True
        assert session.get.call_count == 3

    def test_wait_for_healthy_times_out(self, checker, session):
        session.get.return_value = response(500, "Error")

        assert checker.wait_for_healthy(timeout=3) is False

    def test_from_config(self, session):
        config = ApiConfig(base_url="https://backend.test", timeout=5.0, check_interval=60.0)
        checker = ApiHealthCheck.from_config(config, session=session)

        assert checker.base_url == "https://backend.test"
        assert checker.timeout == 5.0
        assert checker.check_interval == 60.0


class TestSafeApiCall:

    @pytest.fixture
    def checker(self) -> ApiHealthCheck:
        session = MagicMock()
        session.get.return_value = response(503, "Down")
        return ApiHealthCheck("https://api.example.test", session=session)

    def test_healthy_call_passes_through(self, checker):
        assert checker.safe_api_call(lambda: 42) == 42

    def test_unhealthy_uses_fallback(self, checker):
        checker.check_health()
        assert checker.safe_api_call(lambda: 42, fallback=[]) == []

    def test_unhealthy_without_fallback_raises(self, checker):
        checker.check_health()
        with pytest.raises(ApiUnavailableError):
            checker.safe_api_call(lambda: 42)

    def test_failed_call_uses_fallback(self, checker):
        def boom():
            raise ValueError("bad payload")

        assert checker.safe_api_call(boom, fallback=None) is None

    def test_failed_call_without_fallback_propagates(self, checker):
        def boom():
            raise ValueError("bad payload")

        with pytest.raises(ValueError):
            checker.safe_api_call(boom)
