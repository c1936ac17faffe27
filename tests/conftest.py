"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx
from fastapi.testclient import TestClient

from fincalc.main import app
from fincalc.api.dependencies import get_calculation_cache
from fincalc.calculations.cache import CalculationCache
from fincalc.services.exchange_rates import ExchangeRateService, get_exchange_rate_service


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


USD_RATES = {
    "base": "USD",
    "date": "2024-06-03",
    "rates": {"USD": 1, "INR": 83.25, "EUR": 0.92, "GBP": 0.78, "JPY": 156.9},
}


class RateProvider:
    """Fake exchange-rate endpoint that records requested URLs."""

    def __init__(self, payload=None, status_code=200):
        self.payload = payload if payload is not None else USD_RATES
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(str(request.url))
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def provider_factory():
    """Build fake providers with custom payloads."""
    return RateProvider


@pytest.fixture
def rate_provider():
    """Fake provider returning USD-based rates."""
    return RateProvider()


@pytest.fixture
def exchange_service(rate_provider):
    """Exchange rate service wired to the fake provider."""
    return ExchangeRateService(
        base_url="https://rates.test/v4/latest",
        cache_minutes=10,
        transport=httpx.MockTransport(rate_provider),
    )


@pytest.fixture
def calculation_cache():
    """Fresh result cache per test."""
    return CalculationCache(maxsize=10)


@pytest.fixture
def client(calculation_cache, exchange_service):
    """Create test client with isolated cache and fake rate provider."""
    app.dependency_overrides[get_calculation_cache] = lambda: calculation_cache
    app.dependency_overrides[get_exchange_rate_service] = lambda: exchange_service
    yield TestClient(app)
    app.dependency_overrides.clear()
