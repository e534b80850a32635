"""
Shared test fixtures for AstroSolar tests.

Provides settings isolated from the developer environment, a stubbed NASA
POWER transport and a configured TestClient backed by in-memory storage,
so the application starts without network, database or Redis access.

CHANGELOG:
- 2026-10-18: Initial creation with settings, transport and client fixtures
"""

from collections.abc import Callable, Generator
from datetime import date, timedelta
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from astrosolar.api.main import create_app
from astrosolar.clients.geocoding import GeocodingClient
from astrosolar.clients.nasa_power import PowerClient
from astrosolar.config import Settings
from astrosolar.storage.memory import MemoryStorage

_ENV_VARS = (
    "DATABASE_URL",
    "REDIS_URL",
    "MOCK_FALLBACK",
    "CACHE_TTL_S",
    "LOG_LEVEL",
    "GEOCODE_LIMIT",
    "DEFAULT_LOOKBACK_DAYS",
    "CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Clear AstroSolar env vars and run from an empty directory.

    Running from tmp_path keeps a developer's .env file out of Settings.
    """
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def settings() -> Settings:
    """Settings with in-memory storage, no cache and mock fallback on."""
    return Settings(database_url="", redis_url="", mock_fallback=True)


def power_payload(
    start: date, days: int, irradiance: float = 6.0, temperature: float = 35.0
) -> dict:
    """Build a NASA POWER-shaped payload with constant readings."""
    keys = [(start + timedelta(days=i)).strftime("%Y%m%d") for i in range(days)]
    return {
        "geometry": {"coordinates": [-80.648, 28.5721, 3.0]},
        "properties": {
            "parameter": {
                "ALLSKY_SFC_SW_DWN": {k: irradiance for k in keys},
                "T2M": {k: temperature for k in keys},
                "RH2M": {k: 70.0 for k in keys},
                "WS10M": {k: 4.0 for k in keys},
                "CLOUD_AMT": {k: 20.0 for k in keys},
            }
        },
    }


@pytest.fixture()
def payload_factory() -> Callable[..., dict]:
    """Expose power_payload to tests."""
    return power_payload


@pytest.fixture()
def power_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Default NASA POWER stub: constant readings for the requested range."""

    def _handler(request: httpx.Request) -> httpx.Response:
        start = date(*map(int, _split_key(request.url.params["start"])))
        end = date(*map(int, _split_key(request.url.params["end"])))
        return httpx.Response(200, json=power_payload(start, (end - start).days + 1))

    return _handler


def _split_key(key: str) -> tuple[str, str, str]:
    return key[:4], key[4:6], key[6:]


@pytest.fixture()
def geocode_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Default geocoding stub returning a single Kennedy Space Center match."""

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {
                    "display_name": "Kennedy Space Center, Florida, United States",
                    "lat": "28.5721",
                    "lon": "-80.6480",
                    "addresstype": "aerodrome",
                    "importance": 0.61,
                }
            ],
        )

    return _handler


@pytest.fixture()
def mock_redis() -> AsyncMock:
    """Create a mock async Redis client.

    Returns:
        AsyncMock: A mock that behaves like a redis.asyncio.Redis client.
    """
    client = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock()
    client.aclose = AsyncMock()
    return client


@pytest.fixture()
def storage() -> MemoryStorage:
    """Fresh in-memory storage seeded with the KSC example project."""
    return MemoryStorage()


@pytest.fixture()
def client(
    settings: Settings,
    storage: MemoryStorage,
    power_handler: Callable[[httpx.Request], httpx.Response],
    geocode_handler: Callable[[httpx.Request], httpx.Response],
) -> Generator[TestClient, None, None]:
    """Create a FastAPI TestClient for integration testing.

    Uses a context manager so the application lifespan runs. Upstream HTTP
    calls go to the power_handler and geocode_handler stubs; override those
    fixtures in a test module to change upstream behaviour.

    Yields:
        TestClient: Configured test client for the FastAPI app.
    """
    app = create_app(
        settings=settings,
        storage=storage,
        power_client=PowerClient(settings, transport=httpx.MockTransport(power_handler)),
        geocoder=GeocodingClient(
            settings, transport=httpx.MockTransport(geocode_handler)
        ),
        configure_logs=False,
    )
    with TestClient(app) as test_client:
        yield test_client
