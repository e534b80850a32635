"""
NASA POWER daily point client.

Fetches daily irradiance and weather parameters for a latitude/longitude
and date range. Successful upstream payloads are cached in Redis when a
REDIS_URL is configured. When NASA POWER answers with a non-2xx status and
MOCK_FALLBACK is enabled, a synthetic payload of the same shape is served
instead; network errors and timeouts always raise UpstreamError.

Operations:
- resolve_period(start, end, lookback_days): Fill in a default date range.
- PowerClient.fetch_daily(latitude, longitude, start, end): Fetch a payload.

CHANGELOG:
- 2026-10-18: Cache upstream payloads in Redis
- 2026-10-18: Initial creation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

import httpx

from astrosolar.cache.redis_client import (
    get_cached_json,
    power_cache_key,
    set_cached_json,
)
from astrosolar.clients.errors import UpstreamError
from astrosolar.clients.mock_data import mock_power_payload
from astrosolar.config import Settings
from astrosolar.core.models import RawSeries

logger = logging.getLogger(__name__)

SOURCE_NASA_POWER = "NASA_POWER"
SOURCE_MOCK = "MOCK"

FETCH_FAILED_DETAIL = "Failed to fetch solar data from NASA POWER API"


@dataclass(frozen=True)
class PowerResult:
    """A NASA POWER payload and where it came from.

    Attributes:
        payload: Upstream JSON, unchanged (or the mock equivalent).
        source: SOURCE_NASA_POWER or SOURCE_MOCK.
        start: First day of the requested range.
        end: Last day of the requested range.
    """

    payload: dict[str, Any]
    source: str
    start: date
    end: date

    def series(self) -> RawSeries:
        """Convert the payload into a RawSeries.

        Raises:
            UpstreamError: If the payload lacks irradiance or temperature.
        """
        try:
            return RawSeries.from_power_payload(self.payload)
        except ValueError as exc:
            raise UpstreamError("NASA POWER returned an unusable payload") from exc


class InvalidPeriodError(ValueError):
    """The requested start date is after the end date."""


def resolve_period(
    start: date | None,
    end: date | None,
    lookback_days: int,
) -> tuple[date, date]:
    """Return an explicit (start, end) range.

    A missing end defaults to today; a missing start defaults to
    *lookback_days* before the end.

    Raises:
        InvalidPeriodError: If start is after end.
    """
    if end is None:
        end = date.today()
    if start is None:
        start = end - timedelta(days=lookback_days)
    if start > end:
        raise InvalidPeriodError("startDate must not be after endDate")
    return start, end


class PowerClient:
    """Async client for the NASA POWER daily point API.

    Args:
        settings: Service settings (endpoint, parameters, timeout, cache).
        transport: Optional httpx transport, used to stub the upstream.

    Usage::

        client = PowerClient(get_settings())
        result = await client.fetch_daily(28.5721, -80.648, None, None)
        series = result.series()
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def fetch_daily(
        self,
        latitude: float,
        longitude: float,
        start: date | None = None,
        end: date | None = None,
    ) -> PowerResult:
        """Fetch daily parameters for a point over a date range.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.
            start: First day, or None for the default lookback.
            end: Last day, or None for today.

        Returns:
            PowerResult: Payload plus its source and the resolved range.

        Raises:
            InvalidPeriodError: If start is after end.
            UpstreamError: On network errors, timeouts, undecodable bodies,
                or non-2xx answers when mock fallback is disabled.
        """
        settings = self._settings
        start, end = resolve_period(start, end, settings.default_lookback_days)
        start_key = start.strftime("%Y%m%d")
        end_key = end.strftime("%Y%m%d")
        cache_key = power_cache_key(latitude, longitude, start_key, end_key)

        if settings.redis_url:
            cached = await get_cached_json(settings.redis_url, cache_key)
            if isinstance(cached, dict):
                logger.debug("NASA POWER cache hit: %s", cache_key)
                return PowerResult(cached, SOURCE_NASA_POWER, start, end)

        params = {
            "parameters": settings.nasa_power_parameters,
            "community": settings.nasa_power_community,
            "longitude": longitude,
            "latitude": latitude,
            "start": start_key,
            "end": end_key,
            "format": "JSON",
        }

        try:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    settings.nasa_power_base_url,
                    params=params,
                    headers={"User-Agent": settings.user_agent},
                )
        except httpx.HTTPError as exc:
            logger.warning("NASA POWER request failed: %s", exc)
            raise UpstreamError(FETCH_FAILED_DETAIL) from exc

        if not response.is_success:
            logger.error(
                "NASA API error: %d %s",
                response.status_code,
                response.reason_phrase,
            )
            if not settings.mock_fallback:
                raise UpstreamError(FETCH_FAILED_DETAIL)
            logger.warning(
                "Serving mock data for (%.4f, %.4f) %s..%s",
                latitude,
                longitude,
                start_key,
                end_key,
            )
            return PowerResult(
                mock_power_payload(latitude, longitude, start, end),
                SOURCE_MOCK,
                start,
                end,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("NASA POWER returned a non-JSON body")
            raise UpstreamError(FETCH_FAILED_DETAIL) from exc

        if settings.redis_url:
            await set_cached_json(
                settings.redis_url, cache_key, payload, settings.cache_ttl_s
            )

        return PowerResult(payload, SOURCE_NASA_POWER, start, end)
