"""
Place-name resolver backed by a Nominatim-compatible search API.

Returns candidate matches in upstream rank order. Entries without usable
coordinates are skipped.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from astrosolar.clients.errors import UpstreamError
from astrosolar.config import Settings
from astrosolar.core.models import CamelModel

logger = logging.getLogger(__name__)

GEOCODE_FAILED_DETAIL = "Failed to geocode location"


class GeocodeCandidate(CamelModel):
    """One place-name match.

    Attributes:
        name: Human-readable place name.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        kind: Upstream place type (city, administrative, ...), if given.
        importance: Upstream relevance score, if given.
    """

    name: str
    latitude: float
    longitude: float
    kind: str | None = None
    importance: float | None = None


def _parse_candidate(entry: dict[str, Any]) -> GeocodeCandidate | None:
    try:
        return GeocodeCandidate(
            name=entry.get("display_name") or entry.get("name") or "",
            latitude=float(entry["lat"]),
            longitude=float(entry["lon"]),
            kind=entry.get("addresstype") or entry.get("type"),
            importance=entry.get("importance"),
        )
    except (KeyError, TypeError, ValueError):
        logger.debug("Skipping geocoding entry without coordinates: %r", entry)
        return None


class GeocodingClient:
    """Async client for place-name search.

    Args:
        settings: Service settings (endpoint, limit, timeout, user agent).
        transport: Optional httpx transport, used to stub the upstream.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def search(self, query: str) -> list[GeocodeCandidate]:
        """Resolve *query* to ranked candidate locations.

        Raises:
            UpstreamError: On network errors, non-2xx answers or a body that
                is not a JSON list.
        """
        settings = self._settings
        try:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    settings.geocode_base_url,
                    params={"format": "json", "q": query, "limit": settings.geocode_limit},
                    headers={"User-Agent": settings.user_agent},
                )
        except httpx.HTTPError as exc:
            logger.warning("Geocoding request failed: %s", exc)
            raise UpstreamError(GEOCODE_FAILED_DETAIL) from exc

        if not response.is_success:
            logger.error(
                "Geocoding error: %d %s", response.status_code, response.reason_phrase
            )
            raise UpstreamError(GEOCODE_FAILED_DETAIL)

        try:
            entries = response.json()
        except ValueError as exc:
            raise UpstreamError(GEOCODE_FAILED_DETAIL) from exc
        if not isinstance(entries, list):
            raise UpstreamError(GEOCODE_FAILED_DETAIL)

        candidates = [
            candidate
            for candidate in (_parse_candidate(e) for e in entries if isinstance(e, dict))
            if candidate is not None
        ]
        return candidates[: settings.geocode_limit]
