"""
Upstream proxy endpoints: NASA POWER daily data and place-name search.

GET /api/nasa-power returns the NASA POWER payload unchanged (or the mock
equivalent when the upstream answers with an error status and mock fallback
is on). The X-Data-Source response header tells the two apart.
GET /api/geocode returns ranked candidate locations for a query.

CHANGELOG:
- 2026-10-18: Initial creation
"""

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from astrosolar.api.deps import GeocoderDep, PowerClientDep
from astrosolar.clients.geocoding import GeocodeCandidate
from astrosolar.clients.nasa_power import InvalidPeriodError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["solar"])


@router.get("/nasa-power")
async def nasa_power(
    client: PowerClientDep,
    lat: Annotated[float | None, Query(ge=-90, le=90)] = None,
    lon: Annotated[float | None, Query(ge=-180, le=180)] = None,
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
) -> JSONResponse:
    """Proxy a NASA POWER daily point request.

    Raises:
        HTTPException: 400 if lat/lon are missing or the range is inverted.
    """
    if lat is None or lon is None:
        raise HTTPException(
            status_code=400, detail="Latitude and longitude are required"
        )

    try:
        result = await client.fetch_daily(lat, lon, start_date, end_date)
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None

    return JSONResponse(
        content=result.payload,
        headers={"X-Data-Source": result.source},
    )


@router.get("/geocode", response_model=list[GeocodeCandidate])
async def geocode(
    geocoder: GeocoderDep,
    query: Annotated[str | None, Query(max_length=200)] = None,
) -> list[GeocodeCandidate]:
    """Resolve a place name to candidate coordinates.

    Raises:
        HTTPException: 400 if the query is missing or blank.
    """
    if query is None or not query.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    candidates = await geocoder.search(query.strip())
    logger.debug("Geocode query=%r candidates=%d", query, len(candidates))
    return candidates
