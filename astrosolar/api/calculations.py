"""
Calculator endpoints.

POST /api/analysis runs the full chain for a location: fetch NASA POWER
data, aggregate, estimate. The /api/calculations/* endpoints expose the pure
calculator operations directly on caller-supplied data.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query
from pydantic import Field

from astrosolar.api.deps import PowerClientDep
from astrosolar.clients.nasa_power import InvalidPeriodError
from astrosolar.core.calculator import aggregate, estimate, optimal_tilt, system_losses
from astrosolar.core.models import (
    CalculationResults,
    CamelModel,
    MissionParameters,
    RawSeries,
    SolarMetrics,
)
from astrosolar.services.analysis import AnalysisOutcome, analyze_location

router = APIRouter(prefix="/api", tags=["calculations"])


# ---------------------------------------------------------------------------
# Pydantic request/response models
# ---------------------------------------------------------------------------


class AnalysisRequest(CamelModel):
    """Location, optional date range and mission parameters to analyze."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    start_date: date | None = None
    end_date: date | None = None
    parameters: MissionParameters


class MissionRequest(CamelModel):
    """Precomputed metrics plus mission parameters."""

    metrics: SolarMetrics
    parameters: MissionParameters


class TiltResponse(CamelModel):
    latitude: float
    optimal_tilt: float


class LossesResponse(CamelModel):
    temperature: float
    humidity: float | None
    system_losses: float


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/analysis", response_model=AnalysisOutcome)
async def run_analysis(body: AnalysisRequest, client: PowerClientDep) -> AnalysisOutcome:
    """Fetch data for a location and evaluate the mission against it.

    Raises:
        HTTPException: 400 if startDate is after endDate.
    """
    try:
        outcome, _ = await analyze_location(
            client,
            body.latitude,
            body.longitude,
            body.parameters,
            body.start_date,
            body.end_date,
        )
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None
    return outcome


@router.post("/calculations/metrics", response_model=SolarMetrics)
async def calculate_metrics(series: RawSeries) -> SolarMetrics:
    """Aggregate a caller-supplied series."""
    return aggregate(series)


@router.post("/calculations/mission", response_model=CalculationResults)
async def calculate_mission(body: MissionRequest) -> CalculationResults:
    """Estimate mission energy from caller-supplied metrics."""
    return estimate(body.metrics, body.parameters)


@router.get("/calculations/optimal-tilt", response_model=TiltResponse)
async def calculate_optimal_tilt(
    latitude: Annotated[float, Query(ge=-90, le=90)],
) -> TiltResponse:
    """Optimal fixed tilt for a latitude."""
    return TiltResponse(latitude=latitude, optimal_tilt=optimal_tilt(latitude))


@router.get("/calculations/system-losses", response_model=LossesResponse)
async def calculate_system_losses(
    temperature: float,
    humidity: Annotated[float | None, Query(ge=0, le=100)] = None,
) -> LossesResponse:
    """System losses for site temperature and optional humidity."""
    return LossesResponse(
        temperature=temperature,
        humidity=humidity,
        system_losses=system_losses(temperature, humidity),
    )
