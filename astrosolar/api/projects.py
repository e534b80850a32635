"""
Solar analysis project endpoints.

CRUD for projects and their daily data records, plus the operations that
act on a stored project: analyze (fetch + calculate + store), chart points,
report document and CSV export.

CHANGELOG:
- 2026-10-18: Add analyze, chart, report and CSV export routes
- 2026-10-18: Initial creation
"""

import logging
from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse

from astrosolar.api.deps import PowerClientDep, StorageDep
from astrosolar.clients.nasa_power import InvalidPeriodError
from astrosolar.core.models import CamelModel
from astrosolar.services.analysis import (
    AnalysisOutcome,
    ChartPoint,
    analyze_location,
    chart_points,
    daily_rows,
)
from astrosolar.services.report import (
    MissionReport,
    ReportUnavailableError,
    build_report,
    project_parameters,
    render_csv,
)
from astrosolar.storage.base import Storage
from astrosolar.storage.models import (
    DataRecord,
    DataRecordCreate,
    DataRecordFields,
    Project,
    ProjectCreate,
    ProjectUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])

PROJECT_NOT_FOUND = "Project not found"


# ---------------------------------------------------------------------------
# Pydantic request/response models
# ---------------------------------------------------------------------------


class AnalyzeRequest(CamelModel):
    """Options for analyzing a stored project."""

    start_date: date | None = None
    end_date: date | None = None
    store_records: bool = False


class ProjectAnalysis(CamelModel):
    """Updated project plus the analysis that was stored on it."""

    project: Project
    analysis: AnalysisOutcome
    records_stored: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _require_project(storage: Storage, project_id: str) -> Project:
    project = await storage.get_project(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail=PROJECT_NOT_FOUND)
    return project


# ---------------------------------------------------------------------------
# Project CRUD
# ---------------------------------------------------------------------------


@router.get("", response_model=list[Project])
async def list_projects(storage: StorageDep) -> list[Project]:
    return await storage.list_projects()


@router.post("", response_model=Project, status_code=201)
async def create_project(body: ProjectCreate, storage: StorageDep) -> Project:
    return await storage.create_project(body)


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: str, storage: StorageDep) -> Project:
    return await _require_project(storage, project_id)


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: str, body: ProjectUpdate, storage: StorageDep
) -> Project:
    """Apply a partial update; only fields present in the body change."""
    project = await storage.update_project(project_id, body)
    if project is None:
        raise HTTPException(status_code=404, detail=PROJECT_NOT_FOUND)
    return project


@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: str, storage: StorageDep) -> Response:
    if not await storage.delete_project(project_id):
        raise HTTPException(status_code=404, detail=PROJECT_NOT_FOUND)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Data records
# ---------------------------------------------------------------------------


@router.get("/{project_id}/data", response_model=list[DataRecord])
async def list_data(
    project_id: str,
    storage: StorageDep,
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
) -> list[DataRecord]:
    """List a project's records; the range applies only when both ends are given."""
    await _require_project(storage, project_id)
    if start_date is not None and end_date is not None:
        return await storage.list_records(
            project_id, start_date.isoformat(), end_date.isoformat()
        )
    return await storage.list_records(project_id)


@router.post("/{project_id}/data", response_model=DataRecord, status_code=201)
async def create_data(
    project_id: str, body: DataRecordFields, storage: StorageDep
) -> DataRecord:
    await _require_project(storage, project_id)
    return await storage.create_record(
        DataRecordCreate(**dict(body), project_id=project_id)
    )


# ---------------------------------------------------------------------------
# Analysis, charts and reports
# ---------------------------------------------------------------------------


@router.post("/{project_id}/analyze", response_model=ProjectAnalysis)
async def analyze_project(
    project_id: str,
    storage: StorageDep,
    client: PowerClientDep,
    body: AnalyzeRequest | None = None,
) -> ProjectAnalysis:
    """Fetch data for the project location and store the results on it.

    The fetched series is stored as ``solarData`` and the estimate as
    ``calculations``. With ``storeRecords`` each day is also stored as a
    data record carrying its efficiency and energy output.

    Raises:
        HTTPException: 404 if the project does not exist.
        HTTPException: 400 if startDate is after endDate.
    """
    body = body or AnalyzeRequest()
    project = await _require_project(storage, project_id)
    params = project_parameters(project)

    try:
        outcome, series = await analyze_location(
            client,
            project.latitude,
            project.longitude,
            params,
            body.start_date,
            body.end_date,
        )
    except InvalidPeriodError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None

    updated = await storage.update_project(
        project_id,
        ProjectUpdate(solar_data=series, calculations=outcome.results),
    )
    if updated is None:
        raise HTTPException(status_code=404, detail=PROJECT_NOT_FOUND)

    stored = 0
    if body.store_records:
        for row in daily_rows(series, params):
            await storage.create_record(
                DataRecordCreate(
                    project_id=project_id,
                    date=row.date,
                    irradiance=row.irradiance,
                    temperature=row.temperature,
                    cloud_cover=row.cloud_cover,
                    humidity=row.humidity,
                    wind_speed=row.wind_speed,
                    efficiency=row.efficiency,
                    energy_output=row.energy_output,
                    data_source=outcome.data_source,
                )
            )
            stored += 1
        logger.info("Stored %d data records for project %s", stored, project_id)

    return ProjectAnalysis(project=updated, analysis=outcome, records_stored=stored)


@router.get("/{project_id}/chart", response_model=list[ChartPoint])
async def project_chart(
    project_id: str,
    storage: StorageDep,
    window: Annotated[Literal["7D", "30D", "1Y"], Query(alias="range")] = "7D",
) -> list[ChartPoint]:
    """Daily chart points from the project's stored solar data.

    Raises:
        HTTPException: 409 if the project has not been analyzed yet.
    """
    project = await _require_project(storage, project_id)
    if project.solar_data is None:
        raise HTTPException(
            status_code=409, detail="Project has not been analyzed yet"
        )
    return chart_points(project.solar_data, window)


@router.post("/{project_id}/report", response_model=MissionReport)
async def generate_report(project_id: str, storage: StorageDep) -> MissionReport:
    """Build a mission report from the project's stored solar data.

    Raises:
        HTTPException: 409 if the project has not been analyzed yet.
    """
    project = await _require_project(storage, project_id)
    try:
        report = build_report(project)
    except ReportUnavailableError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from None
    logger.info("Generated report %s", report.report_id)
    return report


@router.get("/{project_id}/report.csv", response_class=PlainTextResponse)
async def export_csv(project_id: str, storage: StorageDep) -> PlainTextResponse:
    """Download the project's daily series as CSV.

    Raises:
        HTTPException: 409 if the project has not been analyzed yet.
    """
    project = await _require_project(storage, project_id)
    try:
        content = render_csv(project)
    except ReportUnavailableError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from None
    return PlainTextResponse(
        content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{project_id}-solar-data.csv"'
        },
    )
