"""
Mission report generation.

Builds a report document for an analyzed project (location, parameters,
metrics, results, tilt and losses) and renders its daily series as CSV.

CHANGELOG:
- 2026-10-18: Initial creation
"""

import csv
import io
from datetime import UTC, datetime

from astrosolar.core.models import (
    CalculationResults,
    CamelModel,
    MissionParameters,
    SolarMetrics,
)
from astrosolar.services.analysis import daily_rows, evaluate
from astrosolar.storage.models import Project

CSV_COLUMNS = [
    "date",
    "irradiance",
    "temperature",
    "cloud_cover",
    "humidity",
    "wind_speed",
    "efficiency",
    "energy_output",
]


class ReportUnavailableError(Exception):
    """The project has no stored solar data to report on."""


class ReportLocation(CamelModel):
    name: str
    latitude: float
    longitude: float
    elevation: float | None = None
    timezone: str | None = None


class MissionReport(CamelModel):
    """A completed mission report."""

    report_id: str
    status: str
    generated_at: datetime
    project_id: str
    location: ReportLocation
    parameters: MissionParameters
    metrics: SolarMetrics
    results: CalculationResults
    optimal_tilt: float
    system_losses: float
    days: int


def project_parameters(project: Project) -> MissionParameters:
    """Mission parameters stored on a project."""
    return MissionParameters(
        panel_area=project.panel_area,
        system_efficiency=project.system_efficiency,
        mission_duration=project.mission_duration,
    )


def build_report(project: Project, now: datetime | None = None) -> MissionReport:
    """Build a report from the project's stored solar data.

    Metrics and results are recomputed from the stored series with the
    project's current parameters.

    Raises:
        ReportUnavailableError: If the project has no solar data.
        PreconditionError: If the stored series is empty.
    """
    if project.solar_data is None:
        raise ReportUnavailableError(
            f"Project {project.id} has not been analyzed yet"
        )
    now = now or datetime.now(UTC)
    params = project_parameters(project)
    metrics, results, tilt, losses = evaluate(
        project.solar_data, params, project.latitude
    )
    return MissionReport(
        report_id=f"report-{project.id}-{int(now.timestamp() * 1000)}",
        status="completed",
        generated_at=now,
        project_id=project.id,
        location=ReportLocation(
            name=project.name,
            latitude=project.latitude,
            longitude=project.longitude,
            elevation=project.elevation,
            timezone=project.timezone,
        ),
        parameters=params,
        metrics=metrics,
        results=results,
        optimal_tilt=tilt,
        system_losses=losses,
        days=len(project.solar_data.irradiance),
    )


def render_csv(project: Project) -> str:
    """Render the project's stored daily series as CSV.

    Raises:
        ReportUnavailableError: If the project has no solar data.
    """
    if project.solar_data is None:
        raise ReportUnavailableError(
            f"Project {project.id} has not been analyzed yet"
        )
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for row in daily_rows(project.solar_data, project_parameters(project)):
        writer.writerow(
            [
                row.date,
                row.irradiance,
                row.temperature,
                "" if row.cloud_cover is None else row.cloud_cover,
                "" if row.humidity is None else row.humidity,
                "" if row.wind_speed is None else row.wind_speed,
                round(row.efficiency, 4),
                round(row.energy_output, 4),
            ]
        )
    return buffer.getvalue()
