"""
Pydantic records persisted by the storage layer.

A project pins a location and a set of mission parameters, optionally with
the last fetched solar series and calculation results attached. Data
records hold one day of observations for a project; comparison analyses
group several projects.

CHANGELOG:
- 2026-10-18: Reject explicit nulls for required project fields on update
- 2026-10-18: Initial creation
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, model_validator

from astrosolar.core.models import CalculationResults, CamelModel, RawSeries

DEFAULT_DATA_SOURCE = "NASA_POWER"

# Project fields an update may omit but never clear.
_NOT_NULLABLE_FIELDS = (
    "name",
    "latitude",
    "longitude",
    "panel_area",
    "system_efficiency",
    "mission_duration",
    "is_active",
)


class ProjectCreate(CamelModel):
    """Fields accepted when creating a project."""

    name: str = Field(min_length=1)
    description: str | None = None
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    elevation: float | None = None
    timezone: str | None = None
    panel_area: float = Field(default=10, gt=0)
    system_efficiency: float = Field(default=0.22, gt=0, le=1)
    mission_duration: float = Field(default=14, gt=0)
    solar_data: RawSeries | None = None
    calculations: CalculationResults | None = None
    is_active: bool = True


class ProjectUpdate(CamelModel):
    """Partial project update; only fields explicitly set are applied."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    elevation: float | None = None
    timezone: str | None = None
    panel_area: float | None = Field(default=None, gt=0)
    system_efficiency: float | None = Field(default=None, gt=0, le=1)
    mission_duration: float | None = Field(default=None, gt=0)
    solar_data: RawSeries | None = None
    calculations: CalculationResults | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def _reject_cleared_fields(self) -> ProjectUpdate:
        cleared = [
            name
            for name in _NOT_NULLABLE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"{', '.join(cleared)} cannot be null")
        return self

    def changes(self) -> dict:
        """Return the explicitly set fields as model instances, not dicts."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class Project(ProjectCreate):
    """A stored solar analysis project."""

    id: str
    created_at: datetime
    updated_at: datetime


class DataRecordFields(CamelModel):
    """One day of observations, as posted to a project."""

    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    irradiance: float = Field(ge=0)
    temperature: float
    cloud_cover: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    efficiency: float | None = None
    energy_output: float | None = None
    data_source: str = DEFAULT_DATA_SOURCE


class DataRecordCreate(DataRecordFields):
    """One day of observations for a project."""

    project_id: str


class DataRecord(DataRecordCreate):
    """A stored data record."""

    id: str
    created_at: datetime


class ComparisonCreate(CamelModel):
    """Fields accepted when creating a comparison analysis."""

    name: str = Field(min_length=1)
    project_ids: list[str] = Field(min_length=1)
    analysis_type: str = Field(min_length=1)
    results: list[dict] | dict | None = None


class Comparison(ComparisonCreate):
    """A stored comparison analysis."""

    id: str
    created_at: datetime
