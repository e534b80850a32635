"""
SQLAlchemy ORM models for the durable storage backend.

Defines the solar_analysis_projects, solar_data_records and
comparison_analyses tables. Solar data and calculation results are stored
as JSON blobs in their camelCase wire form so that they round-trip through
the pydantic models unchanged.

CHANGELOG:
- 2026-10-18: Initial creation
"""

import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Double, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all AstroSolar ORM models."""

    pass


class SolarProjectRow(Base):
    """A solar analysis project: a location plus mission parameters."""

    __tablename__ = "solar_analysis_projects"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)
    elevation: Mapped[float | None] = mapped_column(Double, nullable=True)
    timezone: Mapped[str | None] = mapped_column(Text, nullable=True)
    panel_area: Mapped[float] = mapped_column(Double, nullable=False, default=10)
    system_efficiency: Mapped[float] = mapped_column(
        Double, nullable=False, default=0.22
    )
    mission_duration: Mapped[float] = mapped_column(Double, nullable=False, default=14)
    solar_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    calculations: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        """Return string representation of the project row."""
        return f"SolarProjectRow(id={self.id!r}, name={self.name!r})"


class SolarDataRecordRow(Base):
    """One day of observations attached to a project."""

    __tablename__ = "solar_data_records"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("solar_analysis_projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    irradiance: Mapped[float] = mapped_column(Double, nullable=False)
    temperature: Mapped[float] = mapped_column(Double, nullable=False)
    cloud_cover: Mapped[float | None] = mapped_column(Double, nullable=True)
    humidity: Mapped[float | None] = mapped_column(Double, nullable=True)
    wind_speed: Mapped[float | None] = mapped_column(Double, nullable=True)
    efficiency: Mapped[float | None] = mapped_column(Double, nullable=True)
    energy_output: Mapped[float | None] = mapped_column(Double, nullable=True)
    data_source: Mapped[str] = mapped_column(
        Text, nullable=False, default="NASA_POWER"
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        """Return string representation of the data record row."""
        return (
            f"SolarDataRecordRow(project_id={self.project_id!r}, "
            f"date={self.date!r}, irradiance={self.irradiance!r})"
        )


class ComparisonAnalysisRow(Base):
    """A comparison across several projects."""

    __tablename__ = "comparison_analyses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    project_ids: Mapped[list] = mapped_column(JSON, nullable=False)
    analysis_type: Mapped[str] = mapped_column(Text, nullable=False)
    results: Mapped[Any] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        """Return string representation of the comparison row."""
        return f"ComparisonAnalysisRow(id={self.id!r}, name={self.name!r})"
