"""
SQLAlchemy-backed durable storage.

Each operation opens its own AsyncSession from the factory and commits
before returning. Rows are converted to the pydantic storage records at the
boundary; JSON columns hold the camelCase wire form of RawSeries and
CalculationResults.

CHANGELOG:
- 2026-10-18: Initial creation
"""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from astrosolar.core.models import CalculationResults, RawSeries
from astrosolar.db.models import (
    ComparisonAnalysisRow,
    SolarDataRecordRow,
    SolarProjectRow,
)
from astrosolar.storage.base import Storage
from astrosolar.storage.models import (
    Comparison,
    ComparisonCreate,
    DataRecord,
    DataRecordCreate,
    Project,
    ProjectCreate,
    ProjectUpdate,
)

logger = logging.getLogger(__name__)

# Project fields stored as JSON blobs, with their pydantic types.
_JSON_FIELDS = {"solar_data": RawSeries, "calculations": CalculationResults}


def _now() -> datetime:
    return datetime.now(UTC)


def _to_column(name: str, value: object) -> object:
    if name in _JSON_FIELDS and value is not None:
        return value.model_dump(mode="json", by_alias=True)
    return value


def _project_from_row(row: SolarProjectRow) -> Project:
    return Project(
        id=row.id,
        name=row.name,
        description=row.description,
        latitude=row.latitude,
        longitude=row.longitude,
        elevation=row.elevation,
        timezone=row.timezone,
        panel_area=row.panel_area,
        system_efficiency=row.system_efficiency,
        mission_duration=row.mission_duration,
        solar_data=(
            RawSeries.model_validate(row.solar_data) if row.solar_data else None
        ),
        calculations=(
            CalculationResults.model_validate(row.calculations)
            if row.calculations
            else None
        ),
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _record_from_row(row: SolarDataRecordRow) -> DataRecord:
    return DataRecord(
        id=row.id,
        project_id=row.project_id,
        date=row.date,
        irradiance=row.irradiance,
        temperature=row.temperature,
        cloud_cover=row.cloud_cover,
        humidity=row.humidity,
        wind_speed=row.wind_speed,
        efficiency=row.efficiency,
        energy_output=row.energy_output,
        data_source=row.data_source,
        created_at=row.created_at,
    )


def _comparison_from_row(row: ComparisonAnalysisRow) -> Comparison:
    return Comparison(
        id=row.id,
        name=row.name,
        project_ids=list(row.project_ids),
        analysis_type=row.analysis_type,
        results=row.results,
        created_at=row.created_at,
    )


class SqlStorage(Storage):
    """Storage implementation on an async SQLAlchemy engine.

    Args:
        session_factory: Factory producing AsyncSession instances.
        engine: Engine to dispose on close(), if owned by this storage.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = engine

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def get_project(self, project_id: str) -> Project | None:
        async with self._session_factory() as session:
            row = await session.get(SolarProjectRow, project_id)
            return _project_from_row(row) if row is not None else None

    async def list_projects(self) -> list[Project]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(SolarProjectRow).order_by(SolarProjectRow.created_at)
            )
            return [_project_from_row(row) for row in result.scalars().all()]

    async def create_project(self, data: ProjectCreate) -> Project:
        now = _now()
        values = {name: _to_column(name, value) for name, value in data}
        row = SolarProjectRow(
            **values, id=str(uuid.uuid4()), created_at=now, updated_at=now
        )
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            project = _project_from_row(row)
        logger.info("Created project %s (%s)", project.id, project.name)
        return project

    async def update_project(
        self, project_id: str, changes: ProjectUpdate
    ) -> Project | None:
        async with self._session_factory() as session:
            row = await session.get(SolarProjectRow, project_id)
            if row is None:
                return None
            for name, value in changes.changes().items():
                setattr(row, name, _to_column(name, value))
            row.updated_at = _now()
            await session.commit()
            return _project_from_row(row)

    async def delete_project(self, project_id: str) -> bool:
        async with self._session_factory() as session:
            row = await session.get(SolarProjectRow, project_id)
            if row is None:
                return False
            await session.execute(
                delete(SolarDataRecordRow).where(
                    SolarDataRecordRow.project_id == project_id
                )
            )
            await session.delete(row)
            await session.commit()
        logger.info("Deleted project %s", project_id)
        return True

    # ------------------------------------------------------------------
    # Data records
    # ------------------------------------------------------------------

    async def list_records(
        self,
        project_id: str,
        start: str | None = None,
        end: str | None = None,
    ) -> list[DataRecord]:
        stmt = select(SolarDataRecordRow).where(
            SolarDataRecordRow.project_id == project_id
        )
        if start is not None and end is not None:
            stmt = stmt.where(
                SolarDataRecordRow.date >= start,
                SolarDataRecordRow.date <= end,
            )
        stmt = stmt.order_by(SolarDataRecordRow.date)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [_record_from_row(row) for row in result.scalars().all()]

    async def create_record(self, data: DataRecordCreate) -> DataRecord:
        row = SolarDataRecordRow(**dict(data), id=str(uuid.uuid4()), created_at=_now())
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            return _record_from_row(row)

    # ------------------------------------------------------------------
    # Comparison analyses
    # ------------------------------------------------------------------

    async def get_comparison(self, comparison_id: str) -> Comparison | None:
        async with self._session_factory() as session:
            row = await session.get(ComparisonAnalysisRow, comparison_id)
            return _comparison_from_row(row) if row is not None else None

    async def list_comparisons(self) -> list[Comparison]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ComparisonAnalysisRow).order_by(ComparisonAnalysisRow.created_at)
            )
            return [_comparison_from_row(row) for row in result.scalars().all()]

    async def create_comparison(self, data: ComparisonCreate) -> Comparison:
        row = ComparisonAnalysisRow(
            **dict(data), id=str(uuid.uuid4()), created_at=_now()
        )
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            return _comparison_from_row(row)
