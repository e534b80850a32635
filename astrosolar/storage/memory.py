"""
Volatile in-memory storage.

Used when no DATABASE_URL is configured. Contents are lost on restart. A
fresh instance is seeded with the Kennedy Space Center example project.

CHANGELOG:
- 2026-10-18: Initial creation
"""

import logging
import uuid
from datetime import UTC, datetime

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

KSC_PROJECT_ID = "ksc-001"


def _now() -> datetime:
    return datetime.now(UTC)


def ksc_example_project() -> Project:
    """Return the Kennedy Space Center example project."""
    now = _now()
    return Project(
        id=KSC_PROJECT_ID,
        name="Kennedy Space Center Analysis",
        description="NASA launch facility solar energy analysis",
        latitude=28.5721,
        longitude=-80.6480,
        elevation=3,
        timezone="UTC-5",
        panel_area=100,
        system_efficiency=0.22,
        mission_duration=14,
        created_at=now,
        updated_at=now,
    )


class MemoryStorage(Storage):
    """Dict-backed Storage implementation.

    Args:
        seed: Insert the Kennedy Space Center example project.
    """

    def __init__(self, seed: bool = True) -> None:
        self._projects: dict[str, Project] = {}
        self._records: dict[str, DataRecord] = {}
        self._comparisons: dict[str, Comparison] = {}
        if seed:
            project = ksc_example_project()
            self._projects[project.id] = project

    async def get_project(self, project_id: str) -> Project | None:
        return self._projects.get(project_id)

    async def list_projects(self) -> list[Project]:
        return list(self._projects.values())

    async def create_project(self, data: ProjectCreate) -> Project:
        now = _now()
        project = Project(
            **dict(data), id=str(uuid.uuid4()), created_at=now, updated_at=now
        )
        self._projects[project.id] = project
        logger.info("Created project %s (%s)", project.id, project.name)
        return project

    async def update_project(
        self, project_id: str, changes: ProjectUpdate
    ) -> Project | None:
        existing = self._projects.get(project_id)
        if existing is None:
            return None
        updated = existing.model_copy(
            update={**changes.changes(), "updated_at": _now()}
        )
        self._projects[project_id] = updated
        return updated

    async def delete_project(self, project_id: str) -> bool:
        if self._projects.pop(project_id, None) is None:
            return False
        self._records = {
            rid: r for rid, r in self._records.items() if r.project_id != project_id
        }
        logger.info("Deleted project %s", project_id)
        return True

    async def list_records(
        self,
        project_id: str,
        start: str | None = None,
        end: str | None = None,
    ) -> list[DataRecord]:
        records = [r for r in self._records.values() if r.project_id == project_id]
        if start is not None and end is not None:
            records = [r for r in records if start <= r.date <= end]
        return sorted(records, key=lambda r: r.date)

    async def create_record(self, data: DataRecordCreate) -> DataRecord:
        record = DataRecord(**dict(data), id=str(uuid.uuid4()), created_at=_now())
        self._records[record.id] = record
        return record

    async def get_comparison(self, comparison_id: str) -> Comparison | None:
        return self._comparisons.get(comparison_id)

    async def list_comparisons(self) -> list[Comparison]:
        return list(self._comparisons.values())

    async def create_comparison(self, data: ComparisonCreate) -> Comparison:
        comparison = Comparison(**dict(data), id=str(uuid.uuid4()), created_at=_now())
        self._comparisons[comparison.id] = comparison
        return comparison
