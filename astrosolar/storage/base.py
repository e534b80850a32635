"""
Storage interface for projects, data records and comparison analyses.

Two implementations exist: MemoryStorage (volatile, dict-backed) and
SqlStorage (SQLAlchemy async). The calculator never touches storage; API
routes receive a Storage through dependency injection.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from abc import ABC, abstractmethod

from astrosolar.storage.models import (
    Comparison,
    ComparisonCreate,
    DataRecord,
    DataRecordCreate,
    Project,
    ProjectCreate,
    ProjectUpdate,
)


class Storage(ABC):
    """Async repository for AstroSolar records."""

    # Projects

    @abstractmethod
    async def get_project(self, project_id: str) -> Project | None:
        """Return the project with *project_id*, or None."""

    @abstractmethod
    async def list_projects(self) -> list[Project]:
        """Return all projects in creation order."""

    @abstractmethod
    async def create_project(self, data: ProjectCreate) -> Project:
        """Store a new project under a fresh UUID."""

    @abstractmethod
    async def update_project(
        self, project_id: str, changes: ProjectUpdate
    ) -> Project | None:
        """Apply the set fields of *changes*; None if the project is unknown."""

    @abstractmethod
    async def delete_project(self, project_id: str) -> bool:
        """Delete a project and its data records; False if it was unknown."""

    # Data records

    @abstractmethod
    async def list_records(
        self,
        project_id: str,
        start: str | None = None,
        end: str | None = None,
    ) -> list[DataRecord]:
        """Return a project's records ordered by date.

        When both *start* and *end* are given, only records whose ISO date
        lies in the inclusive range are returned.
        """

    @abstractmethod
    async def create_record(self, data: DataRecordCreate) -> DataRecord:
        """Store a new data record."""

    # Comparison analyses

    @abstractmethod
    async def get_comparison(self, comparison_id: str) -> Comparison | None:
        """Return the comparison with *comparison_id*, or None."""

    @abstractmethod
    async def list_comparisons(self) -> list[Comparison]:
        """Return all comparison analyses."""

    @abstractmethod
    async def create_comparison(self, data: ComparisonCreate) -> Comparison:
        """Store a new comparison analysis."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
