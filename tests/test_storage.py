"""
Tests for the storage backends.

Every behavioural test runs against both MemoryStorage and SqlStorage (on a
temporary SQLite file through aiosqlite), so the two implementations stay
interchangeable.

Tests verify:
- Project create/get/list/update/delete.
- Partial updates touch only the fields that were set.
- Solar data and calculations round-trip through storage.
- Data records are ordered by date and range-filtered only with both ends.
- Deleting a project removes its data records.
- Comparisons round-trip with their results.
- MemoryStorage is seeded with the Kennedy Space Center example.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from pathlib import Path

import pytest

from astrosolar.config import Settings
from astrosolar.core.models import CalculationResults, RawSeries
from astrosolar.storage import MemoryStorage, SqlStorage, Storage, create_storage
from astrosolar.storage.memory import KSC_PROJECT_ID
from astrosolar.storage.models import (
    ComparisonCreate,
    DataRecordCreate,
    ProjectCreate,
    ProjectUpdate,
)

BACKENDS = ["memory", "sql"]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _open(kind: str, tmp_path: Path) -> Storage:
    if kind == "memory":
        return MemoryStorage(seed=False)
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'astro.db'}")
    return await create_storage(settings)


def _project(name: str = "Mojave Test Site") -> ProjectCreate:
    return ProjectCreate(
        name=name, latitude=35.0, longitude=-117.0, panel_area=50, mission_duration=30
    )


def _record(project_id: str, day: str, irradiance: float = 5.0) -> DataRecordCreate:
    return DataRecordCreate(
        project_id=project_id, date=day, irradiance=irradiance, temperature=22.0
    )


SERIES = RawSeries(
    irradiance={"2024-01-01": 5.0, "2024-01-02": 6.0},
    temperature={"2024-01-01": 20.0, "2024-01-02": 22.0},
    humidity={"2024-01-01": 50.0, "2024-01-02": 55.0},
)

RESULTS = CalculationResults(
    total_energy_output=1663.2,
    daily_average=118.8,
    peak_output=154.0,
    efficiency=90.0,
    battery_required=1732.5,
    mission_viability=True,
    recommendations=["Good solar resource - suitable for most applications"],
)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("kind", BACKENDS)
class TestProjects:
    @pytest.mark.asyncio
    async def test_create_and_get(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            created = await storage.create_project(_project())
            fetched = await storage.get_project(created.id)

            assert fetched is not None
            assert fetched.id == created.id
            assert fetched.name == "Mojave Test Site"
            assert fetched.panel_area == 50
            assert fetched.system_efficiency == 0.22
            assert fetched.solar_data is None
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            assert await storage.get_project("missing") is None
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_list_in_creation_order(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            await storage.create_project(_project("A"))
            await storage.create_project(_project("B"))
            assert [p.name for p in await storage.list_projects()] == ["A", "B"]
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_partial_update(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            created = await storage.create_project(_project())
            updated = await storage.update_project(
                created.id, ProjectUpdate(panel_area=75)
            )

            assert updated is not None
            assert updated.panel_area == 75
            assert updated.name == created.name
            assert updated.mission_duration == created.mission_duration
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_solar_data_round_trips(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            created = await storage.create_project(_project())
            await storage.update_project(
                created.id, ProjectUpdate(solar_data=SERIES, calculations=RESULTS)
            )
            fetched = await storage.get_project(created.id)

            assert fetched.solar_data == SERIES
            assert fetched.calculations == RESULTS
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_update_unknown_returns_none(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            assert await storage.update_project("missing", ProjectUpdate(name="x")) is None
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_delete_removes_project_and_records(
        self, kind: str, tmp_path: Path
    ) -> None:
        storage = await _open(kind, tmp_path)
        try:
            created = await storage.create_project(_project())
            await storage.create_record(_record(created.id, "2024-01-01"))

            assert await storage.delete_project(created.id) is True
            assert await storage.get_project(created.id) is None
            assert await storage.list_records(created.id) == []
            assert await storage.delete_project(created.id) is False
        finally:
            await storage.close()


# ---------------------------------------------------------------------------
# Data records
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("kind", BACKENDS)
class TestDataRecords:
    @pytest.mark.asyncio
    async def test_records_ordered_by_date(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            project = await storage.create_project(_project())
            for day in ("2024-01-03", "2024-01-01", "2024-01-02"):
                await storage.create_record(_record(project.id, day))

            records = await storage.list_records(project.id)
            assert [r.date for r in records] == ["2024-01-01", "2024-01-02", "2024-01-03"]
            assert records[0].data_source == "NASA_POWER"
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_range_filter_is_inclusive(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            project = await storage.create_project(_project())
            for day in ("2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"):
                await storage.create_record(_record(project.id, day))

            records = await storage.list_records(project.id, "2024-01-02", "2024-01-03")
            assert [r.date for r in records] == ["2024-01-02", "2024-01-03"]
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_single_bound_does_not_filter(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            project = await storage.create_project(_project())
            for day in ("2024-01-01", "2024-01-02"):
                await storage.create_record(_record(project.id, day))

            assert len(await storage.list_records(project.id, start="2024-01-02")) == 2
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_records_scoped_to_project(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            first = await storage.create_project(_project("A"))
            second = await storage.create_project(_project("B"))
            await storage.create_record(_record(first.id, "2024-01-01"))

            assert await storage.list_records(second.id) == []
        finally:
            await storage.close()


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("kind", BACKENDS)
class TestComparisons:
    @pytest.mark.asyncio
    async def test_create_get_list(self, kind: str, tmp_path: Path) -> None:
        storage = await _open(kind, tmp_path)
        try:
            created = await storage.create_comparison(
                ComparisonCreate(
                    name="Launch sites",
                    project_ids=["a", "b"],
                    analysis_type="energy",
                    results=[{"rank": 1, "projectId": "a"}],
                )
            )
            fetched = await storage.get_comparison(created.id)

            assert fetched.project_ids == ["a", "b"]
            assert fetched.results == [{"rank": 1, "projectId": "a"}]
            assert [c.id for c in await storage.list_comparisons()] == [created.id]
            assert await storage.get_comparison("missing") is None
        finally:
            await storage.close()


# ---------------------------------------------------------------------------
# Backend specifics
# ---------------------------------------------------------------------------


class TestMemoryStorageSeed:
    @pytest.mark.asyncio
    async def test_seeded_with_ksc_project(self) -> None:
        project = await MemoryStorage().get_project(KSC_PROJECT_ID)

        assert project is not None
        assert project.name == "Kennedy Space Center Analysis"
        assert project.latitude == pytest.approx(28.5721)
        assert project.panel_area == 100

    @pytest.mark.asyncio
    async def test_seed_can_be_disabled(self) -> None:
        assert await MemoryStorage(seed=False).list_projects() == []


class TestCreateStorage:
    @pytest.mark.asyncio
    async def test_without_database_url_uses_memory(self) -> None:
        storage = await create_storage(Settings(database_url=""))
        assert isinstance(storage, MemoryStorage)

    @pytest.mark.asyncio
    async def test_sqlite_url_uses_sql_storage(self, tmp_path: Path) -> None:
        storage = await create_storage(
            Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'astro.db'}")
        )
        try:
            assert isinstance(storage, SqlStorage)
            assert await storage.list_projects() == []
        finally:
            await storage.close()
