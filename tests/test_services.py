"""
Tests for the analysis, report and comparison services.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from astrosolar.clients.nasa_power import SOURCE_MOCK, PowerResult
from astrosolar.core.calculator import PreconditionError
from astrosolar.core.models import CalculationResults, MissionParameters, RawSeries
from astrosolar.services.analysis import (
    analyze_location,
    chart_points,
    daily_rows,
    evaluate,
    mean_humidity,
)
from astrosolar.services.comparison import summarize_projects
from astrosolar.services.report import (
    CSV_COLUMNS,
    ReportUnavailableError,
    build_report,
    render_csv,
)
from astrosolar.storage.memory import ksc_example_project

PARAMS = MissionParameters(panel_area=100, system_efficiency=0.22, mission_duration=14)

SERIES = RawSeries(
    irradiance={"2024-01-01": 5.0, "2024-01-02": 6.0, "2024-01-03": 7.0},
    temperature={"2024-01-01": 25.0, "2024-01-02": 35.0, "2024-01-03": 45.0},
    humidity={"2024-01-01": 80.0, "2024-01-02": 85.0, "2024-01-03": 90.0},
)


def _results(total: float) -> CalculationResults:
    return CalculationResults(
        total_energy_output=total,
        daily_average=total / 14,
        peak_output=100.0,
        efficiency=96.0,
        battery_required=total / 14 / 24 * 350,
        mission_viability=total >= 1000,
        recommendations=[],
    )


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


class TestEvaluate:
    def test_chains_calculator(self) -> None:
        metrics, results, tilt, losses = evaluate(SERIES, PARAMS, -28.5)

        assert metrics.daily_irradiance == pytest.approx(6.0)
        assert metrics.efficiency == pytest.approx(96.0)
        assert results.daily_average == pytest.approx(6.0 * 100 * 0.22 * 0.96)
        assert tilt == pytest.approx(28.5)
        # Mean humidity 85 % adds 1 % to the 14 % base.
        assert losses == pytest.approx(0.15)

    def test_mean_humidity_absent(self) -> None:
        series = RawSeries(irradiance={"2024-01-01": 1.0}, temperature={"2024-01-01": 1.0})
        assert mean_humidity(series) is None

    def test_empty_series_raises(self) -> None:
        with pytest.raises(PreconditionError):
            evaluate(RawSeries(irradiance={}, temperature={}), PARAMS, 0.0)


class TestAnalyzeLocation:
    @pytest.mark.asyncio
    async def test_reports_source_and_range(self, payload_factory) -> None:
        start, end = date(2024, 1, 1), date(2024, 1, 10)
        client = AsyncMock()
        client.fetch_daily = AsyncMock(
            return_value=PowerResult(payload_factory(start, 10), SOURCE_MOCK, start, end)
        )

        outcome, series = await analyze_location(client, 28.5, -80.6, PARAMS, start, end)

        client.fetch_daily.assert_awaited_once_with(28.5, -80.6, start, end)
        assert outcome.data_source == SOURCE_MOCK
        assert outcome.days == 10
        assert (outcome.start_date, outcome.end_date) == (start, end)
        assert outcome.metrics.daily_irradiance == pytest.approx(6.0)
        assert len(series.irradiance) == 10


class TestDailyRows:
    def test_rows_carry_efficiency_and_energy(self) -> None:
        rows = daily_rows(SERIES, PARAMS)

        assert [r.date for r in rows] == ["2024-01-01", "2024-01-02", "2024-01-03"]
        assert rows[0].efficiency == 100.0
        assert rows[0].energy_output == pytest.approx(5.0 * 100 * 0.22)
        assert rows[2].efficiency == pytest.approx(92.0)
        assert rows[1].humidity == 85.0
        assert rows[1].cloud_cover is None

    def test_days_missing_temperature_are_skipped(self) -> None:
        series = RawSeries(
            irradiance={"2024-01-01": 5.0, "2024-01-02": 6.0},
            temperature={"2024-01-02": 20.0},
        )
        assert [r.date for r in daily_rows(series, PARAMS)] == ["2024-01-02"]


class TestChartPoints:
    def test_trailing_window(self) -> None:
        days = {f"2024-01-{d:02d}": float(d) for d in range(1, 11)}
        series = RawSeries(irradiance=days, temperature=days)

        points = chart_points(series, "7D")

        assert len(points) == 7
        assert points[0].time == "2024-01-04"
        assert points[-1].time == "2024-01-10"
        assert points[-1].efficiency == 100.0

    def test_short_series_returns_all(self) -> None:
        assert len(chart_points(SERIES, "30D")) == 3


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class TestBuildReport:
    def test_report_for_analyzed_project(self) -> None:
        project = ksc_example_project().model_copy(update={"solar_data": SERIES})
        now = datetime(2024, 2, 1, tzinfo=UTC)

        report = build_report(project, now=now)

        assert report.report_id == f"report-ksc-001-{int(now.timestamp() * 1000)}"
        assert report.status == "completed"
        assert report.location.name == "Kennedy Space Center Analysis"
        assert report.parameters.panel_area == 100
        assert report.optimal_tilt == pytest.approx(28.5721)
        assert report.days == 3
        assert report.results.daily_average == pytest.approx(6.0 * 100 * 0.22 * 0.96)

    def test_unanalyzed_project_raises(self) -> None:
        with pytest.raises(ReportUnavailableError):
            build_report(ksc_example_project())


class TestRenderCsv:
    def test_header_and_rows(self) -> None:
        project = ksc_example_project().model_copy(update={"solar_data": SERIES})

        lines = render_csv(project).splitlines()

        assert lines[0] == ",".join(CSV_COLUMNS)
        assert len(lines) == 4
        assert lines[1] == "2024-01-01,5.0,25.0,,80.0,,100.0,110.0"

    def test_unanalyzed_project_raises(self) -> None:
        with pytest.raises(ReportUnavailableError):
            render_csv(ksc_example_project())


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------


class TestSummarizeProjects:
    def test_ranks_by_total_energy_with_pending_last(self) -> None:
        base = ksc_example_project()
        low = base.model_copy(update={"id": "low", "calculations": _results(800.0)})
        high = base.model_copy(update={"id": "high", "calculations": _results(2400.0)})
        pending = base.model_copy(update={"id": "pending"})

        summaries = summarize_projects([low, pending, high])

        assert [s["projectId"] for s in summaries] == ["high", "low", "pending"]
        assert [s["rank"] for s in summaries] == [1, 2, None]
        assert summaries[0]["missionViability"] is True
        assert summaries[1]["missionViability"] is False
        assert summaries[2]["totalEnergyOutput"] is None
