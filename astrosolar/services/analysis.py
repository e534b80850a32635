"""
Location analysis service.

Chains the NASA POWER fetch with the calculator: fetch a daily series for a
point, aggregate it, estimate mission energy, and attach the optimal tilt
and system-loss figures. Also derives per-day rows (for stored data records
and CSV export) and chart points from a series.

CHANGELOG:
- 2026-10-18: Add chart points and per-day rows
- 2026-10-18: Initial creation
"""

import logging
from dataclasses import dataclass
from datetime import date

from astrosolar.clients.nasa_power import PowerClient
from astrosolar.core.calculator import (
    aggregate,
    estimate,
    optimal_tilt,
    system_losses,
    temperature_efficiency,
)
from astrosolar.core.models import (
    CalculationResults,
    CamelModel,
    MissionParameters,
    RawSeries,
    SolarMetrics,
)

logger = logging.getLogger(__name__)

# Chart window -> number of trailing days.
CHART_RANGES: dict[str, int] = {"7D": 7, "30D": 30, "1Y": 365}


class AnalysisOutcome(CamelModel):
    """Everything the dashboard shows for one location and parameter set."""

    latitude: float
    longitude: float
    start_date: date
    end_date: date
    data_source: str
    days: int
    metrics: SolarMetrics
    results: CalculationResults
    optimal_tilt: float
    system_losses: float


class ChartPoint(CamelModel):
    """One day on the irradiance/temperature/efficiency chart."""

    time: str
    irradiance: float
    temperature: float
    efficiency: float


@dataclass(frozen=True)
class DailyRow:
    """Observations and derived output for one day."""

    date: str
    irradiance: float
    temperature: float
    cloud_cover: float | None
    humidity: float | None
    wind_speed: float | None
    efficiency: float
    energy_output: float


def mean_humidity(series: RawSeries) -> float | None:
    """Mean relative humidity of the series, or None when not observed."""
    if not series.humidity:
        return None
    return sum(series.humidity.values()) / len(series.humidity)


def evaluate(
    series: RawSeries,
    params: MissionParameters,
    latitude: float,
) -> tuple[SolarMetrics, CalculationResults, float, float]:
    """Run the calculator on a series.

    Returns:
        tuple: metrics, results, optimal tilt, system losses.

    Raises:
        PreconditionError: If the series or parameters are invalid.
    """
    metrics = aggregate(series)
    results = estimate(metrics, params)
    losses = system_losses(metrics.temperature, mean_humidity(series))
    return metrics, results, optimal_tilt(latitude), losses


async def analyze_location(
    client: PowerClient,
    latitude: float,
    longitude: float,
    params: MissionParameters,
    start: date | None = None,
    end: date | None = None,
) -> tuple[AnalysisOutcome, RawSeries]:
    """Fetch a daily series for a point and evaluate a mission against it.

    Returns:
        tuple: The outcome and the series it was computed from.

    Raises:
        InvalidPeriodError: If start is after end.
        UpstreamError: If NASA POWER data could not be obtained.
        PreconditionError: If the fetched series is empty.
    """
    power = await client.fetch_daily(latitude, longitude, start, end)
    series = power.series()
    metrics, results, tilt, losses = evaluate(series, params, latitude)

    logger.info(
        "Analyzed (%.4f, %.4f) %s..%s source=%s days=%d viable=%s",
        latitude,
        longitude,
        power.start,
        power.end,
        power.source,
        len(series.irradiance),
        results.mission_viability,
    )

    outcome = AnalysisOutcome(
        latitude=latitude,
        longitude=longitude,
        start_date=power.start,
        end_date=power.end,
        data_source=power.source,
        days=len(series.irradiance),
        metrics=metrics,
        results=results,
        optimal_tilt=tilt,
        system_losses=losses,
    )
    return outcome, series


def daily_rows(series: RawSeries, params: MissionParameters) -> list[DailyRow]:
    """Per-day observations with temperature efficiency and energy output.

    Only dates carrying both irradiance and temperature are included.
    Energy uses the same derates as the mission estimate.
    """
    rows: list[DailyRow] = []
    optional = {
        "cloud_cover": series.cloud_cover or {},
        "humidity": series.humidity or {},
        "wind_speed": series.wind_speed or {},
    }
    for day in series.dates():
        if day not in series.irradiance or day not in series.temperature:
            continue
        irradiance = series.irradiance[day]
        efficiency = temperature_efficiency(series.temperature[day])
        rows.append(
            DailyRow(
                date=day,
                irradiance=irradiance,
                temperature=series.temperature[day],
                cloud_cover=optional["cloud_cover"].get(day),
                humidity=optional["humidity"].get(day),
                wind_speed=optional["wind_speed"].get(day),
                efficiency=efficiency,
                energy_output=(
                    irradiance
                    * params.panel_area
                    * params.system_efficiency
                    * (efficiency / 100)
                ),
            )
        )
    return rows


def chart_points(series: RawSeries, window: str) -> list[ChartPoint]:
    """Trailing chart points for a window key from CHART_RANGES.

    Raises:
        KeyError: If window is not a CHART_RANGES key.
    """
    days = CHART_RANGES[window]
    points = [
        ChartPoint(
            time=day,
            irradiance=series.irradiance[day],
            temperature=series.temperature[day],
            efficiency=temperature_efficiency(series.temperature[day]),
        )
        for day in series.dates()
        if day in series.irradiance and day in series.temperature
    ]
    return points[-days:]
