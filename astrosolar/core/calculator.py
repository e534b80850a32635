"""
Solar metrics aggregation and mission energy estimation.

Pure functions only: no I/O, no shared state, no caching. Identical inputs
always produce identical outputs.

Operations:
- aggregate(series): Reduce a RawSeries to SolarMetrics.
- estimate(metrics, params): Derive CalculationResults for a mission.
- optimal_tilt(latitude): Fixed-installation panel tilt in degrees.
- system_losses(temperature, humidity): Fractional balance-of-system losses.
- temperature_efficiency(temperature): Cell output relative to nominal, in %.

CHANGELOG:
- 2026-10-18: Raise PreconditionError when readings overflow the mean or std-dev
- 2026-10-18: Raise PreconditionError on empty series instead of returning NaN
- 2026-10-18: Initial creation
"""

import math
from collections.abc import Iterable

from astrosolar.core.models import (
    CalculationResults,
    MissionParameters,
    RawSeries,
    SolarMetrics,
)

# Silicon cells lose 0.4 % of rated output per °C above the reference.
TEMP_COEFFICIENT = 0.004
REFERENCE_TEMP_C = 25.0
MIN_EFFICIENCY = 0.10

# Worst-case dark period bridged by storage (extended local night).
DARK_PERIOD_HOURS = 350
MIN_MISSION_ENERGY_KWH = 1000.0

EXCELLENT_IRRADIANCE = 6.5
GOOD_IRRADIANCE = 4.5
HOT_TEMP_C = 35.0
EXTREME_COLD_TEMP_C = -20.0
LARGE_BATTERY_KWH = 2000.0
HIGH_EFFICIENCY_PANEL = 0.20

BASE_SYSTEM_LOSSES = 0.14
MAX_SYSTEM_LOSSES = 0.30
COLD_LOSS_TEMP_C = -10.0
HUMID_LOSS_PCT = 80.0

RECOMMENDATION_EXCELLENT = "Excellent solar resource - ideal for space missions"
RECOMMENDATION_GOOD = "Good solar resource - suitable for most applications"
RECOMMENDATION_LOW = "Consider high-efficiency panels or backup power systems"
RECOMMENDATION_HOT = "High temperatures detected - implement cooling systems"
RECOMMENDATION_COLD = "Extreme cold conditions - use cold-weather rated equipment"
RECOMMENDATION_BATTERY = "Large battery system required - consider modular design"
RECOMMENDATION_PANEL_AREA = (
    "Energy output below mission requirements - increase panel area"
)
RECOMMENDATION_UPGRADE = "Consider upgrading to higher efficiency panels (>20%)"


class PreconditionError(ValueError):
    """Input handed to the calculator violates its contract."""


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def _finite_values(name: str, readings: Iterable[float]) -> list[float]:
    values = list(readings)
    if not values:
        raise PreconditionError(f"{name} series is empty")
    if not all(math.isfinite(v) for v in values):
        raise PreconditionError(f"{name} series contains non-finite readings")
    return values


def temperature_efficiency(temperature: float) -> float:
    """Return cell output relative to nominal for a mean temperature, in percent.

    Output drops by TEMP_COEFFICIENT per °C above REFERENCE_TEMP_C. Colder
    temperatures give no bonus, so the result never exceeds 100. The result
    never falls below MIN_EFFICIENCY (10 %).
    """
    temp_loss = max(0.0, (temperature - REFERENCE_TEMP_C) * TEMP_COEFFICIENT)
    return max(MIN_EFFICIENCY, 1 - temp_loss) * 100


def aggregate(series: RawSeries) -> SolarMetrics:
    """Reduce a daily series to summary metrics.

    Irradiance and temperature are averaged independently, so their key sets
    need not match.

    Args:
        series: Daily irradiance and temperature readings for one location.

    Returns:
        SolarMetrics: Mean irradiance, temperature-derated efficiency, mean
        temperature, peak and average output, and irradiance standard
        deviation.

    Raises:
        PreconditionError: If either series is empty or holds non-finite values,
            or if its readings are too large to average.
    """
    irradiance = _finite_values("irradiance", series.irradiance.values())
    temperatures = _finite_values("temperature", series.temperature.values())

    try:
        daily_irradiance = _mean(irradiance)
        temperature = _mean(temperatures)
        std_dev = math.sqrt(_mean([(v - daily_irradiance) ** 2 for v in irradiance]))
    except OverflowError as exc:
        raise PreconditionError("series readings are too large to aggregate") from exc
    if not all(math.isfinite(v) for v in (daily_irradiance, temperature, std_dev)):
        raise PreconditionError("series readings are too large to aggregate")

    return SolarMetrics(
        daily_irradiance=daily_irradiance,
        efficiency=temperature_efficiency(temperature),
        temperature=temperature,
        peak_output=max(irradiance),
        average_output=daily_irradiance,
        variance=std_dev,
    )


def _check_parameters(params: MissionParameters) -> None:
    # MissionParameters validates on construction; model_construct skips that.
    if not params.panel_area > 0:
        raise PreconditionError("panel_area must be positive")
    if not params.mission_duration > 0:
        raise PreconditionError("mission_duration must be positive")
    if not 0 < params.system_efficiency <= 1:
        raise PreconditionError("system_efficiency must be in (0, 1]")


def estimate(metrics: SolarMetrics, params: MissionParameters) -> CalculationResults:
    """Estimate mission energy production, storage sizing and viability.

    Args:
        metrics: Aggregated metrics for the mission location.
        params: Collector area, system efficiency and mission duration.

    Returns:
        CalculationResults: Energy totals, peak power, required storage,
        viability verdict and advisories.

    Raises:
        PreconditionError: If params are outside their valid ranges.
    """
    _check_parameters(params)

    daily_energy = (
        metrics.daily_irradiance
        * params.panel_area
        * params.system_efficiency
        * (metrics.efficiency / 100)
    )
    total_energy = daily_energy * params.mission_duration

    # Constant hourly draw sustained through the dark period.
    battery_required = (daily_energy / 24) * DARK_PERIOD_HOURS

    return CalculationResults(
        total_energy_output=total_energy,
        daily_average=daily_energy,
        # Peak output is not temperature derated.
        peak_output=metrics.peak_output * params.panel_area * params.system_efficiency,
        efficiency=metrics.efficiency,
        battery_required=battery_required,
        mission_viability=total_energy >= MIN_MISSION_ENERGY_KWH,
        recommendations=recommendations(
            metrics, params, total_energy, battery_required
        ),
    )


def recommendations(
    metrics: SolarMetrics,
    params: MissionParameters,
    total_energy: float,
    battery_required: float,
) -> list[str]:
    """Build advisories in fixed evaluation order.

    Every rule is checked independently; the resource tier always fires.
    """
    advice: list[str] = []

    if metrics.daily_irradiance > EXCELLENT_IRRADIANCE:
        advice.append(RECOMMENDATION_EXCELLENT)
    elif metrics.daily_irradiance > GOOD_IRRADIANCE:
        advice.append(RECOMMENDATION_GOOD)
    else:
        advice.append(RECOMMENDATION_LOW)

    if metrics.temperature > HOT_TEMP_C:
        advice.append(RECOMMENDATION_HOT)
    elif metrics.temperature < EXTREME_COLD_TEMP_C:
        advice.append(RECOMMENDATION_COLD)

    if battery_required > LARGE_BATTERY_KWH:
        advice.append(RECOMMENDATION_BATTERY)

    if total_energy < MIN_MISSION_ENERGY_KWH:
        advice.append(RECOMMENDATION_PANEL_AREA)

    if params.system_efficiency < HIGH_EFFICIENCY_PANEL:
        advice.append(RECOMMENDATION_UPGRADE)

    return advice


def optimal_tilt(latitude: float) -> float:
    """Return the fixed-installation tilt angle (degrees) for a latitude."""
    if not -90 <= latitude <= 90:
        raise PreconditionError("latitude must be within [-90, 90]")
    return abs(latitude)


def system_losses(temperature: float, humidity: float | None = None) -> float:
    """Return fractional system losses for site conditions, capped at 30 %."""
    losses = BASE_SYSTEM_LOSSES

    if temperature > HOT_TEMP_C:
        losses += 0.02
    elif temperature < COLD_LOSS_TEMP_C:
        losses += 0.01

    if humidity is not None and humidity > HUMID_LOSS_PCT:
        losses += 0.01

    return min(losses, MAX_SYSTEM_LOSSES)
