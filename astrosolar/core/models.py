"""
Value objects for the solar mission calculator.

RawSeries is the daily time series handed to the aggregator; SolarMetrics,
MissionParameters and CalculationResults are the inputs and outputs of the
two computation steps. All models are frozen. Attributes are snake_case in
Python and camelCase on the wire (``dailyIrradiance``, ``totalEnergyOutput``)
so stored and transmitted representations keep the dashboard's field names.

CHANGELOG:
- 2026-10-18: Add RawSeries.from_power_payload with fill-value filtering
- 2026-10-18: Initial creation
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# NASA POWER marks missing readings with this sentinel.
POWER_FILL_VALUE = -999.0

# POWER parameter name -> RawSeries attribute.
POWER_PARAMETERS: dict[str, str] = {
    "ALLSKY_SFC_SW_DWN": "irradiance",
    "T2M": "temperature",
    "RH2M": "humidity",
    "WS10M": "wind_speed",
    "CLOUD_AMT": "cloud_cover",
}


class CamelModel(BaseModel):
    """Frozen base model serialised with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def _iso_date_key(key: str) -> str:
    """Normalise a POWER ``YYYYMMDD`` key to ``YYYY-MM-DD``."""
    if len(key) == 8 and key.isdigit():
        return f"{key[:4]}-{key[4:6]}-{key[6:]}"
    return key


def _clean_readings(values: dict[str, Any] | None) -> dict[str, float]:
    """Drop fill values and normalise date keys of one POWER parameter."""
    if not values:
        return {}
    cleaned: dict[str, float] = {}
    for key, value in values.items():
        if value is None:
            continue
        reading = float(value)
        if reading == POWER_FILL_VALUE or not math.isfinite(reading):
            continue
        cleaned[_iso_date_key(str(key))] = reading
    return cleaned


class RawSeries(CamelModel):
    """Daily readings for one location, keyed by ISO date string.

    Attributes:
        irradiance: All-sky surface irradiance in kWh/m²/day.
        temperature: Air temperature at 2 m in °C.
        humidity: Relative humidity in percent (optional).
        wind_speed: Wind speed at 10 m in m/s (optional).
        cloud_cover: Cloud amount in percent (optional).
    """

    irradiance: dict[str, float] = Field(alias="dailyIrradiance")
    temperature: dict[str, float]
    humidity: dict[str, float] | None = None
    wind_speed: dict[str, float] | None = None
    cloud_cover: dict[str, float] | None = None

    @field_validator("irradiance")
    @classmethod
    def irradiance_must_be_non_negative(cls, v: dict[str, float]) -> dict[str, float]:
        """Reject negative or non-finite irradiance readings."""
        for key, value in v.items():
            if not math.isfinite(value) or value < 0:
                raise ValueError(
                    f"irradiance reading for {key} must be a non-negative number"
                )
        return v

    @classmethod
    def from_power_payload(cls, payload: dict[str, Any]) -> RawSeries:
        """Build a RawSeries from a NASA POWER daily point response.

        Missing optional parameters become None. Fill values are dropped so
        they never reach the aggregator.

        Raises:
            ValueError: If the payload has no ``properties.parameter`` block
                or lacks irradiance/temperature.
        """
        try:
            parameters = payload["properties"]["parameter"]
        except (KeyError, TypeError) as exc:
            raise ValueError("NASA POWER payload has no parameter block") from exc

        fields: dict[str, dict[str, float] | None] = {}
        for power_name, attr in POWER_PARAMETERS.items():
            raw = parameters.get(power_name)
            if raw is None and attr in ("irradiance", "temperature"):
                raise ValueError(f"NASA POWER payload is missing {power_name}")
            fields[attr] = _clean_readings(raw) if raw is not None else None
        return cls(**fields)

    def dates(self) -> list[str]:
        """Sorted union of dates carrying irradiance or temperature."""
        return sorted(set(self.irradiance) | set(self.temperature))


class SolarMetrics(CamelModel):
    """Summary statistics of a RawSeries.

    ``variance`` holds the population standard deviation of irradiance; the
    name is kept for compatibility with stored projects.
    """

    daily_irradiance: float
    efficiency: float
    temperature: float
    peak_output: float
    average_output: float
    variance: float


class MissionParameters(CamelModel):
    """User-supplied power system configuration for one analysis."""

    panel_area: float = Field(gt=0, description="Collector area in m².")
    system_efficiency: float = Field(
        gt=0, le=1, description="Fixed system derate as a fraction."
    )
    mission_duration: float = Field(gt=0, description="Mission length in days.")
    battery_capacity: float | None = Field(
        default=None, ge=0, description="Installed storage in kWh (informational)."
    )


class CalculationResults(CamelModel):
    """Mission energy estimate derived from SolarMetrics and MissionParameters."""

    total_energy_output: float
    daily_average: float
    peak_output: float
    efficiency: float
    battery_required: float
    mission_viability: bool
    recommendations: list[str]
