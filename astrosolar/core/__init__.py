"""
Solar mission calculator core.

Exports the value objects and pure calculation functions used by the API
and service layers.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from astrosolar.core.calculator import (
    PreconditionError,
    aggregate,
    estimate,
    optimal_tilt,
    system_losses,
    temperature_efficiency,
)
from astrosolar.core.models import (
    CalculationResults,
    MissionParameters,
    RawSeries,
    SolarMetrics,
)

__all__ = [
    "CalculationResults",
    "MissionParameters",
    "PreconditionError",
    "RawSeries",
    "SolarMetrics",
    "aggregate",
    "estimate",
    "optimal_tilt",
    "system_losses",
    "temperature_efficiency",
]
