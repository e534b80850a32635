"""
Synthetic NASA POWER payloads for development and upstream outages.

Values are derived from a SHA-256 jitter of (coordinates, date, parameter),
so the same point and date range always yield the same mock series.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from datetime import date, timedelta
from hashlib import sha256
from typing import Any

# Base value per POWER parameter; daily values vary by up to ±1 around it.
MOCK_BASE_VALUES: dict[str, float] = {
    "ALLSKY_SFC_SW_DWN": 5.5,
    "T2M": 25.0,
    "RH2M": 60.0,
    "WS10M": 3.0,
    "CLOUD_AMT": 30.0,
}


def predictable_jitter(seed: str, jitter_range: float = 1.0, round_to: int = 2) -> float:
    """Map *seed* to a stable value in [-jitter_range, jitter_range]."""
    normalized_jitter = int(sha256(seed.encode()).hexdigest(), 16) % (100 * 2 + 1) - 100

    return round(normalized_jitter * jitter_range / 100, round_to)


def mock_series(
    start: date,
    end: date,
    base_value: float,
    seed: str,
) -> dict[str, float]:
    """Daily values from *start* to *end* inclusive, keyed ``YYYYMMDD``.

    Values never go below zero.
    """
    data: dict[str, float] = {}
    current = start
    while current <= end:
        key = current.strftime("%Y%m%d")
        data[key] = max(0.0, base_value + predictable_jitter(f"{seed}:{key}"))
        current += timedelta(days=1)
    return data


def mock_power_payload(
    latitude: float,
    longitude: float,
    start: date,
    end: date,
) -> dict[str, Any]:
    """Build a payload shaped like a NASA POWER daily point response."""
    point = f"{latitude:.4f}:{longitude:.4f}"
    return {
        "geometry": {"coordinates": [longitude, latitude]},
        "properties": {
            "parameter": {
                name: mock_series(start, end, base, f"{point}:{name}")
                for name, base in MOCK_BASE_VALUES.items()
            }
        },
    }
