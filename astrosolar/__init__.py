"""
AstroSolar: satellite solar resource analysis for off-world power systems.

Fetches NASA POWER daily irradiance and weather data for a point, reduces it
to solar metrics, estimates mission energy production and storage needs,
and serves the results over a FastAPI JSON API.

CHANGELOG:
- 2026-10-18: Initial creation
"""

__version__ = "0.1.0"
