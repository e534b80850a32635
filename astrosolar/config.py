"""
Service configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Every setting has a default so the service starts with in-memory storage
and no upstream cache; DATABASE_URL and REDIS_URL switch on the durable
store and the NASA POWER response cache.

CHANGELOG:
- 2026-10-18: Add DEFAULT_LOOKBACK_DAYS and MOCK_FALLBACK
- 2026-10-18: Initial creation
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """AstroSolar API configuration.

    Attributes:
        nasa_power_base_url: NASA POWER daily point endpoint.
        nasa_power_parameters: Comma-separated POWER parameter names.
        nasa_power_community: POWER user community (RE = renewable energy).
        geocode_base_url: Nominatim-compatible search endpoint.
        geocode_limit: Maximum number of geocoding candidates returned.
        user_agent: User-Agent header sent to upstream services.
        http_timeout_s: Timeout for upstream HTTP requests.
        mock_fallback: Serve synthetic data when NASA POWER answers non-2xx.
        default_lookback_days: Length of the date range used when the caller
            gives none.
        database_url: SQLAlchemy async URL; empty selects in-memory storage.
        redis_url: Redis URL for upstream caching; empty disables caching.
        cache_ttl_s: Freshness of cached NASA POWER payloads in seconds.
        cors_origins: Origins allowed to call the API from a browser.
        log_level: Root log level.
    """

    nasa_power_base_url: str = "https://power.larc.nasa.gov/api/temporal/daily/point"
    nasa_power_parameters: str = "ALLSKY_SFC_SW_DWN,T2M,RH2M,WS10M,CLOUD_AMT"
    nasa_power_community: str = "RE"
    geocode_base_url: str = "https://nominatim.openstreetmap.org/search"
    geocode_limit: int = 5
    user_agent: str = "NASA Solar Analysis Platform"
    http_timeout_s: float = 30.0
    mock_fallback: bool = True
    default_lookback_days: int = 365
    database_url: str = ""
    redis_url: str = ""
    cache_ttl_s: int = 3600
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    @field_validator("nasa_power_base_url", "geocode_base_url")
    @classmethod
    def upstream_url_must_be_http(cls, v: str) -> str:
        """Validate that upstream URLs are absolute http(s) URLs."""
        if not v.lower().startswith(("https://", "http://")):
            raise ValueError(f"Upstream URL must start with http(s):// (got: '{v}')")
        return v.rstrip("/")

    @field_validator("geocode_limit")
    @classmethod
    def geocode_limit_must_be_valid(cls, v: int) -> int:
        """Validate geocoding limit is between 1 and 50 (Nominatim maximum)."""
        if v < 1 or v > 50:
            raise ValueError("GEOCODE_LIMIT must be >= 1 and <= 50")
        return v

    @field_validator("http_timeout_s")
    @classmethod
    def http_timeout_must_be_positive(cls, v: float) -> float:
        """Validate upstream timeout is positive."""
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT_S must be > 0")
        return v

    @field_validator("default_lookback_days")
    @classmethod
    def lookback_must_be_positive(cls, v: int) -> int:
        """Validate the default date range covers at least one day."""
        if v < 1:
            raise ValueError("DEFAULT_LOOKBACK_DAYS must be >= 1")
        return v

    @field_validator("cache_ttl_s")
    @classmethod
    def cache_ttl_must_be_non_negative(cls, v: int) -> int:
        """Validate cache TTL is non-negative (0 disables expiry-based reuse)."""
        if v < 0:
            raise ValueError("CACHE_TTL_S must be >= 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard level name (got: '{v}')")
        return level

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings instance."""
    return Settings()
