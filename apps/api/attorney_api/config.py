from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGIN: str = "*"

    # Overpass (OpenStreetMap) point-of-interest lookup
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    OVERPASS_TIMEOUT_SECONDS: float = 15.0

    # Pipeline switches
    ENABLE_ATTORNEY_ENRICHMENT: bool = True
    ENABLE_ATTORNEY_CACHING: bool = True
    FALLBACK_TO_MOCK: bool = True

    # Result cache (seconds)
    ATTORNEY_CACHE_TTL: float = 24 * 60 * 60
    ATTORNEY_CACHE_MAX_SIZE: int = 1000
    ATTORNEY_CACHE_CLEANUP_INTERVAL: float = 60 * 60
    CACHE_COORD_PRECISION: int = 3

    DUPLICATE_NAME_THRESHOLD: float = 0.8
    MAX_RESULTS: int = 100
    DEFAULT_SEARCH_RADIUS_KM: float = 50.0

    # Google Custom Search: optional second source, skipped when unset
    GOOGLE_SEARCH_API_KEY: str = ""
    GOOGLE_CSE_ID: str = ""
    GOOGLE_TIMEOUT_SECONDS: float = 10.0

    # Fixes synthetic ratings / mock jitter for reproducible demos
    MOCK_RANDOM_SEED: Optional[int] = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
