import os
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings using Pydantic Settings.
    Reads from environment variables (and an optional .env file) with validation.
    """

    # ─────────────────────────────────────────────────────────────────────────────
    # Version
    # ─────────────────────────────────────────────────────────────────────────────
    VERSION: str = "1.3.0"
    # Also update pyproject.toml (version)

    # ─────────────────────────────────────────────────────────────────────────────
    # Cache Backend (Redis)
    # ─────────────────────────────────────────────────────────────────────────────
    REDIS_CONF: str = Field(default="", description="Redis address host:port, empty disables the cache")
    REDIS_PASSWORD: Optional[str] = ""
    REDIS_DB: int = Field(default=0, ge=0)
    REDIS_SOCKET_TIMEOUT: float = Field(default=2.0, gt=0)
    CACHE_TTL_MINUTES: int = Field(default=129600, ge=1)  # 90 days

    # ─────────────────────────────────────────────────────────────────────────────
    # Geolocation API
    # ─────────────────────────────────────────────────────────────────────────────
    GEO_API_URL: str = "https://json.geoiplookup.io/{ip}"
    GEO_API_TIMEOUT: float = Field(default=10.0, gt=0)

    # ─────────────────────────────────────────────────────────────────────────────
    # Address Classification
    # ─────────────────────────────────────────────────────────────────────────────
    LOCAL_PREFIX: str = Field(default="192.168.106.", description="Prefix of the deployment's own network")
    COMPLETION_OCTET: str = Field(default="112", pattern=r"^\d{1,3}$")

    # ─────────────────────────────────────────────────────────────────────────────
    # Console
    # ─────────────────────────────────────────────────────────────────────────────
    UI_THEME: str = "classic"

    # ─────────────────────────────────────────────────────────────────────────────
    # Metrics
    # ─────────────────────────────────────────────────────────────────────────────
    ENABLE_METRICS: bool = False
    METRICS_ADDR: str = "127.0.0.1"
    METRICS_PORT: int = Field(default=8000, ge=1, le=65535)

    # ─────────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────────
    LOG_DIR: str = Field(default=os.path.expanduser("~/.geolocate"))
    LOG_FILE: str = Field(default_factory=lambda: os.path.join(os.path.expanduser("~/.geolocate"), "geolocate.log"))
    LOG_LEVEL: str = "INFO"
    LOG_TRUNCATE_ON_START: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )
