# ─────────────────────────────────────────────────────────────────
# config.py - Application Settings
#
# Every tunable value of the collector lives here and is read from
# environment variables (prefix COLLECTOR_) or an optional .env file.
#   COLLECTOR_PORT=8080 python main.py
# ─────────────────────────────────────────────────────────────────

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Collector settings."""

    model_config = SettingsConfigDict(
        env_prefix="COLLECTOR_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = "telemetry-collector"
    version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # How many readings the log keeps before evicting the oldest
    reading_capacity: int = 100

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
