from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from ``HOURLY_LEAVE_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="HOURLY_LEAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Hourly Leave"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: str = "%(asctime)s %(name)s %(levelname)s %(message)s"
    log_requests: bool = True

    cors_origins: list[str] = ["http://localhost:5173"]

    # Export naming: <prefix>_<identifier or placeholder>_<YYYY-MM-DD>.xlsx
    export_filename_prefix: str = "時薪特休試算"
    export_identifier_placeholder: str = "未填學號"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
