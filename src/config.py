"""Monitor configuration: loaded once from environment / .env file."""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from src.monitor.client import StatusRequestError, validate_endpoint

DEFAULT_ENDPOINT = "https://gateway.zeabur.com/graphql"


class ConfigurationError(Exception):
    """Raised when required settings are missing or invalid."""


class MonitorSettings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Health endpoint
    api_host: str = "0.0.0.0"
    port: int = 8080

    # Remote status API
    monitor_zeabur_endpoint: str = DEFAULT_ENDPOINT
    monitor_service_id: str = Field(min_length=1)
    monitor_environment_id: str = Field(min_length=1)
    monitor_zeabur_token: str = Field(min_length=1)
    monitor_request_timeout: float = Field(default=10.0, gt=0)  # seconds per poll

    # Logging
    log_level: str = "INFO"

    @field_validator("monitor_zeabur_endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        try:
            validate_endpoint(value)
        except StatusRequestError as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(**overrides: object) -> MonitorSettings:
    """Read settings once; raise ConfigurationError naming bad variables."""
    try:
        return MonitorSettings(**overrides)
    except ValidationError as e:
        names = sorted({str(err["loc"][0]).upper() for err in e.errors() if err["loc"]})
        raise ConfigurationError(
            f"missing or invalid environment variables: {', '.join(names)}"
        ) from e
