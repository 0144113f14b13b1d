"""Package configuration using Pydantic Settings.

Settings only cover ambient concerns such as logging; registry behavior is
configured per call through ``RegisterPolicy``. Values can be provided via
environment variables or a ``.env`` file and fall back to the defaults below.

Environment variable prefix: ``INSTANCE_REGISTRY_`` (e.g. ``INSTANCE_REGISTRY_LOG_LEVEL``).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


class Settings(BaseSettings):
    """Runtime settings.

    Attributes map directly to environment variables using the
    ``INSTANCE_REGISTRY_`` prefix (case-insensitive).
    """

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level used by the CLI and setup_logging()",
    )
    log_colorize: bool = Field(
        default=True,
        description="Colorize log output",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()
        if v_upper not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(LOG_LEVELS))}")

        return v_upper

    model_config = SettingsConfigDict(
        env_prefix="INSTANCE_REGISTRY_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object.
    """

    return Settings()


__all__ = ["LOG_LEVELS", "Settings", "get_settings"]
