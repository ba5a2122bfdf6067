"""Runtime configuration for the age_calculator package.

Settings are loaded in priority order:
  1. Environment variables (highest priority)
  2. .env file in the project root
  3. Field defaults

``MODEL_ARN`` is only needed by the agent surface; the calculator, the
cache and the CLI run without it.

Usage::

    from age_calculator.config import settings

    print(settings.storage_path)
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_storage_path() -> Path:
    return Path.home() / ".age_calculator" / "storage.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="forbid",
    )

    model_arn: str | None = Field(
        default=None,
        alias="MODEL_ARN",
        description="AWS Bedrock application inference profile ARN.",
    )
    storage_path: Path = Field(
        default_factory=_default_storage_path,
        alias="STORAGE_PATH",
        description="JSON file backing the local key/value store.",
    )
    storage_key: str = Field(
        default="formData",
        alias="STORAGE_KEY",
        min_length=1,
        description="Key under which the last calculation is persisted.",
    )
    log_format: str = Field(
        default="text",
        alias="LOG_FORMAT",
        description="'json' for structured log lines, anything else for plaintext.",
    )


settings = Settings()
