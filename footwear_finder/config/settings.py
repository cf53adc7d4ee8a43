"""Environment configuration and validation.

Settings are loaded from environment variables (optionally via a local `.env` file). Database and
Gemini credentials are required; only the HTTP port and a few tuning knobs have defaults.
"""

from __future__ import annotations

from psycopg.conninfo import make_conninfo
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash-latest"
DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_LLM_TIMEOUT_S = 30.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_host: str = Field(alias="DB_HOST")
    db_port: int = Field(alias="DB_PORT")
    db_user: str = Field(alias="DB_USER")
    db_password: str = Field(alias="DB_PASSWORD")
    db_name: str = Field(alias="DB_NAME")
    db_pool_max_size: int = Field(default=10, alias="DB_POOL_MAX_SIZE", ge=1)

    gemini_api_key: str = Field(alias="GEMINI_API_KEY")
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL, alias="GEMINI_MODEL")
    gemini_api_base: str = Field(
        default=DEFAULT_GEMINI_API_BASE,
        alias="GEMINI_API_BASE",
    )
    llm_timeout_s: float = Field(default=DEFAULT_LLM_TIMEOUT_S, alias="LLM_TIMEOUT_S", gt=0)

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT", ge=1, le=65535)

    @field_validator("gemini_api_key")
    @classmethod
    def validate_api_key_not_blank(cls, value: str) -> str:
        """Reject an empty Gemini key at startup instead of failing on the first request."""

        if not value.strip():
            raise ValueError("GEMINI_API_KEY must not be empty")
        return value.strip()

    @property
    def conninfo(self) -> str:
        """libpq connection string for the catalog database."""

        return make_conninfo(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            dbname=self.db_name,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
