"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - DB_HOST, DB_NAME, DB_USERNAME, DB_PASSWORD are required even though the
      in-memory adapter ignores them: startup fails when any is unset
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - load_settings() maps pydantic's ValidationError to ConfigurationError so the
      entry point handles one error type
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from accounts.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # HTTP
    app_host: str = "0.0.0.0"
    app_port: int = Field(8080, ge=0, le=65535)
    shutdown_grace_seconds: float = Field(10.0, gt=0)

    # Database
    db_host: str
    db_port: int = Field(5432, ge=1, le=65535)
    db_name: str
    db_username: str
    db_password: str

    # Security
    password_hash_rounds: int = Field(10, ge=4, le=31)
    jwt_secret_key: str | None = None
    jwt_token_ttl_minutes: int = Field(60, gt=0)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def database_dsn(self) -> str:
        """Connection string for a durable user repository."""
        return (
            f"postgresql://{self.db_username}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def jwt_token_ttl(self) -> timedelta:
        return timedelta(minutes=self.jwt_token_ttl_minutes)


def load_settings() -> Settings:
    """Build Settings, raising ConfigurationError on missing/invalid values."""
    try:
        return Settings()
    except ValidationError as e:
        fields = [
            ".".join(str(loc) for loc in err["loc"]).upper()
            for err in e.errors()
        ]
        raise ConfigurationError(
            f"invalid configuration: {', '.join(fields)}", fields,
        ) from e


@lru_cache
def get_settings() -> Settings:
    return load_settings()
