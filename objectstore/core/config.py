"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Storage credentials live in StorageSettings (STORAGE_*
variables); required values are validated on first access, not at import.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from objectstore.infrastructure.exceptions import StorageConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "objectstore"
    app_version: str = "1.0.0"
    debug: bool = False

    # HTTP transport used for uploads (owned client only)
    http_timeout_seconds: float = 30.0

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


# Checked in this order; the first missing one is reported.
_REQUIRED_STORAGE_ENV: tuple[tuple[str, str], ...] = (
    ("bucket_name", "STORAGE_BUCKET_NAME"),
    ("access_key_id", "STORAGE_ACCESS_KEY_ID"),
    ("secret_access_key", "STORAGE_SECRET_ACCESS_KEY"),
    ("public_base_url", "STORAGE_PUBLIC_BASE_URL"),
)


class StorageSettings(BaseSettings):
    """S3-compatible bucket settings (AWS S3, Cloudflare R2, MinIO).

    For Cloudflare R2 set STORAGE_ENDPOINT to
    https://<account-id>.r2.cloudflarestorage.com, STORAGE_REGION to auto and
    STORAGE_FORCE_PATH_STYLE to true. For AWS S3 leave the endpoint unset to
    use https://s3.<region>.amazonaws.com.

    Can be constructed directly with keyword arguments (field names) to
    bypass the environment, e.g. in tests.
    """

    bucket_name: str = ""
    region: str = "auto"
    access_key_id: str = ""
    secret_access_key: SecretStr = SecretStr("")
    session_token: SecretStr | None = None
    endpoint: str | None = None
    public_base_url: str = ""
    force_path_style: bool = False

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("region", mode="before")
    @classmethod
    def default_empty_region(cls, value: object) -> object:
        return value or "auto"

    @field_validator("force_path_style", mode="before")
    @classmethod
    def parse_force_path_style(cls, value: object) -> bool:
        """Only the exact string "true" enables path-style addressing."""
        if isinstance(value, str):
            return value == "true"
        return bool(value)

    @field_validator("session_token", mode="before")
    @classmethod
    def drop_empty_session_token(cls, value: object) -> object:
        return value or None

    @model_validator(mode="after")
    def validate_required_and_endpoint(self) -> "StorageSettings":
        """Fail on missing credentials; derive the AWS endpoint when unset.

        Raises StorageConfigurationError (not ValueError) so it propagates
        unchanged instead of being folded into a pydantic ValidationError.
        """
        for field_name, env_name in _REQUIRED_STORAGE_ENV:
            value = getattr(self, field_name)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if not value:
                raise StorageConfigurationError(env_name)
        if not self.endpoint:
            self.endpoint = f"https://s3.{self.region}.amazonaws.com"
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process)."""
    return Settings()


@lru_cache
def get_storage_settings() -> StorageSettings:
    """Return cached storage settings (resolved once per process).

    Validation runs on first call, not at import time. Concurrent first
    calls may each build an instance; the content is identical since it is
    derived from the same environment.

    Returns:
        Loaded and validated StorageSettings instance.

    Raises:
        StorageConfigurationError: A required STORAGE_* variable is missing.
    """
    return StorageSettings()


def reset_storage_config_cache() -> None:
    """Drop cached storage settings; the next access re-reads the environment."""
    get_storage_settings.cache_clear()
