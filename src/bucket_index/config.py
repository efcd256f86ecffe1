"""Service configuration using pydantic-settings."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when required environment variables are missing or invalid."""


class Settings(BaseSettings):
    """Bucket index service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore", env_ignore_empty=True
    )

    # Storage credentials and location
    AWS_ACCESS_KEY_ID: str = Field(min_length=1)
    AWS_SECRET_ACCESS_KEY: str = Field(min_length=1)
    AWS_DEFAULT_REGION: str = Field(min_length=1)
    ENDPOINT_URL: str = Field(min_length=1)
    BUCKET: str = Field(min_length=1)

    # Prefix prepended to every object key to build its public URL
    PUBLIC_DOMAIN: str = Field(min_length=1)

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level


def load_settings() -> Settings:
    """Load settings from the environment.

    Returns:
        Validated Settings instance

    Raises:
        ConfigError: Naming every missing (or empty) variable, or the first
            invalid one when nothing is missing
    """
    try:
        return Settings()
    except ValidationError as e:
        missing = []
        invalid = []
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "?"
            if error["type"] in ("missing", "string_too_short"):
                missing.append(name)
            else:
                invalid.append(f"{name} ({error['msg']})")
        if missing:
            raise ConfigError(
                f"missing environment variable(s): {', '.join(missing)}"
            ) from e
        raise ConfigError(f"invalid environment variable(s): {', '.join(invalid)}") from e
