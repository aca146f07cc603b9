"""Configuration management."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("plain", "json")


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_SCATTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    # Randomness
    default_seed: str = Field(
        default="py-scatter", description="Seed of the default generator used when no rng is passed"
    )

    # Placement Configuration
    placement_max_retries: int = Field(
        default=100, gt=0, description="Brute-force placement attempts before giving up"
    )
    best_candidate_count: int = Field(
        default=10, ge=0, description="Candidates drawn per best-candidate placement"
    )

    # Galaxy Configuration
    galaxy_default_count: int = Field(
        default=100_000, ge=0, description="Default number of points in a generated galaxy"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return fmt


def get_settings() -> Settings:
    """Build a fresh settings object from the current environment."""
    return Settings()


# Instantiate singleton settings object
settings = get_settings()
