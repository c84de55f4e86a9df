"""Pydantic configuration models for ifroute.

Uses pydantic-settings for environment variable loading
with validation and type coercion.
"""

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ifroute.errors import ConfigValidationError
from ifroute.search.enumerator import SearchMode


class IfRouteSettings(BaseSettings):
    """Main application settings.

    Settings can be provided via:
    - Environment variables (prefixed with IFROUTE_)
    - .env file in project root
    - Direct instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="IFROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Topology settings
    topology_file: Path = Field(
        default=Path("examples/lab.yaml"),
        description="Path to topology YAML file",
    )

    # Search settings
    search_mode: SearchMode = Field(
        default=SearchMode.LITERAL,
        description="Path enumeration mode (literal or exhaustive)",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper


def get_settings() -> IfRouteSettings:
    """Load application settings from the environment.

    Raises:
        ConfigValidationError: If a setting has an invalid value
    """
    try:
        return IfRouteSettings()
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid configuration: {e.error_count()} errors",
            {"errors": e.errors()},
        ) from e
