"""Configuration management for the grid system builder."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gridsystem.core.types import ScalingInterval, ScalingMethod


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="GRIDSYSTEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Grid System Defaults
    base_font_size: float = Field(
        default=16.0, gt=0, description="Pixels per em when exporting ranges"
    )
    default_min_font_size: float = Field(
        default=14.0, gt=0, description="Smallest base font size a system allows"
    )
    default_max_font_size: float = Field(
        default=22.0, gt=0, description="Largest base font size a system allows"
    )
    default_scaling_method: ScalingMethod = Field(
        default=ScalingMethod.FONT_PIXELS,
        description="Scaling method for grids that don't override it",
    )
    default_scaling_amount: float = Field(
        default=1.0, gt=0, description="Scaling amount for grids that don't override it"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="text",
        description="Log format (json or text)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path"
    )

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ["json", "text"]:
            raise ValueError(f"Invalid log format: {v}")
        return v

    @field_validator("default_max_font_size")
    def validate_font_size_order(cls, v: float, info: ValidationInfo) -> float:
        """The default font size range must not be inverted."""
        minimum = info.data.get("default_min_font_size")
        if minimum is not None and v < minimum:
            raise ValueError(
                f"default_max_font_size ({v}) is smaller than default_min_font_size ({minimum})"
            )
        return v

    def default_scaling_interval(self) -> ScalingInterval:
        """Return the scaling interval applied to grids without an override."""
        return ScalingInterval(
            method=self.default_scaling_method,
            amount=self.default_scaling_amount,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    # Load .env file if it exists
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)

    return Settings()
