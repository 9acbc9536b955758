from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="Optional path for a rotating log file",
    )
    location_index_path: Path | None = Field(
        default=None,
        validation_alias="LOCATION_INDEX_PATH",
        description="Override for the bundled mushaf dataset (YAML)",
    )
    streak_window_days: int = Field(
        default=1,
        validation_alias="STREAK_WINDOW_DAYS",
        description="How many days back a completed assignment still counts as the current streak",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("location_index_path")
    @classmethod
    def validate_location_index_path(cls, value: Path | None) -> Path | None:
        """Warn early when the dataset override points nowhere."""
        if value is not None and not value.exists():
            logger.warning(f"LOCATION_INDEX_PATH does not exist: {value}. Loading it will fail.")
        return value

    @field_validator("streak_window_days")
    @classmethod
    def validate_streak_window_days(cls, value: int) -> int:
        if value < 0:
            logger.warning(f"STREAK_WINDOW_DAYS must not be negative, got {value}. Defaulting to 1.")
            return 1
        return value


settings = Settings()
