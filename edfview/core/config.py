"""Viewer configuration settings."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Viewer settings loaded from environment variables."""

    # API settings
    host: str = "localhost"
    port: int = 8002

    # Data directory settings
    data_dir: str = str(Path("data").absolute())

    # Logging settings
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Navigation settings
    default_visible_duration_seconds: float = 10.0
    min_visible_duration_seconds: float = 0.25
    max_visible_duration_seconds: float = 60.0
    min_bucket_count: int = 10
    default_pixel_width: int = 1400

    # Synthetic source settings
    mock_duration_seconds: float = 120.0
    mock_sample_rate_hz: float = 256.0
    mock_channel_labels: Union[List[str], str] = ["Fp1-F7", "F7-T3", "T3-T5"]

    class Config:
        env_prefix = "EDFVIEW_"
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("mock_channel_labels", mode="before")
    @classmethod
    def split_channel_labels(cls, value: Union[List[str], str]) -> List[str]:
        """Accept a comma-separated string of labels.

        Args:
            value: List of labels or comma-separated string

        Returns:
            List of labels
        """
        if isinstance(value, str):
            return [label.strip() for label in value.split(",") if label.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        level = value.upper()
        if level not in valid_levels:
            logger.warning(f"Invalid log_level '{value}', defaulting to 'INFO'")
            return "INFO"
        return level

    @model_validator(mode="after")
    def check_visible_duration_bounds(self) -> "Settings":
        if self.min_visible_duration_seconds <= 0:
            raise ValueError("min_visible_duration_seconds must be positive")
        if self.min_visible_duration_seconds > self.max_visible_duration_seconds:
            raise ValueError(
                "min_visible_duration_seconds must not exceed max_visible_duration_seconds"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()
