"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "MeetingDesk"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Reminders
    reminder_poll_minutes: int = Field(
        default=5,
        ge=1,
        le=60,
        description="Minutes between reminder poll cycles",
    )
    default_target_role: str = Field(
        default="Members",
        description="Role invited when a meeting names no usable target role",
    )

    # Export
    ics_product_id: str = Field(default="-//MeetingDesk//NONSGML v1.0//EN")
    template_dir: Path = Field(default=PACKAGE_DIR / "templates")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
