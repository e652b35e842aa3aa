"""Application configuration."""

import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str
    gemini_model: str = "gemini-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    groq_api_key: str
    groq_model: str = "llama-3.2-90b-vision-preview"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    imgbb_api_key: str
    imgbb_upload_url: str = "https://api.imgbb.com/1/upload"
    data_dir: Path = Path(".calorie_tracker")
    daily_goal_default: int = 2000
    default_detected_meal: str = "lunch"
    timezone: str = "UTC"
    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def today_in(timezone_name: str) -> date:
    """Return the current calendar day in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
