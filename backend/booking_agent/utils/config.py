from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import Dict, Optional, Tuple


DEFAULT_BUSINESS_HOURS: Dict[str, Tuple[int, int]] = {
    "monday": (12, 16),
    "tuesday": (10, 14),
    "wednesday": (12, 18),
    "thursday": (10, 14),
    "friday": (13, 17),
}


class Settings(BaseSettings):
    # Slot resolution
    meeting_duration_minutes: int = Field(
        default=60,
        gt=0,
        validation_alias=AliasChoices("meeting_duration_minutes", "duration_meet"),
    )
    minimum_notice_minutes: int = Field(default=120, ge=0)
    search_horizon_days: int = Field(default=14, gt=0)
    business_hours: Dict[str, Tuple[int, int]] = Field(default_factory=lambda: dict(DEFAULT_BUSINESS_HOURS))
    fallback_earliest_hour: int = 9
    fallback_latest_hour: int = 16
    business_timezone: str = "Asia/Kolkata"

    # External collaborators
    calendar_url: Optional[str] = None
    calendar_timeout_seconds: float = 10.0
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    extractor_timeout_seconds: float = 20.0

    # Service
    port: int = 8000
    host: str = "0.0.0.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "text"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

settings = Settings()
