from datetime import datetime, time
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WORKING_HOURS = (time(9, 0), time(17, 0))


class Settings(BaseSettings):
    salon_timezone: str = Field(default="America/Denver", alias="SALON_TIMEZONE")
    allowed_origins: str = Field(default="http://localhost:5173", alias="ALLOWED_ORIGINS")
    working_hours_start: str = Field(default="09:00", alias="WORKING_HOURS_START")
    working_hours_end: str = Field(default="17:00", alias="WORKING_HOURS_END")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=(".env", "Backend/.env", "backend/.env"), extra="ignore")

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def parse_working_hours(settings: Settings | None = None) -> tuple[time, time]:
    """Parse salon working hours from settings."""
    settings = settings or get_settings()
    try:
        start_time = datetime.strptime(settings.working_hours_start, "%H:%M").time()
        end_time = datetime.strptime(settings.working_hours_end, "%H:%M").time()
        return start_time, end_time
    except ValueError:
        return DEFAULT_WORKING_HOURS
