from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agenda.services.time_utils import format_hhmm, parse_hhmm

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    database_ssl: bool = True

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Default week used for weekdays a provider never saved
    default_day_start: str = "09:00"
    default_day_end: str = "17:00"
    default_interval_minutes: int = 30
    default_open_days: str = "1,2,3,4,5"  # 0 = Sunday

    # What to do with a last slot that would run past the end of the day
    partial_slot_policy: Literal["drop", "clip", "keep"] = "drop"

    # Env
    env: str = "development"

    @field_validator("default_day_start", "default_day_end")
    @classmethod
    def _normalize_hhmm(cls, v: str) -> str:
        return format_hhmm(parse_hhmm(v))

    @field_validator("default_interval_minutes")
    @classmethod
    def _positive_interval(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("default_interval_minutes must be positive")
        return v

    @field_validator("default_open_days")
    @classmethod
    def _weekday_list(cls, v: str) -> str:
        days = [d.strip() for d in v.split(",") if d.strip()]
        for d in days:
            if not d.isdigit() or int(d) > 6:
                raise ValueError(f"default_open_days: {d!r} is not a weekday number 0-6")
        return ",".join(days)

    @model_validator(mode="after")
    def _default_day_has_hours(self) -> "Settings":
        if parse_hhmm(self.default_day_start) >= parse_hhmm(self.default_day_end):
            raise ValueError("default_day_start must be before default_day_end")
        return self

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def default_open_days_set(self) -> set[int]:
        return {int(d) for d in self.default_open_days.split(",") if d}


settings = Settings()
