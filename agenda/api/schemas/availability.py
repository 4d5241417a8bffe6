from datetime import date, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from agenda.services.time_utils import format_hhmm, parse_hhmm


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys (dayOfWeek, startTime...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _check_hhmm(v: str) -> str:
    # Stored zero-padded so string order matches time order.
    return format_hhmm(parse_hhmm(v))


HHMM = Annotated[str, AfterValidator(_check_hhmm)]


class WeeklyRule(CamelModel):
    id: int | None = None
    day_of_week: int = Field(ge=0, le=6)
    start_time: HHMM
    end_time: HHMM
    is_available: bool = True
    interval_minutes: int = Field(default=30, gt=0)

    @model_validator(mode="after")
    def _open_day_has_hours(self) -> "WeeklyRule":
        if self.is_available and parse_hhmm(self.start_time) >= parse_hhmm(self.end_time):
            raise ValueError(f"startTime must be before endTime on day {self.day_of_week}")
        return self


class WeeklyScheduleRequest(CamelModel):
    provider_id: int = Field(gt=0)
    rules: list[WeeklyRule]

    @field_validator("rules")
    @classmethod
    def _one_rule_per_day(cls, rules: list[WeeklyRule]) -> list[WeeklyRule]:
        seen: set[int] = set()
        for r in rules:
            if r.day_of_week in seen:
                raise ValueError(f"duplicate rule for dayOfWeek {r.day_of_week}")
            seen.add(r.day_of_week)
        return rules


class WeeklyScheduleResponse(CamelModel):
    provider_id: int
    rules: list[WeeklyRule]


class BlockedTimeCreate(CamelModel):
    provider_id: int = Field(gt=0)
    date: date
    start_time: HHMM
    end_time: HHMM
    reason: str | None = None

    @model_validator(mode="after")
    def _start_before_end(self) -> "BlockedTimeCreate":
        if parse_hhmm(self.start_time) >= parse_hhmm(self.end_time):
            raise ValueError("startTime must be before endTime")
        return self


class BlockedTimePublic(CamelModel):
    id: int
    provider_id: int
    date: date
    start_time: str
    end_time: str
    reason: str | None = None
    created_at: datetime


class SlotInfo(CamelModel):
    start_time: str
    end_time: str
    is_available: bool
    status: str | None = None


class DaySlotsResponse(CamelModel):
    provider_id: int
    date: str  # YYYY-MM-DD
    day_of_week: int
    slots: list[SlotInfo]


class MonthOverviewResponse(CamelModel):
    provider_id: int
    year: int
    month: int
    busy_days: list[date]
    closed_days: list[date]
