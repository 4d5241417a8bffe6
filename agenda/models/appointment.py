import datetime as dt
from enum import Enum

from sqlmodel import Field, SQLModel


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    canceled = "canceled"
    executing = "executing"
    no_show = "no_show"


def _utc_naive_now() -> dt.datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return dt.datetime.now(dt.UTC).replace(tzinfo=None)


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: int | None = Field(default=None, primary_key=True)
    provider_id: int = Field(index=True)
    client_id: int | None = None
    service_id: int | None = None
    date: dt.date = Field(index=True)
    start_time: str
    end_time: str
    status: str = AppointmentStatus.pending.value
    client_name: str | None = None
    client_phone: str | None = None
    client_email: str | None = None
    notes: str | None = None
    is_manually_created: bool = False
    created_at: dt.datetime = Field(default_factory=_utc_naive_now)
