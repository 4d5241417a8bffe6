import datetime as dt

from sqlmodel import Field, SQLModel


def _utc_naive_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC).replace(tzinfo=None)


class BlockedTime(SQLModel, table=True):
    __tablename__ = "blocked_times"
    id: int | None = Field(default=None, primary_key=True)
    provider_id: int = Field(index=True)
    date: dt.date = Field(index=True)
    start_time: str
    end_time: str
    reason: str | None = None
    created_at: dt.datetime = Field(default_factory=_utc_naive_now)
