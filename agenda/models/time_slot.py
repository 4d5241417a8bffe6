from sqlmodel import SQLModel


class TimeSlot(SQLModel):
    """A bookable slot derived for one date. Never persisted."""

    start_time: str
    end_time: str
    is_available: bool
    status: str | None = None
