from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class ProviderAvailability(SQLModel, table=True):
    """One weekday of a provider's recurring schedule."""

    __tablename__ = "provider_availability"
    __table_args__ = (UniqueConstraint("provider_id", "day_of_week", name="uq_availability_provider_day"),)

    id: int | None = Field(default=None, primary_key=True)
    provider_id: int = Field(index=True)
    day_of_week: int  # 0 = Sunday
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    is_available: bool = True
    interval_minutes: int = 30
