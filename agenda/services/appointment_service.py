import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.models.appointment import Appointment, AppointmentStatus
from agenda.services.availability_service import (
    get_effective_weekly_rules,
    list_appointments,
    list_blocked_times,
)
from agenda.services.slot_resolver import NON_OCCUPYING_STATUSES, is_occupying, range_is_free

logger = logging.getLogger(__name__)

__all__ = [
    "SlotConflict",
    "create_appointment",
    "list_appointments",
    "lock_provider_schedule",
    "update_appointment_status",
]


class SlotConflict(Exception):
    """The appointment's range is no longer free on its date."""


async def lock_provider_schedule(session: AsyncSession, provider_id: int) -> None:
    """Serialize bookings of one provider until the transaction ends.

    Postgres only: a transaction-scoped advisory lock keyed on the provider id.
    Other backends (SQLite in tests) run one writer at a time anyway.
    """
    if session.get_bind().dialect.name != "postgresql":
        return
    await session.execute(select(func.pg_advisory_xact_lock(provider_id)))


async def _range_is_free_for(session: AsyncSession, data: Appointment) -> bool:
    rules = await get_effective_weekly_rules(session, data.provider_id)
    blocked = await list_blocked_times(session, data.provider_id, on_date=data.date)
    existing = [
        a for a in await list_appointments(session, data.provider_id, on_date=data.date) if a.id != data.id
    ]
    return range_is_free(data.date, data.start_time, data.end_time, rules, blocked, existing)


async def create_appointment(session: AsyncSession, data: Appointment) -> Appointment | None:
    """Book a manual appointment. Returns None if the range is not free that day."""
    await lock_provider_schedule(session, data.provider_id)
    if not await _range_is_free_for(session, data):
        logger.info(
            "Rejected booking %s %s-%s for provider %d: range not free",
            data.date,
            data.start_time,
            data.end_time,
            data.provider_id,
        )
        return None
    session.add(data)
    await session.flush()
    await session.refresh(data)
    return data


async def update_appointment_status(
    session: AsyncSession, appointment_id: int, status: AppointmentStatus
) -> Appointment | None:
    """Change the status. Returns None if missing; raises SlotConflict when
    reviving a canceled appointment whose range has been taken since."""
    result = await session.execute(select(Appointment).where(Appointment.id == appointment_id))
    appointment = result.scalar_one_or_none()
    if not appointment:
        return None
    previous = appointment.status
    reopening = not is_occupying(appointment) and status.value not in NON_OCCUPYING_STATUSES
    if reopening:
        await lock_provider_schedule(session, appointment.provider_id)
        if not await _range_is_free_for(session, appointment):
            logger.info("Appointment %d cannot move %s -> %s: range taken", appointment_id, previous, status.value)
            raise SlotConflict(f"{appointment.date} {appointment.start_time}-{appointment.end_time}")
    appointment.status = status.value
    session.add(appointment)
    await session.flush()
    await session.refresh(appointment)
    logger.info("Appointment %d status %s -> %s", appointment_id, previous, status.value)
    return appointment
