import logging
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.config import settings
from agenda.models.appointment import Appointment
from agenda.models.availability import ProviderAvailability
from agenda.models.blocked_time import BlockedTime
from agenda.models.time_slot import TimeSlot
from agenda.services.calendar_service import days_in_month, month_overview
from agenda.services.slot_resolver import resolve_time_slots

logger = logging.getLogger(__name__)


def default_weekly_rules(provider_id: int) -> list[ProviderAvailability]:
    """The week a provider gets before saving one (Mon-Fri open by default)."""
    open_days = settings.default_open_days_set
    return [
        ProviderAvailability(
            provider_id=provider_id,
            day_of_week=dow,
            start_time=settings.default_day_start,
            end_time=settings.default_day_end,
            is_available=dow in open_days,
            interval_minutes=settings.default_interval_minutes,
        )
        for dow in range(7)
    ]


async def get_weekly_rules(session: AsyncSession, provider_id: int) -> list[ProviderAvailability]:
    result = await session.execute(
        select(ProviderAvailability)
        .where(ProviderAvailability.provider_id == provider_id)
        .order_by(ProviderAvailability.day_of_week)
    )
    return list(result.scalars().all())


async def get_effective_weekly_rules(session: AsyncSession, provider_id: int) -> list[ProviderAvailability]:
    """Stored rules laid over the default week: always seven rules, Sunday first."""
    stored = {r.day_of_week: r for r in await get_weekly_rules(session, provider_id)}
    return [stored.get(r.day_of_week, r) for r in default_weekly_rules(provider_id)]


async def replace_weekly_rules(
    session: AsyncSession, provider_id: int, rules: list[ProviderAvailability]
) -> list[ProviderAvailability]:
    """Replace every stored rule of the provider with `rules`."""
    await session.execute(delete(ProviderAvailability).where(ProviderAvailability.provider_id == provider_id))
    for rule in rules:
        rule.id = None
        rule.provider_id = provider_id
        session.add(rule)
    await session.flush()
    logger.info("Weekly schedule saved for provider %d (%d rules)", provider_id, len(rules))
    return await get_weekly_rules(session, provider_id)


async def list_blocked_times(
    session: AsyncSession,
    provider_id: int,
    on_date: date | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[BlockedTime]:
    q = select(BlockedTime).where(BlockedTime.provider_id == provider_id)
    if on_date:
        q = q.where(BlockedTime.date == on_date)
    if from_date:
        q = q.where(BlockedTime.date >= from_date)
    if to_date:
        q = q.where(BlockedTime.date <= to_date)
    result = await session.execute(q.order_by(BlockedTime.date, BlockedTime.start_time))
    return list(result.scalars().all())


async def create_blocked_time(session: AsyncSession, data: BlockedTime) -> BlockedTime:
    session.add(data)
    await session.flush()
    await session.refresh(data)
    logger.info(
        "Blocked %s %s-%s for provider %d", data.date, data.start_time, data.end_time, data.provider_id
    )
    return data


async def delete_blocked_time(session: AsyncSession, blocked_id: int, provider_id: int) -> bool:
    result = await session.execute(
        select(BlockedTime).where(
            BlockedTime.id == blocked_id,
            BlockedTime.provider_id == provider_id,
        )
    )
    blocked = result.scalar_one_or_none()
    if not blocked:
        return False
    await session.delete(blocked)
    await session.flush()
    return True


async def list_appointments(
    session: AsyncSession,
    provider_id: int,
    on_date: date | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[Appointment]:
    q = select(Appointment).where(Appointment.provider_id == provider_id)
    if on_date:
        q = q.where(Appointment.date == on_date)
    if from_date:
        q = q.where(Appointment.date >= from_date)
    if to_date:
        q = q.where(Appointment.date <= to_date)
    result = await session.execute(q.order_by(Appointment.date, Appointment.start_time))
    return list(result.scalars().all())


async def get_slots_for_date(session: AsyncSession, provider_id: int, d: date) -> list[TimeSlot]:
    rules = await get_effective_weekly_rules(session, provider_id)
    blocked = await list_blocked_times(session, provider_id, on_date=d)
    appointments = await list_appointments(session, provider_id, on_date=d)
    return resolve_time_slots(d, rules, blocked, appointments, partial_slot=settings.partial_slot_policy)


async def get_month_overview(
    session: AsyncSession, provider_id: int, year: int, month: int
) -> dict[str, list[date]]:
    days = days_in_month(year, month)
    rules = await get_effective_weekly_rules(session, provider_id)
    blocked = await list_blocked_times(session, provider_id, from_date=days[0], to_date=days[-1])
    appointments = await list_appointments(session, provider_id, from_date=days[0], to_date=days[-1])
    return month_overview(year, month, rules, blocked, appointments)
