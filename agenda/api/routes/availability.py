from datetime import date

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.api.deps import get_session
from agenda.api.schemas.availability import (
    DaySlotsResponse,
    MonthOverviewResponse,
    SlotInfo,
    WeeklyRule,
    WeeklyScheduleRequest,
    WeeklyScheduleResponse,
)
from agenda.models.availability import ProviderAvailability
from agenda.services.availability_service import (
    get_effective_weekly_rules,
    get_month_overview,
    get_slots_for_date,
    replace_weekly_rules,
)
from agenda.services.time_utils import day_of_week

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("/provider/{provider_id}", response_model=list[WeeklyRule])
async def provider_weekly_schedule(
    provider_id: int = Path(..., gt=0),
    session: AsyncSession = Depends(get_session),
) -> list[WeeklyRule]:
    """Seven rules, Sunday first. Weekdays never saved show the default week."""
    rules = await get_effective_weekly_rules(session, provider_id)
    return [WeeklyRule.model_validate(r) for r in rules]


@router.post("/weekly", response_model=WeeklyScheduleResponse)
async def save_weekly_schedule(
    body: WeeklyScheduleRequest,
    session: AsyncSession = Depends(get_session),
) -> WeeklyScheduleResponse:
    rows = [
        ProviderAvailability(
            provider_id=body.provider_id,
            day_of_week=r.day_of_week,
            start_time=r.start_time,
            end_time=r.end_time,
            is_available=r.is_available,
            interval_minutes=r.interval_minutes,
        )
        for r in body.rules
    ]
    saved = await replace_weekly_rules(session, body.provider_id, rows)
    return WeeklyScheduleResponse(
        provider_id=body.provider_id,
        rules=[WeeklyRule.model_validate(r) for r in saved],
    )


@router.get("/provider/{provider_id}/slots", response_model=DaySlotsResponse)
async def provider_day_slots(
    provider_id: int = Path(..., gt=0),
    date_param: date = Query(..., alias="date"),
    session: AsyncSession = Depends(get_session),
) -> DaySlotsResponse:
    """Time slots of one date, each flagged available or not (with the occupying appointment's status)."""
    slots = await get_slots_for_date(session, provider_id, date_param)
    return DaySlotsResponse(
        provider_id=provider_id,
        date=date_param.isoformat(),
        day_of_week=day_of_week(date_param),
        slots=[SlotInfo.model_validate(s) for s in slots],
    )


@router.get("/provider/{provider_id}/calendar", response_model=MonthOverviewResponse)
async def provider_month_calendar(
    provider_id: int = Path(..., gt=0),
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    session: AsyncSession = Depends(get_session),
) -> MonthOverviewResponse:
    overview = await get_month_overview(session, provider_id, year, month)
    return MonthOverviewResponse(
        provider_id=provider_id,
        year=year,
        month=month,
        busy_days=overview["busy_days"],
        closed_days=overview["closed_days"],
    )
