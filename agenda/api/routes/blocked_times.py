from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.api.deps import get_session, provider_scope
from agenda.api.schemas.availability import BlockedTimeCreate, BlockedTimePublic
from agenda.models.blocked_time import BlockedTime
from agenda.services.availability_service import (
    create_blocked_time,
    delete_blocked_time,
    list_blocked_times,
)

router = APIRouter(prefix="/availability/blocked-times", tags=["blocked-times"])


@router.get("/provider/{provider_id}", response_model=list[BlockedTimePublic])
async def provider_blocked_times(
    provider_id: int = Path(..., gt=0),
    date_param: date | None = Query(None, alias="date"),
    session: AsyncSession = Depends(get_session),
) -> list[BlockedTimePublic]:
    rows = await list_blocked_times(session, provider_id, on_date=date_param)
    return [BlockedTimePublic.model_validate(b) for b in rows]


@router.post("", response_model=BlockedTimePublic, status_code=status.HTTP_201_CREATED)
async def block_time(
    body: BlockedTimeCreate,
    session: AsyncSession = Depends(get_session),
) -> BlockedTimePublic:
    blocked = await create_blocked_time(
        session,
        BlockedTime(
            provider_id=body.provider_id,
            date=body.date,
            start_time=body.start_time,
            end_time=body.end_time,
            reason=body.reason,
        ),
    )
    return BlockedTimePublic.model_validate(blocked)


@router.delete("/{blocked_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unblock_time(
    blocked_id: int,
    provider_id: int = Depends(provider_scope),
    session: AsyncSession = Depends(get_session),
) -> None:
    ok = await delete_blocked_time(session, blocked_id, provider_id)
    if not ok:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blocked time not found or not this provider's",
        )
