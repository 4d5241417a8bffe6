from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.api.deps import get_session, provider_scope
from agenda.api.schemas.appointment import (
    AppointmentPublic,
    BookAppointmentRequest,
    StatusUpdateRequest,
)
from agenda.models.appointment import Appointment
from agenda.services.appointment_service import (
    SlotConflict,
    create_appointment,
    list_appointments,
    update_appointment_status,
)

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("", response_model=list[AppointmentPublic])
async def list_provider_appointments(
    provider_id: int = Depends(provider_scope),
    date_param: date | None = Query(None, alias="date"),
    from_date: date | None = Query(None),
    to_date: date | None = Query(None),
    session: AsyncSession = Depends(get_session),
) -> list[AppointmentPublic]:
    appointments = await list_appointments(
        session, provider_id, on_date=date_param, from_date=from_date, to_date=to_date
    )
    return [AppointmentPublic.model_validate(a) for a in appointments]


@router.post("", response_model=AppointmentPublic, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    body: BookAppointmentRequest,
    session: AsyncSession = Depends(get_session),
) -> AppointmentPublic:
    """Manual booking by the provider. The range must fall in open hours and be free."""
    data = Appointment(
        provider_id=body.provider_id,
        client_id=body.client_id,
        service_id=body.service_id,
        date=body.date,
        start_time=body.start_time,
        end_time=body.end_time,
        status=body.status.value,
        client_name=body.client_name,
        client_phone=body.client_phone,
        client_email=body.client_email,
        notes=body.notes,
        is_manually_created=True,
    )
    appointment = await create_appointment(session, data)
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Time range not available: outside open hours, blocked, or already booked.",
        )
    return AppointmentPublic.model_validate(appointment)


@router.put("/{appointment_id}/status", response_model=AppointmentPublic)
async def change_appointment_status(
    appointment_id: int,
    body: StatusUpdateRequest,
    session: AsyncSession = Depends(get_session),
) -> AppointmentPublic:
    try:
        appointment = await update_appointment_status(session, appointment_id, body.status)
    except SlotConflict:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Time range was booked or blocked since this appointment was canceled.",
        )
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found",
        )
    return AppointmentPublic.model_validate(appointment)
