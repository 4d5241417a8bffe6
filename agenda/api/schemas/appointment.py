from datetime import date, datetime

from pydantic import Field, model_validator

from agenda.api.schemas.availability import HHMM, CamelModel
from agenda.models.appointment import AppointmentStatus
from agenda.services.time_utils import parse_hhmm


class BookAppointmentRequest(CamelModel):
    provider_id: int = Field(gt=0)
    date: date
    start_time: HHMM
    end_time: HHMM
    client_id: int | None = None
    service_id: int | None = None
    client_name: str | None = None
    client_phone: str | None = None
    client_email: str | None = None
    notes: str | None = None
    status: AppointmentStatus = AppointmentStatus.confirmed

    @model_validator(mode="after")
    def _start_before_end(self) -> "BookAppointmentRequest":
        if parse_hhmm(self.start_time) >= parse_hhmm(self.end_time):
            raise ValueError("startTime must be before endTime")
        return self


class StatusUpdateRequest(CamelModel):
    status: AppointmentStatus


class AppointmentPublic(CamelModel):
    id: int
    provider_id: int
    client_id: int | None = None
    service_id: int | None = None
    date: date
    start_time: str
    end_time: str
    status: str
    client_name: str | None = None
    client_phone: str | None = None
    client_email: str | None = None
    notes: str | None = None
    is_manually_created: bool
    created_at: datetime
