from agenda.models.availability import ProviderAvailability
from agenda.models.blocked_time import BlockedTime
from agenda.models.appointment import Appointment, AppointmentStatus
from agenda.models.time_slot import TimeSlot

__all__ = [
    "ProviderAvailability",
    "BlockedTime",
    "Appointment",
    "AppointmentStatus",
    "TimeSlot",
]
