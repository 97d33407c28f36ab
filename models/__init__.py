from models.errors import (
    SchedulerError,
    InvalidInputError,
    SlotConflictError,
    NoSlotAvailableError,
)
from models.timeslot import Day, Slot, Frequency, GridCell
from models.meeting import Reservation, MeetingRequest, ScheduleEntry

__all__ = [
    "SchedulerError",
    "InvalidInputError",
    "SlotConflictError",
    "NoSlotAvailableError",
    "Day",
    "Slot",
    "Frequency",
    "GridCell",
    "Reservation",
    "MeetingRequest",
    "ScheduleEntry",
]
