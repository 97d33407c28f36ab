"""Solver-Modul: Belegungsraster, Reservierungen und Besprechungsplatzierung."""

from .grid import BlockingGrid
from .load import LoadTracker, LoadSnapshot
from .reservations import ReservationLedger
from .placement import MeetingPlacementEngine, PlacementCandidate, FORTNIGHT_PAIRINGS
from .scheduler import MeetingScheduler, ScheduleSnapshot

__all__ = [
    "BlockingGrid",
    "LoadTracker",
    "LoadSnapshot",
    "ReservationLedger",
    "MeetingPlacementEngine",
    "PlacementCandidate",
    "FORTNIGHT_PAIRINGS",
    "MeetingScheduler",
    "ScheduleSnapshot",
]
