"""ReservationLedger – trägt externe Verpflichtungen in alle vier Wochen ein.

Eine Reservierung ist entweder in allen Wochen eingetragen oder gar nicht:
Der Konfliktcheck läuft über alle Wochen, bevor irgendetwas verändert wird.
"""

import logging

from models.errors import InvalidInputError, SlotConflictError
from models.meeting import Reservation
from models.timeslot import Day, Slot, duration_slots_of, span_is_valid
from solver.grid import BlockingGrid
from solver.load import LoadTracker

logger = logging.getLogger(__name__)


class ReservationLedger:
    """Verwaltet Reservierungen und schreibt sie ins Raster."""

    def __init__(self, grid: BlockingGrid, load: LoadTracker) -> None:
        self._grid = grid
        self._load = load
        self._records: list[Reservation] = []

    def add(self, day_label: str, start_label: str, duration_minutes: int) -> Reservation:
        """Reserviert einen Block jede Woche.

        Raises:
            InvalidInputError: unbekannter Tag/Zeit, Pause, Dauer ∉ {30,60,90},
                Ende nach 17:00 oder Block durch die Mittagspause.
            SlotConflictError: mindestens eine Woche ist bereits belegt.
        """
        day = Day.from_label(day_label)
        start = Slot.from_label(start_label)
        duration = duration_slots_of(duration_minutes)

        if not span_is_valid(start, duration):
            raise InvalidInputError(
                f"{day_label} {start_label} + {duration_minutes} min liegt nicht "
                f"im Raster (Ende nach 17:00 oder über die Mittagspause)."
            )

        if not self._grid.is_free_all_weeks(day, start, duration):
            raise SlotConflictError(
                f"{day_label} {start_label} ({duration_minutes} min) ist in "
                f"mindestens einer Woche bereits belegt."
            )

        self._grid.block_all_weeks(day, start, duration)
        reservation = Reservation(day=day, start_slot=start, duration=duration)
        self._records.append(reservation)
        self._load.add_reservation(day, duration)
        logger.info(
            f"Reservierung: {reservation.day_label} "
            f"{reservation.start_label}–{reservation.end_label} (alle Wochen)"
        )
        return reservation

    @property
    def records(self) -> tuple[Reservation, ...]:
        return tuple(self._records)

    def clear(self) -> None:
        self._records = []

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ReservationLedger({len(self._records)} Reservierungen)"
