"""MeetingScheduler – Besitzer von Raster, Reservierungen, Auslastung und Terminen.

Architektur:
  - BlockingGrid       – Belegung Woche × Tag × Slot
  - ReservationLedger  – externe Verpflichtungen (jede Woche)
  - LoadTracker        – Stunden pro Tag (gesamt / nur Besprechungen)
  - MeetingPlacementEngine – Suche + Commit für Besprechungsanfragen

Jede öffentliche Operation läuft vollständig unter einer Sperre, d.h. Suche
und Commit einer Platzierung sehen nie eine fremde Änderung dazwischen.
"""

import logging
import random
import threading
from typing import Optional

from pydantic import BaseModel

from config.schema import SchedulerConfig
from models.errors import SchedulerError
from models.meeting import MeetingRequest, Reservation, ScheduleEntry
from solver.grid import BlockingGrid
from solver.load import LoadSnapshot, LoadTracker
from solver.placement import MeetingPlacementEngine
from solver.reservations import ReservationLedger

logger = logging.getLogger(__name__)


class ScheduleSnapshot(BaseModel):
    """Lesende Gesamtsicht für Export und Validierung."""

    entries: list[ScheduleEntry]
    reservations: list[Reservation]
    load: LoadSnapshot

    def get_week_entries(self, week: int) -> list[ScheduleEntry]:
        """Alle Termine einer Woche."""
        return [e for e in self.entries if e.week == week]

    def get_meeting_entries(self, name: str) -> list[ScheduleEntry]:
        """Alle Termine einer Besprechung (nach Name)."""
        return [e for e in self.entries if e.name == name]


class MeetingScheduler:
    """Vier-Wochen-Besprechungsplaner.

    Verwendung:
        scheduler = MeetingScheduler(rng=random.Random(42))
        scheduler.reserve("Tuesday", "14:00", 60)
        scheduler.place_meeting(MeetingRequest.from_labels("Team Sync", "Design", 30))
    """

    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or SchedulerConfig()
        self._lock = threading.RLock()

        self.grid = BlockingGrid()
        self.load = LoadTracker()
        self.ledger = ReservationLedger(self.grid, self.load)
        self._schedule: list[ScheduleEntry] = []

        placement = self.config.placement
        if rng is None:
            rng = random.Random(placement.random_seed)
        self.engine = MeetingPlacementEngine(
            self.grid,
            self.load,
            self._schedule,
            rng=rng,
            meeting_cap_hours=placement.meeting_cap_hours_per_week,
        )

    # ─── Reservierungen ───────────────────────────────────────────────────────

    def add_reservation(self, day: str, start_time: str, duration_minutes: int) -> Reservation:
        """Wie reserve(), aber mit Exception statt bool."""
        with self._lock:
            return self.ledger.add(day, start_time, duration_minutes)

    def reserve(self, day: str, start_time: str, duration_minutes: int) -> bool:
        """Reserviert einen Block in allen vier Wochen. False bei Fehler/Konflikt."""
        try:
            self.add_reservation(day, start_time, duration_minutes)
        except SchedulerError as e:
            logger.warning(f"Reservierung abgelehnt ({e.kind}): {e.message}")
            return False
        return True

    # ─── Besprechungen ────────────────────────────────────────────────────────

    def schedule_meeting(self, request: MeetingRequest) -> tuple[ScheduleEntry, ...]:
        """Wie place_meeting(), gibt aber die Termine zurück bzw. wirft."""
        with self._lock:
            return self.engine.place(request)

    def place_meeting(self, request: MeetingRequest) -> bool:
        """Plant eine Besprechung ein. False wenn kein Termin gefunden wurde."""
        try:
            self.schedule_meeting(request)
        except SchedulerError as e:
            logger.warning(f"Besprechung '{request.name}' abgelehnt ({e.kind}): {e.message}")
            return False
        return True

    # ─── Sitzung ──────────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Setzt Termine, Reservierungen, Raster und Auslastung vollständig zurück."""
        with self._lock:
            self._schedule.clear()
            self.ledger.clear()
            self.grid.clear()
            self.load.clear()
        logger.info("Sitzung zurückgesetzt.")

    # ─── Abfragen ─────────────────────────────────────────────────────────────

    @property
    def entries(self) -> tuple[ScheduleEntry, ...]:
        with self._lock:
            return tuple(self._schedule)

    @property
    def reservations(self) -> tuple[Reservation, ...]:
        with self._lock:
            return self.ledger.records

    def entries_for(
        self, week: Optional[int] = None, day: Optional[int] = None
    ) -> list[ScheduleEntry]:
        return [
            e for e in self.entries
            if (week is None or e.week == week) and (day is None or e.day == day)
        ]

    def is_blocked(self, week: int, day: int, slot: int) -> bool:
        with self._lock:
            return self.grid.is_blocked(week, day, slot)

    def grid_snapshot(self) -> tuple[tuple[tuple[bool, ...], ...], ...]:
        with self._lock:
            return self.grid.snapshot()

    def load_snapshot(self) -> LoadSnapshot:
        with self._lock:
            return self.load.snapshot()

    def snapshot(self) -> ScheduleSnapshot:
        with self._lock:
            return ScheduleSnapshot(
                entries=list(self._schedule),
                reservations=list(self.ledger.records),
                load=self.load.snapshot(),
            )

    def __repr__(self) -> str:
        return (
            f"MeetingScheduler({len(self._schedule)} Termine, "
            f"{len(self.ledger)} Reservierungen)"
        )
