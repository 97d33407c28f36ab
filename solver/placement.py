"""Platzierung wiederkehrender Besprechungen im Vier-Wochen-Raster.

Ablauf in zwei Phasen:
  1. Suche (nur lesend): bester (Tag, Slot) nach Auslastung
  2. Commit (schreibend): konkrete Wochen wählen, dann atomar eintragen

Tage werden aufsteigend nach Gesamtauslastung durchsucht; Tage mit mehr als
cap Stunden Besprechungen pro Woche (Durchschnitt) fallen aus der Suche,
außer der Tag ist fest vorgegeben. Zweiwöchentliche Termine dürfen nur die
Wochenpaare (1,3) oder (2,4) belegen.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from models.errors import NoSlotAvailableError
from models.meeting import MeetingRequest, ScheduleEntry
from models.timeslot import NUM_SLOTS, NUM_WEEKS, Day, Frequency, Slot
from solver.grid import BlockingGrid
from solver.load import LoadTracker

logger = logging.getLogger(__name__)

# 0-basiert: Woche 1+3 bzw. Woche 2+4
FORTNIGHT_PAIRINGS: tuple[tuple[int, int], ...] = ((0, 2), (1, 3))

DEFAULT_MEETING_CAP_HOURS = 2.5


@dataclass(frozen=True)
class PlacementCandidate:
    """Ergebnis der Suchphase: gewählter Tag/Slot und seine Bewertung."""

    day: Day
    slot: Slot
    projected_hours: float
    weeks: tuple[int, ...]


class MeetingPlacementEngine:
    """Sucht Tag/Uhrzeit für eine Anfrage und trägt die Termine ein.

    Verwendung:
        engine = MeetingPlacementEngine(grid, load, schedule, rng=random.Random(7))
        entries = engine.place(request)
    """

    def __init__(
        self,
        grid: BlockingGrid,
        load: LoadTracker,
        schedule: list[ScheduleEntry],
        rng: Optional[random.Random] = None,
        meeting_cap_hours: float = DEFAULT_MEETING_CAP_HOURS,
    ) -> None:
        self._grid = grid
        self._load = load
        self._schedule = schedule
        self.rng = rng or random.Random()
        self.meeting_cap_hours = meeting_cap_hours

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def place(self, request: MeetingRequest) -> tuple[ScheduleEntry, ...]:
        """Sucht und plant eine Besprechung ein.

        Raises:
            NoSlotAvailableError: keine gültige Kombination; es wurde nichts
                verändert.
        """
        candidate = self.search(request)
        if candidate is None:
            raise NoSlotAvailableError(
                f"Kein freier Termin für '{request.name}' "
                f"({request.frequency.value}, {request.duration_minutes} min)."
            )
        weeks = self.select_weeks(request, candidate.day, candidate.slot)
        return self._commit(request, candidate.day, candidate.slot, weeks)

    # ─── Suche ────────────────────────────────────────────────────────────────

    def candidate_days(self, request: MeetingRequest) -> list[Day]:
        """Tage in Suchreihenfolge (fester Tag umgeht die Besprechungsgrenze)."""
        if request.fixed_day is not None:
            return [Day(request.fixed_day)]
        days = []
        for day in self._load.days_by_load():
            if self._load.exceeds_meeting_cap(day, self.meeting_cap_hours):
                logger.debug(
                    f"{day.label} übersprungen: "
                    f"{self._load.average_weekly_meeting_hours(day):.2f}h "
                    f"Besprechungen/Woche"
                )
                continue
            days.append(day)
        return days

    def candidate_slots(self, request: MeetingRequest) -> list[Slot]:
        if request.fixed_slot is not None:
            return [Slot(request.fixed_slot)]
        if request.preferred_slots:
            return [Slot(s) for s in request.preferred_slots]
        return [Slot(s) for s in range(NUM_SLOTS)]

    def search(self, request: MeetingRequest) -> Optional[PlacementCandidate]:
        """Findet den (Tag, Slot) mit der geringsten projizierten Auslastung.

        Bei Gleichstand gewinnt der zuerst bewertete Kandidat.
        """
        best: Optional[PlacementCandidate] = None
        for day in self.candidate_days(request):
            for slot in self.candidate_slots(request):
                weeks = self._qualifying_weeks(request, day, slot)
                if weeks is None:
                    continue
                projected = sum(
                    self._load.projected_hours(day, request.duration) for _ in weeks
                ) / len(weeks)
                if best is None or projected < best.projected_hours:
                    best = PlacementCandidate(
                        day=day, slot=slot, projected_hours=projected, weeks=weeks,
                    )
        if best is not None:
            logger.debug(
                f"Suche '{request.name}': {best.day.label} {best.slot.label} "
                f"({best.projected_hours:.1f}h)"
            )
        return best

    def _qualifying_weeks(
        self, request: MeetingRequest, day: int, slot: int
    ) -> Optional[tuple[int, ...]]:
        """Wochen, mit denen (Tag, Slot) die Anfrage erfüllt, sonst None."""
        if request.frequency is Frequency.FORTNIGHTLY:
            return self._free_pairing(day, slot, request.duration)

        found: list[int] = []
        for week in range(NUM_WEEKS):
            if self._grid.is_free(week, day, slot, request.duration):
                found.append(week)
            if len(found) >= request.occurrences:
                break
        if len(found) < request.occurrences:
            return None
        return tuple(found)

    def _free_pairing(self, day: int, slot: int, duration: int) -> Optional[tuple[int, ...]]:
        for pairing in FORTNIGHT_PAIRINGS:
            if all(self._grid.is_free(w, day, slot, duration) for w in pairing):
                return pairing
        return None

    # ─── Commit ───────────────────────────────────────────────────────────────

    def select_weeks(self, request: MeetingRequest, day: int, slot: int) -> tuple[int, ...]:
        """Legt die konkreten Wochen fest, bevor irgendetwas eingetragen wird.

        Zweiwöchentlich: erstes freies Wochenpaar in fester Reihenfolge.
        Sonst: Wochen in zufälliger Reihenfolge, die ersten freien gewinnen.

        Raises:
            NoSlotAvailableError: nicht genug freie Wochen.
        """
        if request.frequency is Frequency.FORTNIGHTLY:
            pairing = self._free_pairing(day, slot, request.duration)
            if pairing is None:
                raise NoSlotAvailableError(
                    f"Kein freies Wochenpaar für '{request.name}' am "
                    f"{Day(day).label} {Slot(slot).label}."
                )
            return pairing

        order = list(range(NUM_WEEKS))
        self.rng.shuffle(order)
        chosen: list[int] = []
        for week in order:
            if len(chosen) == request.occurrences:
                break
            if self._grid.is_free(week, day, slot, request.duration):
                chosen.append(week)
        if len(chosen) < request.occurrences:
            raise NoSlotAvailableError(
                f"Nur {len(chosen)} von {request.occurrences} Wochen frei für "
                f"'{request.name}' am {Day(day).label} {Slot(slot).label}."
            )
        return tuple(chosen)

    def _commit(
        self, request: MeetingRequest, day: Day, slot: Slot, weeks: tuple[int, ...]
    ) -> tuple[ScheduleEntry, ...]:
        entries = tuple(
            ScheduleEntry(
                week=week,
                day=day,
                start_slot=slot,
                duration=request.duration,
                name=request.name,
                meeting_type=request.meeting_type,
                frequency=request.frequency,
            )
            for week in weeks
        )
        for entry in entries:
            self._schedule.append(entry)
            self._grid.block(entry.week, day, slot, request.duration)
            self._load.add_meeting(day, request.duration)

        logger.info(
            f"Besprechung '{request.name}': {day.label} {slot.label} "
            f"in Woche {', '.join(str(w + 1) for w in weeks)}"
        )
        return entries
