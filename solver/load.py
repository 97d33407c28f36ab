"""Tagesauslastung: Gesamtstunden und reine Besprechungsstunden pro Tag.

Beide Werte summieren über den gesamten Vier-Wochen-Horizont und werden nur
beim Einplanen erhöht (Reset ausschließlich über clear()).
"""

from pydantic import BaseModel

from models.timeslot import NUM_DAYS, NUM_WEEKS, SLOT_HOURS, Day


class LoadSnapshot(BaseModel):
    """Momentaufnahme der Auslastung (Index = Tag)."""

    total_hours: list[float]
    meeting_hours: list[float]


class LoadTracker:
    """Pflegt total_hours (Reservierungen + Besprechungen) und meeting_hours."""

    def __init__(self) -> None:
        self.total_hours: list[float] = [0.0] * NUM_DAYS
        self.meeting_hours: list[float] = [0.0] * NUM_DAYS

    def add_reservation(self, day: int, duration_slots: int) -> None:
        """Reservierungen gelten jede Woche → zählen vierfach, nur in total_hours."""
        self.total_hours[day] += duration_slots * SLOT_HOURS * NUM_WEEKS

    def add_meeting(self, day: int, duration_slots: int) -> None:
        """Ein einzelner Termin (eine Woche)."""
        hours = duration_slots * SLOT_HOURS
        self.total_hours[day] += hours
        self.meeting_hours[day] += hours

    def days_by_load(self) -> list[Day]:
        """Tage aufsteigend nach total_hours; Gleichstand bleibt in Tagesreihenfolge."""
        return sorted(Day, key=lambda d: self.total_hours[d])

    def average_weekly_meeting_hours(self, day: int) -> float:
        return self.meeting_hours[day] / NUM_WEEKS

    def exceeds_meeting_cap(self, day: int, cap_hours: float) -> bool:
        return self.average_weekly_meeting_hours(day) > cap_hours

    def projected_hours(self, day: int, duration_slots: int) -> float:
        return self.total_hours[day] + duration_slots * SLOT_HOURS

    def snapshot(self) -> LoadSnapshot:
        return LoadSnapshot(
            total_hours=list(self.total_hours),
            meeting_hours=list(self.meeting_hours),
        )

    def clear(self) -> None:
        self.total_hours = [0.0] * NUM_DAYS
        self.meeting_hours = [0.0] * NUM_DAYS
