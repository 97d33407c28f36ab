"""Datenmodelle für Reservierungen, Besprechungsanfragen und Termine (Pydantic v2)."""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.timeslot import (
    DAY_LABELS,
    SLOT_HOURS,
    SLOT_MINUTES,
    TIME_LABELS,
    Day,
    Frequency,
    Slot,
    duration_slots_of,
    end_time,
)

# Das Anfrageformular kennt höchstens acht Wunschzeiten
MAX_PREFERRED_TIMES = 8


class Reservation(BaseModel):
    """Externe Verpflichtung, die in ALLEN vier Wochen denselben Block belegt."""

    model_config = ConfigDict(frozen=True)

    day: Day
    start_slot: Slot
    duration: int = Field(ge=1, le=3)   # Slots à 30 min

    @property
    def day_label(self) -> str:
        return DAY_LABELS[self.day]

    @property
    def start_label(self) -> str:
        return TIME_LABELS[self.start_slot]

    @property
    def end_label(self) -> str:
        return end_time(self.start_slot, self.duration)

    @property
    def duration_minutes(self) -> int:
        return self.duration * SLOT_MINUTES

    @property
    def hours_per_week(self) -> float:
        return self.duration * SLOT_HOURS


class MeetingRequest(BaseModel):
    """Anfrage für eine wiederkehrende Besprechung.

    preferred_slots leer = keine Präferenz. fixed_day / fixed_slot schränken
    die Suche auf genau diesen Tag bzw. diese Uhrzeit ein.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    meeting_type: str
    duration: int = Field(ge=1, le=3)
    preferred_slots: tuple[Slot, ...] = ()
    fixed_day: Optional[Day] = None
    fixed_slot: Optional[Slot] = None
    frequency: Frequency = Frequency.WEEKLY

    @property
    def occurrences(self) -> int:
        return self.frequency.occurrences

    @property
    def duration_minutes(self) -> int:
        return self.duration * SLOT_MINUTES

    @classmethod
    def from_labels(
        cls,
        name: str,
        meeting_type: str,
        duration_minutes: int,
        preferred_times: Iterable[str] = (),
        fixed_day: str = "",
        fixed_time: str = "",
        frequency: str = "weekly",
    ) -> "MeetingRequest":
        """Baut eine Anfrage aus Formular-Labels.

        Leere Strings bedeuten "nicht angegeben". Unbekannte Labels und
        Pausenzeiten lösen InvalidInputError aus.
        """
        preferred: list[Slot] = []
        for label in preferred_times:
            if not label:
                continue
            slot = Slot.from_label(label)
            if slot not in preferred:
                preferred.append(slot)
        return cls(
            name=name,
            meeting_type=meeting_type,
            duration=duration_slots_of(duration_minutes),
            preferred_slots=tuple(preferred[:MAX_PREFERRED_TIMES]),
            fixed_day=Day.from_label(fixed_day) if fixed_day else None,
            fixed_slot=Slot.from_label(fixed_time) if fixed_time else None,
            frequency=Frequency.from_label(frequency),
        )


class ScheduleEntry(BaseModel):
    """Ein konkreter Termin (eine Woche) einer eingeplanten Besprechung."""

    model_config = ConfigDict(frozen=True)

    week: int = Field(ge=0, le=3)   # 0-basiert (Anzeige: Woche 1..4)
    day: Day
    start_slot: Slot
    duration: int = Field(ge=1, le=3)
    name: str
    meeting_type: str
    frequency: Frequency

    @property
    def day_label(self) -> str:
        return DAY_LABELS[self.day]

    @property
    def start_label(self) -> str:
        return TIME_LABELS[self.start_slot]

    @property
    def end_label(self) -> str:
        return end_time(self.start_slot, self.duration)

    @property
    def duration_minutes(self) -> int:
        return self.duration * SLOT_MINUTES

    @property
    def hours(self) -> float:
        return self.duration * SLOT_HOURS
