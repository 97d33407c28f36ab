"""Zeitraster der Besprechungsplanung: Tage, Slots, Frequenzen.

Das Raster ist fest:
  - 4 Wochen (Woche 1..4, intern 0..3)
  - 4 Tage (Montag..Donnerstag)
  - 14 Slots à 30 Minuten von 09:00 bis 16:30

Die Mittagspause 12:00–13:00 ist NICHT Teil des Index-Raums: Slot 5 ist 11:30,
Slot 6 ist direkt 13:00. Die Pausen-Labels werden nur erkannt, um sie
abzuweisen.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from models.errors import InvalidInputError

NUM_WEEKS = 4
NUM_DAYS = 4
NUM_SLOTS = 14

# Erster Slot nach der Mittagspause (13:00)
BREAK_INDEX = 6
DAY_START_HOUR = 9
DAY_END_HOUR = 17.0
SLOT_HOURS = 0.5
SLOT_MINUTES = 30

DAY_LABELS: tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday")
TIME_LABELS: tuple[str, ...] = (
    "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    "13:00", "13:30", "14:00", "14:30", "15:00", "15:30",
    "16:00", "16:30",
)
BREAK_LABELS: tuple[str, ...] = ("12:00", "12:30")
FREQUENCY_LABELS: tuple[str, ...] = ("weekly", "fortnightly", "third_week", "monthly")
DURATION_MINUTES: tuple[int, ...] = (30, 60, 90)


# ─── Lookup-Funktionen ────────────────────────────────────────────────────────

def slot_index_of(label: str) -> Optional[int]:
    """Index eines Zeit-Labels (exakter Vergleich) oder None."""
    try:
        return TIME_LABELS.index(label)
    except ValueError:
        return None


def day_index_of(label: str) -> Optional[int]:
    """Index eines Tages-Labels (exakter Vergleich) oder None."""
    try:
        return DAY_LABELS.index(label)
    except ValueError:
        return None


def is_break(label: str) -> bool:
    return label in BREAK_LABELS


def hour_of(index: int) -> float:
    """Slot-Index → Uhrzeit als Dezimalstunde (z.B. 3 → 10.5).

    Ab BREAK_INDEX wird die übersprungene Mittagsstunde addiert.
    """
    hour = index // 2 + DAY_START_HOUR
    minute = (index % 2) * SLOT_MINUTES
    if index >= BREAK_INDEX:
        hour += 1
    return hour + minute / 60.0


def end_time(start_index: int, duration_slots: int) -> str:
    """Endzeit als "HH:MM" für Start-Slot + Dauer in Slots."""
    end_hour = hour_of(start_index) + duration_slots * SLOT_HOURS
    h = int(end_hour)
    m = int(round((end_hour - h) * 60))
    return f"{h:02d}:{m:02d}"


def span_is_valid(start_index: int, duration_slots: int) -> bool:
    """Prüft, ob ein Block [start, start+dauer) im Tagesraster liegen darf.

    Ungültig sind: Start außerhalb des Rasters, Überlauf über den letzten
    Slot, Ende nach 17:00 und Blöcke, die durch die Mittagspause laufen
    (z.B. 11:30 + 60 min).
    """
    if duration_slots < 1:
        return False
    if start_index < 0 or start_index >= NUM_SLOTS:
        return False
    if start_index + duration_slots > NUM_SLOTS:
        return False
    if hour_of(start_index) + duration_slots * SLOT_HOURS > DAY_END_HOUR:
        return False
    if start_index < BREAK_INDEX < start_index + duration_slots:
        return False
    return True


def duration_slots_of(minutes: int) -> int:
    """Minuten (30/60/90) → Anzahl Slots; andere Werte sind ungültig."""
    # 60.0 oder True sind keine gültigen Minutenangaben
    if type(minutes) is not int or minutes not in DURATION_MINUTES:
        raise InvalidInputError(
            f"Ungültige Dauer: {minutes!r} Minuten (erlaubt: 30, 60, 90)."
        )
    return minutes // SLOT_MINUTES


# ─── Geschlossene Aufzählungen ────────────────────────────────────────────────

class Day(IntEnum):
    """Arbeitstag im Raster (kein Wochenende, kein Freitag)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3

    @property
    def label(self) -> str:
        return DAY_LABELS[self.value]

    @classmethod
    def from_label(cls, label: str) -> "Day":
        idx = day_index_of(label)
        if idx is None:
            raise InvalidInputError(
                f"Unbekannter Tag: {label!r} (erlaubt: {', '.join(DAY_LABELS)})."
            )
        return cls(idx)


class Slot(IntEnum):
    """Einer der 14 Halbstunden-Slots (09:00..11:30, 13:00..16:30)."""

    S0900 = 0
    S0930 = 1
    S1000 = 2
    S1030 = 3
    S1100 = 4
    S1130 = 5
    S1300 = 6
    S1330 = 7
    S1400 = 8
    S1430 = 9
    S1500 = 10
    S1530 = 11
    S1600 = 12
    S1630 = 13

    @property
    def label(self) -> str:
        return TIME_LABELS[self.value]

    @property
    def hour(self) -> float:
        return hour_of(self.value)

    @classmethod
    def from_label(cls, label: str) -> "Slot":
        if is_break(label):
            raise InvalidInputError(
                f"{label} liegt in der Mittagspause (12:00–13:00)."
            )
        idx = slot_index_of(label)
        if idx is None:
            raise InvalidInputError(f"Unbekannte Uhrzeit: {label!r}.")
        return cls(idx)


class Frequency(str, Enum):
    """Wiederholungsmuster einer Besprechung.

    third_week und monthly sind derzeit gleichbedeutend: beide erzeugen genau
    einen Termin im Vier-Wochen-Horizont.
    """

    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    THIRD_WEEK = "third_week"
    MONTHLY = "monthly"

    @property
    def occurrences(self) -> int:
        if self is Frequency.WEEKLY:
            return NUM_WEEKS
        if self is Frequency.FORTNIGHTLY:
            return 2
        return 1

    @classmethod
    def from_label(cls, label: str) -> "Frequency":
        if label not in FREQUENCY_LABELS:
            raise InvalidInputError(
                f"Unbekannte Frequenz: {label!r} "
                f"(erlaubt: {', '.join(FREQUENCY_LABELS)})."
            )
        return cls(label)


# ─── Rasterzelle ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GridCell:
    """Eine einzelne Zelle im Vier-Wochen-Raster.

    Immutable (frozen=True) damit sie als Dict-Key / Set-Element nutzbar ist.
    """

    # Woche 0..3 (Anzeige: Woche 1..4)
    week: int
    # Tag 0..3 (0=Montag)
    day: int
    # Slot-Index 0..13
    slot: int

    @property
    def day_label(self) -> str:
        return DAY_LABELS[self.day]

    @property
    def time_label(self) -> str:
        return TIME_LABELS[self.slot]

    def __str__(self) -> str:
        return f"Woche {self.week + 1} {self.day_label} {self.time_label}"
