"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Ausgabe."""

from datetime import date, timedelta

from models.timeslot import DAY_LABELS, NUM_DAYS, NUM_WEEKS, end_time, TIME_LABELS
from solver.scheduler import ScheduleSnapshot

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "One-to-one":  "B3D4FF",
    "Design":      "FFB3E6",
    "Management":  "FFF2B3",
    "Contractor":  "D4B3FF",
    "Client":      "B3FFB3",
    "sonstig":     "E0E0E0",
    "reserved":    "FF9999",
    "day_even":    "FFFFFF",
    "day_odd":     "F2F2F2",
    "header":      "4472C4",
}

RESERVED_NAME = "Reserved (External)"
RESERVED_TYPE = "Reserved"

WEEK_COLUMNS: list[str] = [
    "Day", "Start Time", "End Time", "Name", "Type", "Duration (min)", "Frequency",
]


def type_color(meeting_type: str) -> str:
    return COLORS.get(meeting_type, COLORS["sonstig"])


def occurrence_date(base_date: date, week: int, day: int) -> date:
    """Kalenderdatum eines Termins: Montag der Woche 1 + Tag + 7 × Woche."""
    return base_date + timedelta(days=day + 7 * week)


# ─── Wochenzeilen ─────────────────────────────────────────────────────────────

def week_rows(snapshot: ScheduleSnapshot, week: int) -> list[dict]:
    """Zeilen einer Woche, nach Tag gruppiert: erst Termine, dann Reservierungen.

    Jede Zeile: dict mit day, start, end, name, type, minutes, frequency,
    reserved (bool).
    """
    rows: list[dict] = []
    entries = snapshot.get_week_entries(week)
    for day in range(NUM_DAYS):
        for e in entries:
            if e.day != day:
                continue
            rows.append({
                "day": DAY_LABELS[day],
                "start": TIME_LABELS[e.start_slot],
                "end": end_time(e.start_slot, e.duration),
                "name": e.name,
                "type": e.meeting_type,
                "minutes": e.duration_minutes,
                "frequency": e.frequency.value,
                "reserved": False,
            })
        for r in snapshot.reservations:
            if r.day != day:
                continue
            rows.append({
                "day": DAY_LABELS[day],
                "start": r.start_label,
                "end": r.end_label,
                "name": RESERVED_NAME,
                "type": RESERVED_TYPE,
                "minutes": r.duration_minutes,
                "frequency": "weekly",
                "reserved": True,
            })
    return rows


def load_rows(snapshot: ScheduleSnapshot) -> list[list[str]]:
    """Auslastungszeilen: [Tag, Gesamt h, Besprechungen h, Ø Besprechungen h/Woche]."""
    rows: list[list[str]] = []
    load = snapshot.load
    for day in range(NUM_DAYS):
        rows.append([
            DAY_LABELS[day],
            f"{load.total_hours[day]:.1f}",
            f"{load.meeting_hours[day]:.1f}",
            f"{load.meeting_hours[day] / NUM_WEEKS:.2f}",
        ])
    return rows
