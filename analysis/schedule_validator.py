"""Nachträgliche Validierung eines fertigen Besprechungsplans.

Prüft Termine und Reservierungen auf Regelverletzungen als Sicherheitsnetz
unabhängig von der Platzierung.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.timeslot import (
    DAY_LABELS, NUM_DAYS, NUM_WEEKS, SLOT_HOURS, TIME_LABELS, Frequency, span_is_valid,
)
from solver.placement import DEFAULT_MEETING_CAP_HOURS, FORTNIGHT_PAIRINGS
from solver.scheduler import ScheduleSnapshot

# Erlaubte Wochenmengen einer zweiwöchentlichen Besprechung (auch zweimal angefragt)
_LEGAL_FORTNIGHT_WEEKS = [set(p) for p in FORTNIGHT_PAIRINGS] + [set(range(NUM_WEEKS))]


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "double_booking"
    description: str
    entity: str          # Besprechungsname / Tag / "Reservierung"


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Plan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=24)
        table.add_column("Betrifft", width=18)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class ScheduleValidator:
    """Prüft einen ScheduleSnapshot auf Regelverletzungen."""

    def __init__(self, meeting_cap_hours: float = DEFAULT_MEETING_CAP_HOURS) -> None:
        self.meeting_cap_hours = meeting_cap_hours

    def validate(self, snapshot: ScheduleSnapshot) -> ValidationReport:
        """Führt alle Checks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_spans(snapshot))
        violations.extend(self._check_double_booking(snapshot))
        violations.extend(self._check_occurrences(snapshot))
        violations.extend(self._check_load_consistency(snapshot))
        violations.extend(self._check_meeting_cap(snapshot))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_spans(self, snapshot: ScheduleSnapshot) -> list[ValidationViolation]:
        """Kein Eintrag in der Mittagspause oder nach 17:00."""
        violations: list[ValidationViolation] = []
        for e in snapshot.entries:
            if not span_is_valid(e.start_slot, e.duration):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="invalid_span",
                    entity=e.name,
                    description=(
                        f"Woche {e.week + 1} {e.day_label} "
                        f"{e.start_label}–{e.end_label} liegt außerhalb des Rasters."
                    ),
                ))
        for r in snapshot.reservations:
            if not span_is_valid(r.start_slot, r.duration):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="invalid_span",
                    entity="Reservierung",
                    description=(
                        f"{r.day_label} {r.start_label}–{r.end_label} "
                        f"liegt außerhalb des Rasters."
                    ),
                ))
        return violations

    def _check_double_booking(self, snapshot: ScheduleSnapshot) -> list[ValidationViolation]:
        """Jede Zelle (Woche, Tag, Slot) darf höchstens einmal belegt sein."""
        violations: list[ValidationViolation] = []
        seen: dict[tuple[int, int, int], list[str]] = defaultdict(list)

        for r in snapshot.reservations:
            for week in range(NUM_WEEKS):
                for i in range(r.duration):
                    seen[(week, r.day, r.start_slot + i)].append("Reservierung")
        for e in snapshot.entries:
            for i in range(e.duration):
                seen[(e.week, e.day, e.start_slot + i)].append(e.name)

        for (week, day, slot), owners in sorted(seen.items()):
            if len(owners) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="double_booking",
                    entity=DAY_LABELS[day],
                    description=(
                        f"Woche {week + 1}, {TIME_LABELS[slot]}: gleichzeitig "
                        f"{', '.join(owners)}."
                    ),
                ))
        return violations

    def _check_occurrences(self, snapshot: ScheduleSnapshot) -> list[ValidationViolation]:
        """Terminanzahl passt zur Frequenz, keine Woche doppelt, Paare zulässig."""
        violations: list[ValidationViolation] = []
        groups: dict[tuple, list[int]] = defaultdict(list)
        for e in snapshot.entries:
            key = (e.name, e.frequency, e.day, e.start_slot, e.duration)
            groups[key].append(e.week)

        for (name, frequency, day, slot, _), weeks in groups.items():
            where = f"{DAY_LABELS[day]} {TIME_LABELS[slot]}"
            if len(weeks) % frequency.occurrences != 0:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="occurrence_count",
                    entity=name,
                    description=(
                        f"{where}: {len(weeks)} Termine, erwartet Vielfaches von "
                        f"{frequency.occurrences} ({frequency.value})."
                    ),
                ))
            if len(weeks) != len(set(weeks)):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="week_reused",
                    entity=name,
                    description=f"{where}: Woche mehrfach belegt ({sorted(weeks)}).",
                ))
            if frequency is Frequency.FORTNIGHTLY and set(weeks) not in _LEGAL_FORTNIGHT_WEEKS:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="fortnight_pairing",
                    entity=name,
                    description=(
                        f"{where}: Wochen {[w + 1 for w in sorted(weeks)]} sind "
                        f"kein zulässiges Paar (1+3 oder 2+4)."
                    ),
                ))
        return violations

    def _check_load_consistency(self, snapshot: ScheduleSnapshot) -> list[ValidationViolation]:
        """Auslastungswerte müssen der Summe der Einträge entsprechen."""
        violations: list[ValidationViolation] = []
        total = [0.0] * NUM_DAYS
        meetings = [0.0] * NUM_DAYS
        for r in snapshot.reservations:
            total[r.day] += r.duration * SLOT_HOURS * NUM_WEEKS
        for e in snapshot.entries:
            total[e.day] += e.hours
            meetings[e.day] += e.hours

        load = snapshot.load
        for day in range(NUM_DAYS):
            if (abs(load.total_hours[day] - total[day]) > 1e-9
                    or abs(load.meeting_hours[day] - meetings[day]) > 1e-9):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="load_mismatch",
                    entity=DAY_LABELS[day],
                    description=(
                        f"Gespeichert {load.total_hours[day]:.1f}h/"
                        f"{load.meeting_hours[day]:.1f}h, aus Einträgen "
                        f"{total[day]:.1f}h/{meetings[day]:.1f}h."
                    ),
                ))
        return violations

    def _check_meeting_cap(self, snapshot: ScheduleSnapshot) -> list[ValidationViolation]:
        """Hinweis auf Tage, die nach der Platzierung über der Besprechungsgrenze liegen."""
        violations: list[ValidationViolation] = []
        for day in range(NUM_DAYS):
            avg = snapshot.load.meeting_hours[day] / NUM_WEEKS
            if avg > self.meeting_cap_hours:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="meeting_cap",
                    entity=DAY_LABELS[day],
                    description=(
                        f"Ø {avg:.2f}h Besprechungen/Woche "
                        f"(Grenze {self.meeting_cap_hours:.2f}h)."
                    ),
                ))
        return violations
