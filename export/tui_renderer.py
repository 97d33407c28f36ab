"""Terminal-Darstellung des Besprechungsplans (Rich).

Wird von den CLI-Befehlen plan und demo verwendet.
"""

from typing import TYPE_CHECKING

from rich import box
from rich.table import Table

from export.helpers import WEEK_COLUMNS, load_rows, occurrence_date, week_rows
from models.timeslot import DAY_LABELS, NUM_WEEKS

if TYPE_CHECKING:
    from config.schema import SchedulerConfig
    from solver.scheduler import ScheduleSnapshot


def render_week_table(
    snapshot: "ScheduleSnapshot", week: int, config: "SchedulerConfig"
) -> Table:
    """Tabelle einer Woche; Tage abwechselnd hinterlegt, Reservierungen rot."""
    monday = occurrence_date(config.export.base_date, week, 0)
    table = Table(
        title=f"Woche {week + 1} (ab {monday.strftime('%d.%m.%Y')})",
        box=box.ROUNDED,
    )
    for col in WEEK_COLUMNS:
        table.add_column(col)

    for row in week_rows(snapshot, week):
        shade = DAY_LABELS.index(row["day"]) % 2 == 1
        style = "red" if row["reserved"] else ("on grey11" if shade else "")
        table.add_row(
            row["day"], row["start"], row["end"], row["name"], row["type"],
            str(row["minutes"]), row["frequency"],
            style=style or None,
        )
    return table


def render_schedule(snapshot: "ScheduleSnapshot", config: "SchedulerConfig") -> list[Table]:
    return [render_week_table(snapshot, w, config) for w in range(NUM_WEEKS)]


def render_load_table(snapshot: "ScheduleSnapshot", cap_hours: float) -> Table:
    """Auslastung pro Tag; Tage über der Besprechungsgrenze gelb markiert."""
    table = Table(title="Auslastung (4 Wochen)", box=box.ROUNDED)
    table.add_column("Tag", style="bold")
    table.add_column("Gesamt (h)", justify="right")
    table.add_column("Besprechungen (h)", justify="right")
    table.add_column("Ø Besprechungen/Woche", justify="right")
    for row in load_rows(snapshot):
        over = float(row[3]) > cap_hours
        table.add_row(*row, style="yellow" if over else None)
    return table
