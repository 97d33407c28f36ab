"""Excel-Export für den Besprechungsplan (openpyxl)."""

from pathlib import Path

from config.schema import SchedulerConfig
from models.timeslot import DAY_LABELS, NUM_WEEKS
from solver.scheduler import ScheduleSnapshot

from export.helpers import (
    COLORS, WEEK_COLUMNS, load_rows, occurrence_date, type_color, week_rows,
)


class ExcelExporter:
    """Exportiert einen ScheduleSnapshot: ein Blatt pro Woche + Auslastung."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_W = [12, 11, 11, 28, 14, 15, 13, 12]

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22

    def __init__(self, snapshot: ScheduleSnapshot, config: SchedulerConfig):
        self.snapshot = snapshot
        self.config = config

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erstellt die Excel-Datei mit allen Blättern."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        for week in range(NUM_WEEKS):
            self._sheet_woche(wb, week)
        self._sheet_auslastung(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str]) -> None:
        from openpyxl.styles import Alignment, Font
        from openpyxl.utils import get_column_letter
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border
            ws.column_dimensions[get_column_letter(col)].width = self.COL_W[col - 1]
        ws.row_dimensions[1].height = self.ROW_HEADER_H
        ws.freeze_panes = "A2"

    # ─── Blätter ──────────────────────────────────────────────────────────────

    def _sheet_woche(self, wb, week: int) -> None:
        """Blatt "Woche N": Termine und Reservierungen, Tage abwechselnd hinterlegt."""
        from openpyxl.styles import Font
        ws = wb.create_sheet(title=f"Woche {week + 1}")
        self._write_header_row(ws, WEEK_COLUMNS + ["Datum"])
        border = self._thin_border()

        for r, row in enumerate(week_rows(self.snapshot, week), start=2):
            day = DAY_LABELS.index(row["day"])
            when = occurrence_date(self.config.export.base_date, week, day)
            values = [
                row["day"], row["start"], row["end"], row["name"], row["type"],
                row["minutes"], row["frequency"], when.strftime("%d.%m.%Y"),
            ]
            day_fill = self._fill(COLORS["day_odd"] if day % 2 else COLORS["day_even"])
            for c, value in enumerate(values, start=1):
                cell = ws.cell(row=r, column=c, value=value)
                cell.border = border
                cell.fill = day_fill
            # Typ-Spalte farbig, Reservierungen rot
            type_cell = ws.cell(row=r, column=5)
            if row["reserved"]:
                type_cell.fill = self._fill(COLORS["reserved"])
                ws.cell(row=r, column=4).font = Font(italic=True)
            else:
                type_cell.fill = self._fill(type_color(row["type"]))

    def _sheet_auslastung(self, wb) -> None:
        """Blatt "Auslastung": Stunden pro Tag über alle vier Wochen."""
        from openpyxl.styles import Font
        ws = wb.create_sheet(title="Auslastung")
        self._write_header_row(
            ws, ["Tag", "Gesamt (h)", "Besprechungen (h)", "Ø Besprechungen/Woche"],
        )
        cap = self.config.placement.meeting_cap_hours_per_week
        border = self._thin_border()
        for r, row in enumerate(load_rows(self.snapshot), start=2):
            values = [row[0], float(row[1]), float(row[2]), float(row[3])]
            for c, value in enumerate(values, start=1):
                ws.cell(row=r, column=c, value=value).border = border
            if values[3] > cap:
                ws.cell(row=r, column=4).font = Font(bold=True, color="C00000")
