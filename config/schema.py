from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


# ─── PLATZIERUNG ───

class PlacementConfig(BaseModel):
    """Parameter der Besprechungsplatzierung."""
    # Tage mit mehr als so vielen Besprechungsstunden pro Woche (Durchschnitt)
    # werden bei der Suche übersprungen. Ein fest vorgegebener Tag umgeht die Grenze.
    meeting_cap_hours_per_week: float = Field(2.5, gt=0, le=7.0,
        description="Max. Besprechungsstunden pro Tag und Woche (Durchschnitt)")
    # Seed für die zufällige Wochenwahl (None = nicht reproduzierbar)
    random_seed: Optional[int] = Field(None,
        description="Zufalls-Seed für die Wochenwahl (leer = zufällig)")


# ─── EXPORT ───

class ExportConfig(BaseModel):
    """Export-Einstellungen (Excel)."""
    # Montag der ersten Woche im Horizont (für Datumsangaben im Export)
    base_date: date = Field(date(2025, 4, 14),
        description="Montag der Woche 1")
    # Zielverzeichnis für Exporte
    output_dir: str = Field("output",
        description="Ausgabeverzeichnis")
    # Dateiname der Excel-Datei
    excel_filename: str = Field("besprechungsplan.xlsx",
        description="Dateiname Excel-Export")

    @field_validator("base_date")
    @classmethod
    def _must_be_monday(cls, v: date) -> date:
        if v.weekday() != 0:
            raise ValueError(f"base_date {v.isoformat()} ist kein Montag.")
        return v


# ─── GESAMT-CONFIG ───

class SchedulerConfig(BaseModel):
    """Gesamtkonfiguration des Besprechungsplaners."""
    # Titel für Ausgaben (Terminal, Excel)
    title: str = Field("Besprechungsplan",
        description="Titel des Plans")
    # Platzierungsparameter
    placement: PlacementConfig = Field(default_factory=PlacementConfig)
    # Export-Einstellungen
    export: ExportConfig = Field(default_factory=ExportConfig)
    # Log-Level der CLI
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("WARNING",
        description="Log-Level")
