"""Import von Anfrage-Stapeln (Reservierungen + Besprechungen) aus YAML.

Format:
    reservations:
      - {day: Tuesday, start: "14:00", minutes: 60}
    meetings:
      - name: Team Sync
        type: Management
        minutes: 30
        preferred_times: ["09:30", "10:00"]   # oder "09:30,10:00"
        fixed_day: Monday                      # optional
        fixed_time: "10:00"                    # optional
        frequency: weekly

Reservierungen werden vor Besprechungen angewendet, jeweils in Dateireihenfolge.
"""

import logging
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML

from config.defaults import example_batch
from models.errors import SchedulerError
from models.meeting import MeetingRequest
from solver.scheduler import MeetingScheduler

logger = logging.getLogger(__name__)

yaml = YAML()
yaml.default_flow_style = False


class RequestFileError(Exception):
    """Fehler beim Lesen einer Anfrage-Datei."""


# ─── Datei-Modelle ────────────────────────────────────────────────────────────

def _as_label(v):
    # YAML-Zahlen (z.B. 900) nicht stillschweigend akzeptieren
    if v is None:
        return ""
    if not isinstance(v, str):
        raise ValueError(f"Label muss ein String sein, nicht {type(v).__name__}: {v!r}")
    return v


class ReservationSpec(BaseModel):
    """Eine Reservierung wie in der Datei angegeben (Labels, Minuten)."""

    day: str
    start: str
    minutes: int

    @field_validator("day", "start", mode="before")
    @classmethod
    def _check_labels(cls, v):
        return _as_label(v)

    @property
    def label(self) -> str:
        return f"{self.day} {self.start} ({self.minutes} min)"


class MeetingSpec(BaseModel):
    """Eine Besprechungsanfrage wie in der Datei angegeben."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    meeting_type: str = Field(alias="type")
    minutes: int = 30
    preferred_times: Union[list[str], str] = []
    fixed_day: str = ""
    fixed_time: str = ""
    frequency: str = "weekly"

    @field_validator("fixed_day", "fixed_time", "frequency", mode="before")
    @classmethod
    def _check_labels(cls, v):
        return _as_label(v)

    @field_validator("preferred_times", mode="before")
    @classmethod
    def _split_csv(cls, v):
        # Formular-Schreibweise "09:30,10:00" zulassen
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return [_as_label(t) for t in v]

    def to_request(self) -> MeetingRequest:
        """Übersetzt in eine MeetingRequest (InvalidInputError bei unbekannten Labels)."""
        return MeetingRequest.from_labels(
            name=self.name,
            meeting_type=self.meeting_type,
            duration_minutes=self.minutes,
            preferred_times=self.preferred_times,
            fixed_day=self.fixed_day,
            fixed_time=self.fixed_time,
            frequency=self.frequency,
        )


class RequestBatch(BaseModel):
    """Kompletter Anfrage-Stapel einer Datei."""

    reservations: list[ReservationSpec] = []
    meetings: list[MeetingSpec] = []


class RequestOutcome(BaseModel):
    """Ergebnis einer einzelnen Anfrage beim Abarbeiten eines Stapels."""

    request_type: Literal["reservation", "meeting"]
    label: str
    success: bool
    error_kind: Optional[str] = None
    message: str = ""
    weeks: list[int] = []


# ─── Laden / Vorlage ──────────────────────────────────────────────────────────

def load_requests(path: Path) -> RequestBatch:
    """Liest und validiert eine Anfrage-Datei.

    Raises:
        RequestFileError: Datei fehlt, ist kein gültiges YAML oder passt nicht
            zum Format.
    """
    path = Path(path)
    if not path.exists():
        raise RequestFileError(f"Datei nicht gefunden: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
    except Exception as e:
        raise RequestFileError(f"Fehler beim Lesen von {path}: {e}") from e
    if raw is None:
        return RequestBatch()
    if not isinstance(raw, dict):
        raise RequestFileError(
            f"{path}: Erwartet eine Zuordnung mit 'reservations' und 'meetings'."
        )
    try:
        return RequestBatch.model_validate(dict(raw))
    except ValidationError as e:
        raise RequestFileError(f"{path}: Ungültiges Format:\n{e}") from e


def write_template(path: Path) -> None:
    """Schreibt eine Beispiel-Anfragedatei."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(
            "# Besprechungsplaner — Anfragen\n"
            "# Tage: Monday..Thursday | Zeiten: 09:00..11:30, 13:00..16:30\n"
            "# Dauer: 30/60/90 | Frequenz: weekly, fortnightly, third_week, monthly\n"
        )
        yaml.dump(example_batch(), f)


# ─── Abarbeiten ───────────────────────────────────────────────────────────────

def run_batch(scheduler: MeetingScheduler, batch: RequestBatch) -> list[RequestOutcome]:
    """Wendet alle Anfragen eines Stapels an: erst Reservierungen, dann Besprechungen.

    Einzelne Fehlschläge brechen den Stapel nicht ab.
    """
    outcomes: list[RequestOutcome] = []

    for spec in batch.reservations:
        try:
            scheduler.add_reservation(spec.day, spec.start, spec.minutes)
        except SchedulerError as e:
            logger.warning(f"Reservierung {spec.label} abgelehnt: {e.message}")
            outcomes.append(RequestOutcome(
                request_type="reservation", label=spec.label, success=False,
                error_kind=e.kind, message=e.message,
            ))
            continue
        outcomes.append(RequestOutcome(
            request_type="reservation", label=spec.label, success=True,
            weeks=[0, 1, 2, 3],
        ))

    for spec in batch.meetings:
        try:
            entries = scheduler.schedule_meeting(spec.to_request())
        except SchedulerError as e:
            logger.warning(f"Besprechung '{spec.name}' abgelehnt: {e.message}")
            outcomes.append(RequestOutcome(
                request_type="meeting", label=spec.name, success=False,
                error_kind=e.kind, message=e.message,
            ))
            continue
        first = entries[0]
        outcomes.append(RequestOutcome(
            request_type="meeting", label=spec.name, success=True,
            message=f"{first.day_label} {first.start_label}–{first.end_label}",
            weeks=sorted(e.week for e in entries),
        ))

    return outcomes
