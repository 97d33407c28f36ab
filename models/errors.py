"""Fehlerklassen der Besprechungsplanung.

Alle Fehler werden VOR jeder Änderung am Raster erkannt und sind für den
Aufrufer lokal behebbar (anderer Tag, andere Uhrzeit, andere Frequenz).
"""


class SchedulerError(Exception):
    """Basisklasse aller fachlichen Planungsfehler."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(SchedulerError):
    """Unbekanntes Tages-/Zeit-Label, Pausenzeit oder ungültige Dauer."""

    kind = "invalid_input"


class SlotConflictError(SchedulerError):
    """Reservierung überschneidet sich in mindestens einer Woche."""

    kind = "slot_conflict"


class NoSlotAvailableError(SchedulerError):
    """Keine Tag/Zeit/Wochen-Kombination erfüllt die Anfrage."""

    kind = "no_slot_available"
