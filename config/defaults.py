from config.schema import (
    ExportConfig,
    PlacementConfig,
    SchedulerConfig,
)


# Besprechungstypen des Anfrageformulars
MEETING_TYPES: tuple[str, ...] = (
    "One-to-one",
    "Design",
    "Management",
    "Contractor",
    "Client",
)


def default_config() -> SchedulerConfig:
    """Standardkonfiguration.

    Besprechungsgrenze 2,5 h pro Tag und Woche, Wochenwahl nicht
    reproduzierbar, Export ab Montag 14.04.2025.
    """
    return SchedulerConfig(
        title="Besprechungsplan",
        placement=PlacementConfig(meeting_cap_hours_per_week=2.5, random_seed=None),
        export=ExportConfig(),
    )


def example_batch() -> dict:
    """Beispiel-Anfragen (Struktur wie eine Request-YAML-Datei).

    Zwei externe Verpflichtungen und fünf Besprechungen mit allen
    Frequenzen; wird für `demo` und `template` verwendet.
    """
    return {
        "reservations": [
            {"day": "Tuesday", "start": "14:00", "minutes": 60},
            {"day": "Thursday", "start": "09:00", "minutes": 90},
        ],
        "meetings": [
            {"name": "Team Sync", "type": "Management", "minutes": 30,
             "frequency": "weekly"},
            {"name": "Design Review", "type": "Design", "minutes": 60,
             "preferred_times": ["10:00", "13:30"], "frequency": "fortnightly"},
            {"name": "Kunden-Call", "type": "Client", "minutes": 60,
             "fixed_day": "Monday", "fixed_time": "10:00", "frequency": "fortnightly"},
            {"name": "1:1 Anna", "type": "One-to-one", "minutes": 30,
             "preferred_times": ["15:00"], "frequency": "weekly"},
            {"name": "Dienstleister-Abstimmung", "type": "Contractor", "minutes": 90,
             "frequency": "monthly"},
        ],
    }
