"""Tests für Konfiguration, Zeitraster, Datenmodelle und Anfrage-Import."""

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import MEETING_TYPES, default_config, example_batch
from config.manager import ConfigManager
from config.schema import ExportConfig, PlacementConfig, SchedulerConfig
from data.request_loader import (
    MeetingSpec,
    RequestBatch,
    RequestFileError,
    load_requests,
    run_batch,
    write_template,
)
from models.errors import InvalidInputError, SchedulerError
from models.meeting import MAX_PREFERRED_TIMES, MeetingRequest, Reservation
from models.timeslot import (
    Day,
    Frequency,
    GridCell,
    Slot,
    duration_slots_of,
    end_time,
    hour_of,
    span_is_valid,
)
from solver.scheduler import MeetingScheduler


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_config_valid(self):
        """Standardkonfiguration: Grenze 2,5 h, Woche 1 ab 14.04.2025."""
        config = default_config()
        assert config.placement.meeting_cap_hours_per_week == 2.5
        assert config.placement.random_seed is None
        assert config.export.base_date == date(2025, 4, 14)
        assert config.log_level == "WARNING"

    def test_meeting_types(self):
        assert MEETING_TYPES == ("One-to-one", "Design", "Management", "Contractor", "Client")

    def test_example_batch_valid(self):
        """Beispiel-Stapel passt zum Dateiformat und enthält alle Frequenzen."""
        batch = RequestBatch.model_validate(example_batch())
        assert len(batch.reservations) == 2
        assert len(batch.meetings) == 5
        assert {m.frequency for m in batch.meetings} == {"weekly", "fortnightly", "monthly"}
        for spec in batch.meetings:
            spec.to_request()


class TestPydanticValidation:
    def test_base_date_must_be_monday(self):
        with pytest.raises(ValidationError):
            ExportConfig(base_date=date(2025, 4, 15))

    def test_cap_must_be_positive(self):
        with pytest.raises(ValidationError):
            PlacementConfig(meeting_cap_hours_per_week=0)

    def test_cap_upper_bound(self):
        """Mehr als 7 h Besprechungen passen nicht in einen Tag."""
        with pytest.raises(ValidationError):
            PlacementConfig(meeting_cap_hours_per_week=7.5)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SchedulerConfig(log_level="TRACE")


class TestConfigManager:
    def _manager(self, tmp_path: Path) -> ConfigManager:
        mgr = ConfigManager()
        mgr.CONFIG_DIR = tmp_path
        mgr.DEFAULT_CONFIG = tmp_path / "scheduler_config.yaml"
        return mgr

    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern → laden ergibt identische Werte."""
        mgr = self._manager(tmp_path)
        config = SchedulerConfig(
            title="Team Alpha",
            placement=PlacementConfig(meeting_cap_hours_per_week=3.0, random_seed=11),
        )
        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()

        loaded = mgr.load(mgr.DEFAULT_CONFIG)
        assert loaded == config

    def test_saved_yaml_has_comments(self, tmp_path: Path):
        mgr = self._manager(tmp_path)
        mgr.save(default_config())
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Platzierung ───" in text
        assert "Stunden pro Woche" in text

    def test_first_run_check_no_file(self, tmp_path: Path):
        mgr = ConfigManager()
        mgr.DEFAULT_CONFIG = tmp_path / "nonexistent.yaml"
        assert mgr.first_run_check() is True

    def test_first_run_check_with_file(self, tmp_path: Path):
        mgr = self._manager(tmp_path)
        mgr.save(default_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_or_default_without_file(self, tmp_path: Path):
        mgr = self._manager(tmp_path)
        assert mgr.load_or_default() == SchedulerConfig()

    def test_invalid_file_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("placement:\n  meeting_cap_hours_per_week: -1\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager().load(path)


# ─── ZEITRASTER ───────────────────────────────────────────────────────────────

class TestTimeslot:
    def test_hour_of_skips_break(self):
        """Slot 5 = 11:30, Slot 6 = direkt 13:00."""
        assert hour_of(0) == 9.0
        assert hour_of(3) == 10.5
        assert hour_of(5) == 11.5
        assert hour_of(6) == 13.0
        assert hour_of(13) == 16.5

    def test_end_time(self):
        assert end_time(Slot.S0900, 3) == "10:30"
        assert end_time(Slot.S1530, 2) == "16:30"
        assert end_time(Slot.S1630, 1) == "17:00"

    def test_span_is_valid(self):
        assert span_is_valid(Slot.S1100, 2)
        assert not span_is_valid(Slot.S1100, 3)     # 11:00–12:30
        assert not span_is_valid(Slot.S1130, 2)
        assert span_is_valid(Slot.S1600, 2)
        assert not span_is_valid(Slot.S1600, 3)
        assert not span_is_valid(Slot.S0900, 0)

    def test_duration_slots_of(self):
        assert duration_slots_of(30) == 1
        assert duration_slots_of(60) == 2
        assert duration_slots_of(90) == 3
        for bad in (0, 15, 120, True, 60.0, "60"):
            with pytest.raises(InvalidInputError):
                duration_slots_of(bad)

    def test_day_from_label(self):
        assert Day.from_label("Thursday") is Day.THURSDAY
        assert Day.WEDNESDAY.label == "Wednesday"
        with pytest.raises(InvalidInputError):
            Day.from_label("Friday")

    def test_slot_from_label_break(self):
        """Pausenzeiten werden mit eigener Meldung abgewiesen."""
        assert Slot.from_label("13:00") is Slot.S1300
        with pytest.raises(InvalidInputError, match="Mittagspause"):
            Slot.from_label("12:30")
        with pytest.raises(InvalidInputError):
            Slot.from_label("9:00")

    def test_frequency_occurrences(self):
        assert Frequency.WEEKLY.occurrences == 4
        assert Frequency.FORTNIGHTLY.occurrences == 2
        assert Frequency.THIRD_WEEK.occurrences == 1
        assert Frequency.MONTHLY.occurrences == 1
        with pytest.raises(InvalidInputError):
            Frequency.from_label("daily")

    def test_grid_cell_hashable(self):
        cell = GridCell(week=1, day=0, slot=6)
        assert {cell, GridCell(1, 0, 6)} == {cell}
        assert str(cell) == "Woche 2 Monday 13:00"


# ─── DATENMODELLE ─────────────────────────────────────────────────────────────

class TestModels:
    def test_reservation_labels(self):
        r = Reservation(day=Day.TUESDAY, start_slot=Slot.S1400, duration=2)
        assert r.day_label == "Tuesday"
        assert r.start_label == "14:00"
        assert r.end_label == "15:00"
        assert r.duration_minutes == 60
        assert r.hours_per_week == 1.0

    def test_request_from_labels(self):
        req = MeetingRequest.from_labels(
            "Review", "Design", 60,
            preferred_times=["10:00", "", "13:30", "10:00"],
            fixed_day="Monday",
            frequency="fortnightly",
        )
        assert req.duration == 2
        assert req.preferred_slots == (Slot.S1000, Slot.S1330)
        assert req.fixed_day is Day.MONDAY
        assert req.fixed_slot is None
        assert req.occurrences == 2

    def test_request_keeps_at_most_eight_preferences(self):
        labels = ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
                  "13:00", "13:30", "14:00", "14:30"]
        req = MeetingRequest.from_labels("X", "Design", 30, preferred_times=labels)
        assert len(req.preferred_slots) == MAX_PREFERRED_TIMES
        assert req.preferred_slots[-1] == Slot.S1330

    @pytest.mark.parametrize("kwargs", [
        {"preferred_times": ["12:00"]},
        {"fixed_day": "Saturday"},
        {"fixed_time": "17:00"},
        {"frequency": "yearly"},
    ])
    def test_request_invalid_labels(self, kwargs):
        with pytest.raises(InvalidInputError):
            MeetingRequest.from_labels("X", "Design", 30, **kwargs)

    def test_request_invalid_duration(self):
        with pytest.raises(SchedulerError) as exc:
            MeetingRequest.from_labels("X", "Design", 45)
        assert exc.value.kind == "invalid_input"

    def test_request_is_frozen(self):
        req = MeetingRequest.from_labels("X", "Design", 30)
        with pytest.raises(ValidationError):
            req.name = "Y"


# ─── ANFRAGE-IMPORT ───────────────────────────────────────────────────────────

class TestRequestLoader:
    def test_template_roundtrip(self, tmp_path: Path):
        """Vorlage schreiben → laden ergibt den Beispiel-Stapel."""
        path = tmp_path / "requests.yaml"
        write_template(path)
        assert path.read_text(encoding="utf-8").startswith("# Besprechungsplaner")
        batch = load_requests(path)
        assert batch == RequestBatch.model_validate(example_batch())

    def test_csv_preferred_times(self):
        spec = MeetingSpec.model_validate(
            {"name": "A", "type": "Design", "preferred_times": "09:30, 10:00,"}
        )
        assert spec.preferred_times == ["09:30", "10:00"]
        assert spec.to_request().preferred_slots == (Slot.S0930, Slot.S1000)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(RequestFileError):
            load_requests(tmp_path / "fehlt.yaml")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "leer.yaml"
        path.write_text("", encoding="utf-8")
        assert load_requests(path) == RequestBatch()

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "liste.yaml"
        path.write_text("- Monday\n- Tuesday\n", encoding="utf-8")
        with pytest.raises(RequestFileError):
            load_requests(path)

    def test_numeric_label_rejected(self, tmp_path: Path):
        """Zahlen statt Zeit-Labels werden nicht stillschweigend umgedeutet."""
        path = tmp_path / "zahl.yaml"
        path.write_text(
            "reservations:\n  - {day: Monday, start: 900, minutes: 30}\n",
            encoding="utf-8",
        )
        with pytest.raises(RequestFileError):
            load_requests(path)

    def test_run_batch_outcomes(self):
        batch = RequestBatch.model_validate({
            "reservations": [
                {"day": "Monday", "start": "09:00", "minutes": 60},
                {"day": "Monday", "start": "09:30", "minutes": 30},
                {"day": "Friday", "start": "09:00", "minutes": 30},
            ],
            "meetings": [
                {"name": "Sync", "type": "Management", "minutes": 30,
                 "fixed_day": "Monday", "fixed_time": "09:00"},
                {"name": "Review", "type": "Design", "minutes": 60,
                 "frequency": "fortnightly"},
                {"name": "Kaputt", "type": "Design", "minutes": 45},
            ],
        })
        outcomes = run_batch(MeetingScheduler(), batch)
        assert [o.success for o in outcomes] == [True, False, False, False, True, False]
        assert outcomes[1].error_kind == "slot_conflict"
        assert outcomes[2].error_kind == "invalid_input"
        assert outcomes[3].error_kind == "no_slot_available"
        assert outcomes[4].weeks in ([0, 2], [1, 3])
        assert outcomes[5].error_kind == "invalid_input"
