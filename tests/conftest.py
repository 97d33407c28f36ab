"""Gemeinsame Fixtures der Testsuite."""

import random

import pytest

from config.defaults import default_config, example_batch
from data.request_loader import RequestBatch, run_batch
from solver.scheduler import MeetingScheduler, ScheduleSnapshot


@pytest.fixture(scope="module")
def demo_snapshot() -> ScheduleSnapshot:
    """Beispiel-Stapel mit festem Seed eingeplant."""
    scheduler = MeetingScheduler(default_config(), rng=random.Random(42))
    run_batch(scheduler, RequestBatch.model_validate(example_batch()))
    return scheduler.snapshot()
