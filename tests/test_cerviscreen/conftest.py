from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from cerviscreen.imaging.quality import QualityAssessor
from cerviscreen.model.consent import ConsentItems, EligibilityData
from cerviscreen.model.profile import Physician
from cerviscreen.store.db import Database
from cerviscreen.store.migrations import run_migrations
from cerviscreen.store.repositories import PhysicianRepository
from cerviscreen.store.sqlite import SqliteStore


class FixedRandom:
    """Stands in for random.Random; hands out queued scores, repeating the last."""

    def __init__(self, *scores: int) -> None:
        self._scores = list(scores) or [90]

    def randint(self, low: int, high: int) -> int:
        score = self._scores.pop(0) if len(self._scores) > 1 else self._scores[0]
        assert low <= score <= high
        return score


class TickingClock:
    """Clock that advances one second per call, so timestamps order reliably."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


@pytest.fixture
def db():
    """Create a fresh in-memory database with migrations for each test."""
    database = Database(":memory:")
    database.connect()
    run_migrations(database)
    yield database
    database.close()


@pytest.fixture
def store(db) -> SqliteStore:
    return SqliteStore(db)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def ids():
    """Sequential ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def assessor() -> QualityAssessor:
    return QualityAssessor(rng=FixedRandom(90))


@pytest.fixture
def low_assessor() -> QualityAssessor:
    return QualityAssessor(rng=FixedRandom(72))


@pytest.fixture
def physician(store) -> Physician:
    doc = Physician(
        id="phy-1",
        full_name="Sarah Mitchell",
        specialization="Gynaecology",
        license_number="GMC-1234567",
        phone="555-0100",
        years_of_experience=12,
    )
    PhysicianRepository(store).upsert(doc)
    return doc


@pytest.fixture
def eligibility() -> EligibilityData:
    return EligibilityData(
        age_confirmed=True, has_cervix=True, not_pregnant=True, no_recent_screening=True
    )


@pytest.fixture
def consent_items() -> ConsentItems:
    return ConsentItems(
        understand_purpose=True,
        agree_data_storage=True,
        agree_image_capture=True,
        understand_not_diagnostic=True,
        can_withdraw=True,
    )


@pytest.fixture
def fixed_random():
    return FixedRandom
