"""
Shared test fixtures for the SmartGrow backend test suite.

Provides:
- File-backed SQLite database with the key-value table created
- PersistenceStore and services bound to a test user
- A diagnosis factory and a fake diagnosis provider
- A Flask test client wired to a fresh container

Usage:
    def test_example(tracker, make_diagnosis):
        outcome = tracker.save_diagnosis(make_diagnosis())
        assert outcome.stats.scans_count == 1
"""

from __future__ import annotations

import itertools
import logging
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.domain.user_context import UserContext  # noqa: E402
from app.enums.common import Severity  # noqa: E402
from app.schemas.records import DiagnosisRecord  # noqa: E402
from app.services.application.alert_service import AlertService  # noqa: E402
from app.services.application.recovery_tracker import RecoveryTracker  # noqa: E402
from app.utils.time import epoch_millis  # noqa: E402
from infrastructure.database.repositories.persistence_store import PersistenceStore  # noqa: E402
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler  # noqa: E402

# ---------------------------------------------------------------------------
# Logging, keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("infrastructure").setLevel(logging.WARNING)
logging.getLogger("app").setLevel(logging.WARNING)

TEST_USER = "user-1"


# ========================== Database Fixtures ==============================


@pytest.fixture()
def db_handler(tmp_path):
    """File-backed SQLite database with the key-value table created.

    A file (not ``:memory:``) so that every thread's connection sees the
    same data.
    """
    handler = SQLiteDatabaseHandler(str(tmp_path / "smartgrow-test.db"))
    handler.create_tables()
    yield handler
    handler.close_db()


@pytest.fixture()
def store(db_handler):
    """PersistenceStore bound to the test user."""
    return PersistenceStore(db_handler, UserContext(TEST_USER))


# ========================== Service Fixtures ===============================


@pytest.fixture()
def alert_service(store):
    return AlertService(store)


@pytest.fixture()
def tracker(store, alert_service):
    return RecoveryTracker(store, alert_service)


# ========================== Data Helpers ===================================


@pytest.fixture()
def make_diagnosis():
    """Factory for DiagnosisRecord with sensible defaults; keyword overrides win."""
    counter = itertools.count(1)

    def _make(**overrides: Any) -> DiagnosisRecord:
        n = next(counter)
        data: dict[str, Any] = {
            "id": f"scan-{n}",
            "timestamp": epoch_millis(),
            "plant_name": "Tomato",
            "diagnosis": "Early blight",
            "confidence": 0.9,
            "severity": Severity.MILD,
            "organic_treatment": "Neem oil",
            "chemical_treatment": "Copper fungicide",
            "prevention": "Water at the base",
            "power_tips": ["Mulch", "Prune lower leaves"],
            "is_plant": True,
        }
        data.update(overrides)
        return DiagnosisRecord(**data)

    return _make


class FakeDiagnosisProvider:
    """Returns a canned answer, or raises ``error`` when set."""

    def __init__(self, answer: dict | None = None, error: Exception | None = None):
        self.answer = answer or {
            "isPlant": True,
            "plantName": "Basil",
            "diagnosis": "Downy mildew",
            "confidence": 0.82,
            "severity": "Moderate",
            "organicTreatment": "Remove affected leaves",
            "chemicalTreatment": "Mancozeb",
            "prevention": "Improve airflow",
            "powerTips": ["Water in the morning"],
        }
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def analyze(self, image_b64: str, language: str) -> dict:
        self.calls.append((image_b64, language))
        if self.error is not None:
            raise self.error
        return dict(self.answer)


@pytest.fixture()
def fake_provider():
    return FakeDiagnosisProvider()


# ========================== Flask Fixtures =================================


@pytest.fixture()
def app(tmp_path, fake_provider):
    from app import create_app

    flask_app = create_app(
        {
            "database_path": str(tmp_path / "api.db"),
            "sampler_enabled": False,
            "log_file": None,
        },
        provider=fake_provider,
    )
    flask_app.config["TESTING"] = True
    yield flask_app
    flask_app.config["CONTAINER"].shutdown()


@pytest.fixture()
def client(app):
    return app.test_client()
