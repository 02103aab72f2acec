import sys
from datetime import datetime
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient

# Ensure project root is importable when run without installing
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from subify.core.config import settings
from subify.db import mongodb
from subify.db.seed import seed_reference_data
from subify.services import submission_service


@pytest.fixture
def db(monkeypatch):
    """In-memory MongoDB with plans and users seeded, wired in as the app database"""
    database = mongomock.MongoClient().db
    monkeypatch.setattr(mongodb, "mongodb_db", database)
    seed_reference_data(database)
    return database


@pytest.fixture(autouse=True)
def _no_prediction(monkeypatch):
    """Renewal prediction never reaches the network in tests"""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)


@pytest.fixture
def now():
    return datetime(2024, 1, 15, 12, 0, 0)


@pytest.fixture
def make_submission(db, now):
    """Create a Pending submission through the service"""

    def _make(email="customer@example.com", plan_id="plan-basic", months=12, **kwargs):
        kwargs.setdefault("now", now)
        return submission_service.create_submission(email, plan_id, months, **kwargs)

    return _make


@pytest.fixture
def client(db):
    from subify.main import app

    # No context manager: the lifespan (real MongoDB connection) is not started
    return TestClient(app)
