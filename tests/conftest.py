import os
import tempfile

# settings are read at import time, so point them at a throwaway database first
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), f"mindcare_test_{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

import uuid
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.database import Base, engine, SessionLocal
from app.models import User
from app.auth import create_access_token
from app.mood_handler import get_alert_dispatcher
from crisis_detection import score, to_alert
from services.alerts.dispatcher import AlertDispatcher
from services.alerts.storage import AlertStore, SqlAlchemyAlertStore


@pytest.fixture(autouse=True)
def setup_db():
    # fresh schema for every test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


class FlakyStore(AlertStore):
    """In-memory store that fails a set number of times before succeeding"""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls = 0
        self.saved = []

    def insert_alert(self, alert):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"database unavailable (call {self.calls})")
        self.saved.append(alert)
        return len(self.saved)


@pytest.fixture()
def dispatcher():
    return AlertDispatcher(SqlAlchemyAlertStore(SessionLocal), attempts=3, retry_delay=0)


@pytest.fixture()
def client(dispatcher):
    app.dependency_overrides[get_alert_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(user_type: str = "student", name: str = "Test User") -> SimpleNamespace:
    db = SessionLocal()
    try:
        user = User(
            name=name,
            email=f"{uuid.uuid4().hex}@test.com",
            user_type=user_type,
            status=1
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return SimpleNamespace(user_id=user.user_id, user_type=user.user_type, name=user.name)
    finally:
        db.close()


def auth_header(user) -> dict:
    token = create_access_token(str(user.user_id), user.user_type)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def student():
    return make_user("student", "Sam Student")


@pytest.fixture()
def counselor():
    return make_user("counselor", "Casey Counselor")


def make_alert_for(user, text: str = "I feel hopeless"):
    return to_alert(score(text), user.user_id, text)
