import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import calometer.main as main  # noqa: E402  (import after env vars are set)
from calometer.database import Base, SessionLocal, engine  # noqa: E402
from calometer.models.body import BodyDetails  # noqa: E402
from calometer.models.user import User  # noqa: E402
from calometer.services.auth_middleware import get_current_user  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    with TestClient(main.app) as test_client:
        yield test_client


def make_user(session, username: str = "alice", name: str = "Alice") -> User:
    user = User(name=name, username=username, password_hash="not-a-real-hash")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def give_bmr(session, user_id: str, bmr: float = 2000.0) -> BodyDetails:
    """Store body details whose Mifflin-St Jeor BMR is 2000 for a male profile."""
    details = BodyDetails(
        user_id=user_id,
        age=26,
        height_cm=180.0,
        weight_kg=100.0,
        gender="M",
        bmr=bmr,
    )
    session.add(details)
    session.commit()
    return details


@pytest.fixture()
def user(db):
    return make_user(db)


@pytest.fixture()
def user_with_bmr(db, user):
    give_bmr(db, user.id)
    return user


@pytest.fixture()
def other_user_with_bmr(db):
    other = make_user(db, username="bob", name="Bob")
    give_bmr(db, other.id, bmr=1800.0)
    return other


@pytest.fixture()
def override_user(user):
    main.app.dependency_overrides[get_current_user] = lambda: SimpleNamespace(id=user.id, username=user.username)
    yield user
    main.app.dependency_overrides.pop(get_current_user, None)
