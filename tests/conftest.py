"""Shared fixtures.

Tests run against an in-memory SQLite database.  The settings object
requires a database password and a secret key, so both are given
defaults before anything from ``app`` is imported.
"""

import datetime
import os

os.environ.setdefault("DATABASE_PASSWORD", "forge-test")
os.environ.setdefault("SECRET_KEY", "forge-test-secret-key-0123456789abcdef")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

import app.db.base  # noqa: E402,F401  (registers every table on the metadata)
from app.core.security import create_access_token, get_password_hash  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.training_plan import SuggestedWorkout, TrainingPlan  # noqa: E402
from app.models.user import User  # noqa: E402

PASSWORD = "correct-horse-battery"
PLAN_DAY = datetime.date(2026, 10, 18)


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


def _make_user(session: Session, email: str, **profile) -> User:
    user = User(email=email, hashed_password=get_password_hash(PASSWORD), full_name="Test Athlete", **profile)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(session) -> User:
    return _make_user(session, "athlete@example.com", resting_hr=50, max_hr=190, lthr=170)


@pytest.fixture
def other_user(session) -> User:
    return _make_user(session, "rival@example.com")


@pytest.fixture
def plan(session, user) -> TrainingPlan:
    """Active plan with a cardio and a strength workout on ``PLAN_DAY``."""
    plan = TrainingPlan(user_id=user.id, name="Autumn block", start_date=PLAN_DAY - datetime.timedelta(days=14))
    session.add(plan)
    session.commit()
    session.refresh(plan)

    for order, (name, category, intensity) in enumerate(
        [("Easy spin", "cardio", "z2"), ("Squat day", "strength", "heavy")]
    ):
        session.add(SuggestedWorkout(
            plan_id=plan.id,
            suggested_date=PLAN_DAY,
            name=name,
            category=category,
            primary_intensity=intensity,
            order_in_day=order,
        ))
    session.commit()
    return plan


@pytest.fixture
def client(session):
    app.dependency_overrides[get_db] = lambda: session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user) -> dict[str, str]:
    token = create_access_token({"sub": user.email})
    return {"Authorization": f"Bearer {token}"}
