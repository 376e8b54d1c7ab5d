import os
from typing import Generator, Iterable, List, Sequence

# Set environment variables BEFORE importing settings or the app,
# so the app-level engine never points at a real database during tests.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RANDOM_SEED"] = "1234"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Import all model modules via app.models so Base.metadata is populated
import app.models
from app.models.base import Base
from app.main import app
from app.dependencies import get_db, get_reviewer_picker
from app.services.assignment import ReviewerPicker
from app.crud.team import create_team
from app.crud.pull_request import create_pr


class OrderedPicker(ReviewerPicker):
    """
    Deterministic picker: keeps candidate order, so tests know exactly who is chosen.
    """
    def sample(self, user_ids: Sequence[str], count: int) -> List[str]:
        return list(user_ids)[:max(0, count)]

    def choice(self, user_ids: Sequence[str]) -> str:
        return list(user_ids)[0]


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """
    Fresh in-memory SQLite schema per test function.
    StaticPool keeps a single connection so every session sees the same database.
    """
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    """
    Database session for a test function (same options as app.database.SessionLocal).
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def picker() -> ReviewerPicker:
    return OrderedPicker()


@pytest.fixture(scope="function")
def random_picker() -> ReviewerPicker:
    return ReviewerPicker(seed=20251118)


@pytest.fixture(scope="function")
def client(db: Session, picker: ReviewerPicker) -> Generator[TestClient, None, None]:
    """
    TestClient with get_db and the reviewer picker overridden.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reviewer_picker] = lambda: picker
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def make_team(db: Session):
    """
    Factory: make_team("backend", active=["u1", "u2"], inactive=["u9"]).
    """
    def _make(team_name: str, active: Iterable[str] = (), inactive: Iterable[str] = ()):
        members = [
            {"user_id": user_id, "username": f"User {user_id}", "is_active": True} for user_id in active
        ] + [
            {"user_id": user_id, "username": f"User {user_id}", "is_active": False} for user_id in inactive
        ]
        return create_team(db, team_name, members)
    return _make


@pytest.fixture(scope="function")
def make_pr(db: Session):
    """
    Factory for a PR with an explicit reviewer list (bypasses random assignment).
    """
    def _make(pr_id: str, author_id: str, reviewers: Sequence[str] = ()):
        return create_pr(db, pr_id, f"PR {pr_id}", author_id, list(reviewers))
    return _make


@pytest.fixture(scope="function")
def backend_team(make_team):
    """
    Team `backend`: u1 (author in most scenarios), u2, u3, all active.
    """
    return make_team("backend", active=["u1", "u2", "u3"])
