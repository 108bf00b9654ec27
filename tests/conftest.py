# =============================================================================
# CONFTEST - shared fixtures
# =============================================================================
# Settings are read when webquiz is first imported, so the environment is
# prepared before any webquiz import below.
# =============================================================================

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta, timezone

import pytest

from webquiz.core.security import create_access_token
from webquiz.models.domain import User
from webquiz.repositories.memory_repo import InMemoryQuizRepository, InMemoryUserRepository
from webquiz.services.quiz_service import QuizLifecycleService


class FakeClock:
    """Deterministic clock; each call returns the current time, advance() moves it."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# =============================================================================
# STORES & SERVICE
# =============================================================================


@pytest.fixture
def quiz_repo():
    return InMemoryQuizRepository()


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(quiz_repo, user_repo, clock):
    return QuizLifecycleService(quiz_repo, user_repo, clock=clock)


# =============================================================================
# USERS
# =============================================================================


@pytest.fixture
def author(user_repo):
    return user_repo.save(User(email="author@example.com", hashed_password="x"))


@pytest.fixture
def other_user(user_repo):
    return user_repo.save(User(email="other@example.com", hashed_password="x"))


@pytest.fixture
def sample_quiz(service, author):
    """Quiz with options A-D whose only correct option is C (index 2)."""
    return service.create_quiz(author, "Letters", "Which letter is third?", ["A", "B", "C", "D"], {2})


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def client(quiz_repo, user_repo, service):
    """TestClient whose stores and clock are this test's fixtures."""
    from fastapi.testclient import TestClient

    from webquiz.main import app
    from webquiz.routers.deps import get_quiz_service, get_quiz_store, get_user_store

    app.dependency_overrides[get_quiz_store] = lambda: quiz_repo
    app.dependency_overrides[get_user_store] = lambda: user_repo
    app.dependency_overrides[get_quiz_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def auth_headers():
    return bearer
