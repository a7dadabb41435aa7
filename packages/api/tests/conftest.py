# This project was developed with assistance from AI tools.
"""Fixtures for HTTP-level tests.

The real app from ``src.main`` is a module singleton. ``_clean_overrides``
ensures dependency_overrides are cleared after every test so persona and
repository wiring from one test never leaks into the next.
"""

import pytest
from fastapi.testclient import TestClient

from src.main import app as real_app
from src.middleware.auth import get_current_user
from src.repositories import get_repository
from src.services.notifications import get_notification_dispatcher

from .factories import make_notifier


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture
def app():
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def notifier():
    return make_notifier()


@pytest.fixture
def make_client(app, notifier):
    """Factory fixture: wire a persona and repository into the app.

    The client is not entered as a context manager, so the startup lifespan
    (repository init, demo seeding) never runs.
    """

    def _make(user, repo) -> TestClient:
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_repository] = lambda: repo
        app.dependency_overrides[get_notification_dispatcher] = lambda: notifier
        return TestClient(app)

    return _make
