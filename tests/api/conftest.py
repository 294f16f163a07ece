"""Fixtures for HTTP-level tests."""

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import get_auth_service, get_users_service
from modules.users.service import UsersService


@pytest.fixture
def app(auth_service, user_repository):
    """App wired to the in-memory user directory and recording notifier."""
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_users_service] = lambda: UsersService(user_repository)
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
