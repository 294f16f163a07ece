"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory user directory, a recording notifier, and helpers for minting
tokens with the test secret.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest
import jwt  # PyJWT

# Set before anything reads settings
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)

from api.dependencies import reset_container
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AuthService
from modules.notifications.exceptions import EmailDeliveryError
from modules.notifications.models import DeliveryReceipt
from modules.users.exceptions import EmailAlreadyRegisteredError
from modules.users.models import NewUser, User
from shared.config import Settings, get_settings


class InMemoryUserRepository:
    """IUserRepository backed by a dict. Enforces unique emails like the real table."""

    def __init__(self) -> None:
        self.rows: dict[str, User] = {}

    def get_by_id(self, user_id: str) -> Optional[User]:
        user = self.rows.get(user_id)
        return user.model_copy() if user else None

    def get_by_email(self, email: str) -> Optional[User]:
        for user in self.rows.values():
            if user.email == email.lower():
                return user.model_copy()
        return None

    def create(self, new_user: NewUser) -> User:
        email = new_user.email.lower()
        if any(u.email == email for u in self.rows.values()):
            raise EmailAlreadyRegisteredError(email)
        now = datetime.now(timezone.utc)
        user = User(**new_user.model_dump(), created_at=now, updated_at=now)
        user = user.model_copy(update={"email": email})
        self.rows[user.id] = user
        return user.model_copy()

    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        user = self.rows.get(user_id)
        if user is None:
            return None
        updated = User(
            **{**user.model_dump(), **fields, "updated_at": datetime.now(timezone.utc)}
        )
        self.rows[user_id] = updated
        return updated.model_copy()

    def update_password(self, user_id: str, password_digest: str) -> Optional[User]:
        return self.update(user_id, {"password": password_digest})

    def delete(self, user_id: str) -> bool:
        return self.rows.pop(user_id, None) is not None


class RecordingNotifier:
    """INotifier that keeps sent messages in memory."""

    def __init__(self, fail: bool = False, preview_url: Optional[str] = None) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = fail
        self.preview_url = preview_url

    async def send(
        self,
        to: str,
        subject: str,
        template: Optional[str] = None,
        variables: Optional[dict[str, str]] = None,
        text: Optional[str] = None,
    ) -> DeliveryReceipt:
        if self.fail:
            raise EmailDeliveryError("SMTP server unreachable")
        self.sent.append(
            {
                "to": to,
                "subject": subject,
                "template": template,
                "variables": variables or {},
                "text": text,
            }
        )
        return DeliveryReceipt(
            message_id=f"<msg-{len(self.sent)}@todolist.com>",
            preview_url=self.preview_url,
        )

    def last_variables(self) -> dict[str, str]:
        return self.sent[-1]["variables"]


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    kind: str = "access",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    **extra: Any,
) -> str:
    """
    Create a test JWT token.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        kind: Token purpose (access, refresh, recovery)
        expired: If True, creates an expired token
        secret: Signing key

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "kind": kind,
        "exp": int(exp.timestamp()),
        "iat": int((now - timedelta(hours=2) if expired else now).timestamp()),
        **extra,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Settings with a test secret and a cheap bcrypt cost."""
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        password_reset_url="http://localhost:5173/reset-password",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def auth_service(settings, user_repository, notifier, hasher) -> AuthService:
    return AuthService(
        users=user_repository,
        notifier=notifier,
        settings=settings,
        hasher=hasher,
    )


@pytest.fixture
def stored_user(user_repository, hasher) -> User:
    """A user already in the directory, password 'password123'."""
    return user_repository.create(
        NewUser(
            id="test-user-123",
            name="Juan",
            last_name="Pérez",
            email="test@example.com",
            password=hasher.hash("password123"),
            avatar="https://example.com/avatar.png",
        )
    )


@pytest.fixture
def auth_token(stored_user: User) -> str:
    """Create a valid access token for the stored user."""
    return create_test_token(user_id=stored_user.id, email=stored_user.email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
