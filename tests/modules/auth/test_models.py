import pytest
from datetime import date
from pydantic import ValidationError as PydanticValidationError

from modules.auth.models import (
    ChangePasswordRequest,
    SignInResponse,
    SignUpRequest,
    TokenClaims,
    TokenKind,
    TokenPair,
)
from modules.users.models import UserProfile


class TestTokenClaims:
    def test_parse_claims(self):
        """Should parse a decoded JWT payload."""
        claims = TokenClaims(
            sub="user-123",
            email="test@example.com",
            kind="refresh",
            exp=1704067200,
            iat=1704063600,
        )
        assert claims.user_id == "user-123"
        assert claims.kind is TokenKind.REFRESH
        assert claims.pwd is None

    def test_kind_required(self):
        with pytest.raises(PydanticValidationError):
            TokenClaims(sub="user-123", email="a@b.com", exp=1, iat=0)

    def test_unknown_kind(self):
        with pytest.raises(PydanticValidationError):
            TokenClaims(sub="user-123", email="a@b.com", kind="admin", exp=1, iat=0)


class TestTokenPair:
    def test_default_token_type(self):
        pair = TokenPair(access_token="a", refresh_token="r")
        assert pair.token_type == "bearer"

    def test_sign_in_response_flattens_pair(self):
        """Tokens sit next to the user in the signin body."""
        response = SignInResponse(
            access_token="a",
            refresh_token="r",
            user=UserProfile(id="u1", name="Ana", last_name="García", email="ana@example.com"),
        )
        data = response.model_dump()
        assert data["access_token"] == "a"
        assert data["user"]["email"] == "ana@example.com"


class TestSignUpRequest:
    def _valid(self, **overrides):
        data = {
            "name": "Ana",
            "last_name": "García",
            "email": "ana@example.com",
            "password": "secret123",
        }
        data.update(overrides)
        return data

    def test_valid_request(self):
        request = SignUpRequest(**self._valid(birthday="1990-01-15"))
        assert request.birthday == date(1990, 1, 15)

    def test_birthday_optional(self):
        assert SignUpRequest(**self._valid()).birthday is None

    def test_invalid_email(self):
        with pytest.raises(PydanticValidationError):
            SignUpRequest(**self._valid(email="not-an-email"))

    def test_short_password(self):
        with pytest.raises(PydanticValidationError):
            SignUpRequest(**self._valid(password="12345"))

    def test_empty_name(self):
        with pytest.raises(PydanticValidationError):
            SignUpRequest(**self._valid(name=""))


class TestChangePasswordRequest:
    def test_new_password_validated(self):
        with pytest.raises(PydanticValidationError):
            ChangePasswordRequest(old_password="password123", new_password="x")
