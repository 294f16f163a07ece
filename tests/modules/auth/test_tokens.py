"""Tests for modules/auth/tokens.py."""

import pytest
from datetime import datetime, timedelta, timezone
import jwt

from modules.auth.exceptions import ExpiredTokenError, InvalidTokenError
from modules.auth.models import TokenKind
from modules.auth.tokens import TokenCodec
from shared.exceptions import ConfigurationError

from tests.conftest import TEST_JWT_SECRET, create_test_token


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(TEST_JWT_SECRET)


class TestTokenCodecSign:
    def test_sign_round_trip(self, codec):
        """Claims should come back unchanged before the TTL elapses."""
        token = codec.sign(
            {"sub": "user-123", "email": "test@example.com"},
            timedelta(hours=1),
            TokenKind.ACCESS,
        )
        claims = codec.verify(token, TokenKind.ACCESS)
        assert claims.sub == "user-123"
        assert claims.user_id == "user-123"
        assert claims.email == "test@example.com"
        assert claims.kind is TokenKind.ACCESS

    def test_sign_sets_expiry_from_ttl(self, codec):
        """exp should be iat + ttl."""
        now = datetime.now(timezone.utc)
        token = codec.sign(
            {"sub": "user-123", "email": "test@example.com"},
            timedelta(minutes=15),
            TokenKind.RECOVERY,
            now=now,
        )
        payload = jwt.decode(token, TEST_JWT_SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 15 * 60
        assert payload["kind"] == "recovery"

    def test_extra_claims_preserved(self, codec):
        """Extra claims such as the password fingerprint should survive."""
        token = codec.sign(
            {"sub": "user-123", "email": "test@example.com", "pwd": "abc123"},
            timedelta(minutes=15),
            TokenKind.RECOVERY,
        )
        claims = codec.verify(token, TokenKind.RECOVERY)
        assert claims.pwd == "abc123"

    def test_empty_secret_rejected(self):
        """Codec must not run without a secret."""
        with pytest.raises(ConfigurationError):
            TokenCodec("")


class TestTokenCodecVerify:
    def test_zero_ttl_is_expired(self, codec):
        """A token with no lifetime should already be expired."""
        token = codec.sign(
            {"sub": "user-123", "email": "test@example.com"},
            timedelta(seconds=0),
            TokenKind.ACCESS,
            now=datetime.now(timezone.utc) - timedelta(seconds=1),
        )
        with pytest.raises(ExpiredTokenError):
            codec.verify(token, TokenKind.ACCESS)

    def test_expired_token(self, codec):
        """Should raise ExpiredTokenError for an expired token."""
        with pytest.raises(ExpiredTokenError):
            codec.verify(create_test_token(expired=True), TokenKind.ACCESS)

    def test_expired_is_invalid_token(self):
        """ExpiredTokenError should be catchable as InvalidTokenError."""
        assert issubclass(ExpiredTokenError, InvalidTokenError)

    def test_wrong_secret(self, codec):
        """Token signed with another key should be rejected."""
        token = create_test_token(secret="wrong-secret")
        with pytest.raises(InvalidTokenError):
            codec.verify(token, TokenKind.ACCESS)

    def test_tampered_token(self, codec):
        """Changing the payload should break the signature."""
        token = create_test_token()
        header, payload, signature = token.split(".")
        other_payload = create_test_token(user_id="someone-else").split(".")[1]
        with pytest.raises(InvalidTokenError):
            codec.verify(f"{header}.{other_payload}.{signature}", TokenKind.ACCESS)

    def test_malformed_token(self, codec):
        """Garbage input should raise InvalidTokenError."""
        with pytest.raises(InvalidTokenError):
            codec.verify("not-a-valid-token", TokenKind.ACCESS)

    @pytest.mark.parametrize(
        "minted, expected",
        [
            ("refresh", TokenKind.ACCESS),
            ("recovery", TokenKind.ACCESS),
            ("access", TokenKind.REFRESH),
            ("access", TokenKind.RECOVERY),
        ],
    )
    def test_wrong_kind_rejected(self, codec, minted, expected):
        """A token is only accepted for the purpose it was minted for."""
        token = create_test_token(kind=minted)
        with pytest.raises(InvalidTokenError) as exc_info:
            codec.verify(token, expected)
        assert expected.value in exc_info.value.message

    def test_missing_kind_claim(self, codec):
        """Tokens without a kind should be rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "user-123",
                "email": "test@example.com",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(hours=1)).timestamp()),
            },
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            codec.verify(token, TokenKind.ACCESS)

    def test_unknown_kind_value(self, codec):
        """A kind outside the enum should be rejected."""
        with pytest.raises(InvalidTokenError):
            codec.verify(create_test_token(kind="admin"), TokenKind.ACCESS)
