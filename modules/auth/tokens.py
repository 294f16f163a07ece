"""
Signed token creation and verification.

Tokens are HS256 JWTs carrying ``sub``, ``email``, ``kind``, ``iat`` and
``exp``. Every verify names the kind it expects, so access, refresh and
recovery tokens are not interchangeable even though they share a key.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import ConfigurationError

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import TokenClaims, TokenKind

REQUIRED_CLAIMS = ["sub", "email", "kind", "exp", "iat"]


class TokenCodec:
    """
    Signs and verifies JWTs with a single process-wide secret.

    Args:
        secret: HMAC key. Must be non-empty.
        algorithm: JWT algorithm (default HS256)
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ConfigurationError("Token signing secret is empty")
        self._secret = secret
        self._algorithm = algorithm

    def sign(
        self,
        claims: dict[str, Any],
        ttl: timedelta,
        kind: TokenKind,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Create a signed token.

        Args:
            claims: Payload; must include ``sub`` and ``email``
            ttl: Lifetime from ``now``
            kind: Purpose the token may be used for
            now: Issue time (defaults to current UTC time)

        Returns:
            Encoded JWT string
        """
        issued = now or datetime.now(timezone.utc)
        payload = {
            **claims,
            "kind": kind.value,
            "iat": int(issued.timestamp()),
            "exp": int((issued + ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, kind: TokenKind) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            ExpiredTokenError: If ``exp`` has passed
            InvalidTokenError: Bad signature, malformed token, missing claims,
                or a token minted for a different purpose
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            claims = TokenClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Invalid token: unexpected claims")

        if claims.kind is not kind:
            raise InvalidTokenError(f"Invalid token: expected a {kind.value} token")
        return claims
