"""
Authentication gate.

HTTP middleware that runs in front of every route except an explicit
allow-list of public paths. It validates the bearer access token through
the auth service and stores the resulting principal on ``request.state.user``.
Route handlers read it with the ``get_current_user`` dependency.
"""

import logging
import re
from typing import Optional

from fastapi import Depends, FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from modules.auth.exceptions import InvalidTokenError, MissingTokenError
from shared.exceptions import AuthenticationError, TodoListError
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service
from ..errors import error_response

logger = logging.getLogger(__name__)

# Paths reachable without an access token
PUBLIC_PATHS = frozenset(
    {
        "/auth/signup",
        "/auth/signin",
        "/auth/refresh-token",
        "/auth/request-password-recovery",
        "/auth/recover-password",
        "/health",
        "/ready",
        "/docs",
        "/docs/oauth2-redirect",
        "/redoc",
        "/openapi.json",
    }
)

_BEARER = re.compile(r"Bearer\s+(\S+)")


def is_public(method: str, path: str) -> bool:
    """Pre-flight requests and allow-listed paths skip the gate."""
    if method == "OPTIONS":
        return True
    normalized = path.rstrip("/") or "/"
    return normalized in PUBLIC_PATHS


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    Raises:
        MissingTokenError: If the header is absent
        InvalidTokenError: If the header is not ``Bearer`` plus a token
    """
    if authorization is None:
        raise MissingTokenError("Authorization header missing")
    match = _BEARER.fullmatch(authorization.strip())
    if match is None:
        raise InvalidTokenError("Malformed authorization header")
    return match.group(1)


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    Rejects unauthenticated requests before they reach a handler.

    Every token failure (expired, bad signature, wrong kind, deleted user)
    is reported as the same 401 so callers cannot tell them apart.
    Infrastructure failures keep their own status (e.g. 503).
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if is_public(request.method, request.url.path):
            return await call_next(request)

        try:
            token = extract_bearer_token(request.headers.get("Authorization"))
        except AuthenticationError as e:
            return error_response(e)

        try:
            service = _resolve_auth_service(request.app)
            user = await service.validate_token(token)
        except AuthenticationError as e:
            logger.info(
                "Rejected token for %s %s: %s", request.method, request.url.path, e.code
            )
            return error_response(InvalidTokenError("Invalid or expired token"))
        except TodoListError as e:
            logger.error(
                "Auth gate failed for %s %s: %s", request.method, request.url.path, e.message
            )
            return error_response(e)

        request.state.user = user
        return await call_next(request)


def _resolve_auth_service(app: FastAPI):
    """Honor app.dependency_overrides so tests can swap the service."""
    provider = app.dependency_overrides.get(get_auth_service, get_auth_service)
    return provider()


def get_current_user(request: Request) -> AuthenticatedUser:
    """
    Dependency that returns the principal set by the auth gate.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    user = getattr(request.state, "user", None)
    if user is None:
        raise MissingTokenError("Authentication required")
    return user


# Type alias for cleaner route definitions
RequireAuth = Depends(get_current_user)
