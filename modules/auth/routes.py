"""
Auth API endpoints.

Signup, signin, token refresh and password recovery are public. Only
change-password needs an authenticated user. Errors raised by the service
are turned into responses by the handlers in api/errors.py.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, status

from api.dependencies import get_auth_service
from api.models import ErrorResponse
from api.middleware.auth import extract_bearer_token, get_current_user
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from .exceptions import InvalidRecoveryTokenError, MissingTokenError
from .interfaces import IAuthService
from .models import (
    ChangePasswordRequest,
    MessageResponse,
    PasswordRecoveryRequest,
    RecoverPasswordRequest,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    TokenPair,
)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    }
)


@router.post(
    "/signup",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def sign_up(
    request: SignUpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignUpResponse:
    """Create an account. Returns 409 if the email is taken."""
    return await service.sign_up(request)


@router.post("/signin", response_model=SignInResponse)
async def sign_in(
    request: SignInRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignInResponse:
    """Exchange email and password for an access/refresh token pair."""
    return await service.sign_in(request.email, request.password)


@router.post("/refresh-token", response_model=TokenPair)
async def refresh_token(
    x_refresh_token: Optional[str] = Header(None, alias="x-refresh-token"),
    service: IAuthService = Depends(get_auth_service),
) -> TokenPair:
    """Rotate tokens using the refresh token in the ``x-refresh-token`` header."""
    if not x_refresh_token:
        raise MissingTokenError("x-refresh-token header missing")
    return await service.refresh_tokens(x_refresh_token)


@router.post(
    "/request-password-recovery",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def request_password_recovery(
    request: PasswordRecoveryRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Send a password reset link to the account's email."""
    return await service.request_password_recovery(request.email)


@router.post("/recover-password", response_model=MessageResponse)
async def recover_password(
    request: RecoverPasswordRequest,
    authorization: Optional[str] = Header(None),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Set a new password with the recovery token from the reset email.

    The token is sent as ``Authorization: Bearer <recovery token>``.
    """
    try:
        token = extract_bearer_token(authorization)
    except AuthenticationError:
        raise InvalidRecoveryTokenError("Recovery token missing or malformed")
    return await service.recover_password(token, request.new_password)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Change the current user's password. Requires the current password."""
    return await service.change_password(
        user.id, request.old_password, request.new_password
    )
