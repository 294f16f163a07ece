"""
Authentication service implementation.

Signup, signin, token refresh, password recovery and password change
over the user repository, the email notifier, bcrypt and PyJWT.
"""

import hashlib
import hmac
import logging
import uuid
from datetime import timedelta
from typing import Optional
from urllib.parse import urlencode

from fastapi.concurrency import run_in_threadpool

from shared.config import Settings, get_settings
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser
from modules.notifications.interfaces import INotifier
from modules.users.exceptions import AccountNotFoundError, EmailAlreadyRegisteredError
from modules.users.interfaces import IUserRepository
from modules.users.models import NewUser, User

from .exceptions import (
    InvalidCredentialsError,
    InvalidRecoveryTokenError,
    InvalidTokenError,
    IncorrectPasswordError,
    MissingTokenError,
    UserNotFoundError,
)
from .interfaces import IAuthService
from .models import (
    MessageResponse,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    TokenClaims,
    TokenKind,
    TokenPair,
)
from .passwords import PasswordHasher
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


def password_fingerprint(password_digest: str, key: str) -> str:
    """
    Short keyed fingerprint of a password digest, embedded in recovery tokens.

    HMAC-SHA256 under the signing secret, so a token holder learns nothing
    about the stored hash.
    """
    return hmac.new(key.encode(), password_digest.encode(), hashlib.sha256).hexdigest()[:16]


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are stateless. Access tokens are checked against the user table
    on every request; refresh tokens are trusted as signed. Recovery tokens
    carry a fingerprint of the password digest they were issued against,
    so they stop working once the password changes.
    """

    def __init__(
        self,
        users: IUserRepository,
        notifier: INotifier,
        settings: Optional[Settings] = None,
        hasher: Optional[PasswordHasher] = None,
        codec: Optional[TokenCodec] = None,
    ):
        self._settings = settings or get_settings()
        self._secret = self._settings.require_jwt_secret()
        self._users = users
        self._notifier = notifier
        self._hasher = hasher or PasswordHasher(rounds=self._settings.bcrypt_rounds)
        self._codec = codec or TokenCodec(
            self._secret,
            algorithm=self._settings.jwt_algorithm,
        )
        self._dummy_digest: Optional[str] = None

    # -------------------------------------------------------------------------
    # Signup / signin
    # -------------------------------------------------------------------------

    async def sign_up(self, request: SignUpRequest) -> SignUpResponse:
        """
        Create an account and send a welcome email.

        The lookup below gives a friendly error in the common case; the
        unique constraint on users.email settles concurrent signups.
        """
        email = request.email.lower()
        if self._users.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        digest = await run_in_threadpool(self._hasher.hash, request.password)
        user = self._users.create(
            NewUser(
                id=str(uuid.uuid4()),
                name=request.name,
                last_name=request.last_name,
                email=email,
                password=digest,
                avatar=self._settings.default_avatar_url,
                birthday=request.birthday,
            )
        )
        logger.info("Registered user %s", user.id)

        preview_url = None
        try:
            receipt = await self._notifier.send(
                to=user.email,
                subject="Welcome to TodoList",
                template="welcome",
                variables={
                    "name": user.name,
                    "email": user.email,
                    "app_url": self._settings.frontend_url,
                },
                text=f"Welcome to TodoList, {user.name}!",
            )
            preview_url = receipt.preview_url
        except ExternalServiceError:
            logger.exception("Welcome email to user %s failed", user.id)

        return SignUpResponse(user=user.to_profile(), preview_url=preview_url)

    async def sign_in(self, email: str, password: str) -> SignInResponse:
        """Check credentials. Both failure branches raise the same error."""
        user = self._users.get_by_email(email.lower())

        if user is None:
            # Spend the same bcrypt time as a real check
            await run_in_threadpool(self._hasher.verify, password, await self._get_dummy_digest())
            logger.warning("Sign-in failed: unknown email")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(self._hasher.verify, password, user.password):
            logger.warning("Sign-in failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError()

        pair = self._mint_pair(user.id, user.email)
        logger.info("User %s signed in", user.id)
        return SignInResponse(user=user.to_profile(), **pair.model_dump())

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """
        Rotate an access/refresh pair.

        Uses the refresh token's claims as signed; the user table is not
        consulted here.
        """
        if not refresh_token:
            raise MissingTokenError("Refresh token required")

        claims = self._codec.verify(refresh_token, TokenKind.REFRESH)
        logger.info("Refreshed tokens for user %s", claims.user_id)
        return self._mint_pair(claims.user_id, claims.email)

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """Verify an access token and load the user it names."""
        if not token:
            raise MissingTokenError()

        claims = self._codec.verify(token, TokenKind.ACCESS)
        user = self._users.get_by_id(claims.user_id)
        if user is None:
            raise UserNotFoundError(claims.user_id)
        return user.to_principal()

    # -------------------------------------------------------------------------
    # Passwords
    # -------------------------------------------------------------------------

    async def request_password_recovery(self, email: str) -> MessageResponse:
        """
        Email a reset link carrying a short-lived recovery token.

        A failed send is logged with its traceback; the caller still gets
        the confirmation message.
        """
        user = self._users.get_by_email(email.lower())
        if user is None:
            raise AccountNotFoundError("No account is registered with this email")

        ttl = timedelta(seconds=self._settings.recovery_token_ttl_seconds)
        token = self._codec.sign(
            {
                "sub": user.id,
                "email": user.email,
                "pwd": password_fingerprint(user.password, self._secret),
            },
            ttl,
            TokenKind.RECOVERY,
        )
        reset_link = f"{self._settings.password_reset_url}?{urlencode({'token': token})}"

        try:
            await self._notifier.send(
                to=user.email,
                subject="Reset your TodoList password",
                template="password_reset",
                variables={
                    "name": user.name,
                    "reset_link": reset_link,
                    "expires_minutes": str(int(ttl.total_seconds() // 60)),
                },
                text=f"Reset your password: {reset_link}",
            )
            logger.info("Password recovery email sent to user %s", user.id)
        except ExternalServiceError:
            logger.exception("Password recovery email to user %s failed", user.id)

        return MessageResponse(message="Password recovery email sent")

    async def recover_password(self, token: str, new_password: str) -> MessageResponse:
        """Reset a password with a recovery token; the old password is not needed."""
        if not token:
            raise InvalidRecoveryTokenError("Recovery token required")

        try:
            claims = self._codec.verify(token, TokenKind.RECOVERY)
        except InvalidTokenError as e:
            raise InvalidRecoveryTokenError() from e

        user = self._users.get_by_id(claims.user_id)
        if user is None or not self._matches_current_password(claims, user):
            raise InvalidRecoveryTokenError()

        digest = await run_in_threadpool(self._hasher.hash, new_password)
        if self._users.update_password(user.id, digest) is None:
            raise InvalidRecoveryTokenError()

        logger.info("Password reset via recovery token for user %s", user.id)
        return MessageResponse(message="Password updated successfully")

    async def change_password(
        self, user_id: str, old_password: str, new_password: str
    ) -> MessageResponse:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError()

        if not await run_in_threadpool(self._hasher.verify, old_password, user.password):
            logger.warning("Password change rejected for user %s: wrong current password", user_id)
            raise IncorrectPasswordError()

        digest = await run_in_threadpool(self._hasher.hash, new_password)
        if self._users.update_password(user_id, digest) is None:
            raise AccountNotFoundError()

        logger.info("Password changed for user %s", user_id)
        return MessageResponse(message="Password changed successfully")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _mint_pair(self, user_id: str, email: str) -> TokenPair:
        claims = {"sub": user_id, "email": email}
        return TokenPair(
            access_token=self._codec.sign(
                claims,
                timedelta(seconds=self._settings.access_token_ttl_seconds),
                TokenKind.ACCESS,
            ),
            refresh_token=self._codec.sign(
                claims,
                timedelta(seconds=self._settings.refresh_token_ttl_seconds),
                TokenKind.REFRESH,
            ),
        )

    def _matches_current_password(self, claims: TokenClaims, user: User) -> bool:
        if claims.pwd is None:
            return False
        return hmac.compare_digest(claims.pwd, password_fingerprint(user.password, self._secret))

    async def _get_dummy_digest(self) -> str:
        if self._dummy_digest is None:
            self._dummy_digest = await run_in_threadpool(
                self._hasher.hash, uuid.uuid4().hex
            )
        return self._dummy_digest


