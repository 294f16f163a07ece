"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from modules.users.models import UserProfile


class TokenKind(str, Enum):
    """What a signed token is allowed to be used for."""

    ACCESS = "access"
    REFRESH = "refresh"
    RECOVERY = "recovery"


class TokenClaims(BaseModel):
    """
    Decoded JWT payload.

    ``kind`` is checked against the expected use on every verify, so a
    refresh or recovery token can never pass as an access token.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    kind: TokenKind = Field(..., description="Token purpose")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    pwd: Optional[str] = Field(
        None, description="Password digest fingerprint (recovery tokens only)"
    )

    @property
    def user_id(self) -> str:
        return self.sub


class TokenPair(BaseModel):
    """Access and refresh token minted together."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class SignUpRequest(BaseModel):
    """New account details."""

    name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    birthday: Optional[date] = None


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class PasswordRecoveryRequest(BaseModel):
    email: EmailStr


class RecoverPasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=6, max_length=72)


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=72)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class SignUpResponse(BaseModel):
    user: UserProfile
    preview_url: Optional[str] = Field(
        None, description="Preview link for the welcome email, if the mail server provides one"
    )


class SignInResponse(TokenPair):
    user: UserProfile


class MessageResponse(BaseModel):
    message: str
