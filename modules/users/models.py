"""
User module data models.

``User`` is the full record as stored, including the password digest.
It never leaves the service layer; everything returned over HTTP is a
``UserProfile``.
"""

from datetime import date, datetime
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import AuthenticatedUser


class User(BaseModel):
    """A stored user record."""

    id: str = Field(..., description="User ID (UUID)")
    name: str
    last_name: str
    email: EmailStr
    password: str = Field(..., repr=False, description="bcrypt digest")
    avatar: Optional[str] = None
    birthday: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_profile(self) -> "UserProfile":
        """Drop the password digest."""
        return UserProfile(**self.model_dump(exclude={"password"}))

    def to_principal(self) -> AuthenticatedUser:
        """Build the request principal for this user."""
        return AuthenticatedUser(**self.model_dump(exclude={"password"}))


class UserProfile(BaseModel):
    """Public view of a user."""

    id: str
    name: str
    last_name: str
    email: EmailStr
    avatar: Optional[str] = None
    birthday: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NewUser(BaseModel):
    """Fields needed to insert a user row."""

    id: str
    name: str
    last_name: str
    email: EmailStr
    password: str = Field(..., repr=False)
    avatar: str
    birthday: Optional[date] = None

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class UpdateProfileRequest(BaseModel):
    """Partial profile update. Email and password are changed elsewhere."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    avatar: Optional[str] = Field(None, max_length=2048)
    birthday: Optional[date] = None
