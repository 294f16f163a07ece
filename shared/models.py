"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Built by the auth gate from the user record the access token points at,
    and made available to route handlers via dependency injection.

    The password digest is deliberately absent: this object is safe to
    return from any handler.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: EmailStr = Field(..., description="User's email address")
    name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    avatar: Optional[str] = Field(None, description="Avatar URL")
    birthday: Optional[date] = Field(None, description="Date of birth")

    created_at: Optional[datetime] = Field(None, description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Drops the password digest if a raw row is passed in
    }
