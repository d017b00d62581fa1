"""
Pydantic schemas defining the contract for user identity and authentication
across the request boundary and the Service Layer.
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from .base import RequestModel

PASSWORD_MIN_LENGTH = 6
EMAIL_MAX_LENGTH = 180

# --- Input Schemas (Requests / Commands) ---


class UserRequest(RequestModel):
    """
    Schema for registration requests.
    The email is lower-cased so that lookups and the unique index are case-insensitive.
    """

    email: EmailStr = Field(..., description="User's unique email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description="User's password (min 6 characters, will be hashed)",
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email cannot exceed {EMAIL_MAX_LENGTH} characters")
        return v.lower()


class LoginRequest(RequestModel):
    """
    Minimal schema for the authentication command. No length policy here: a
    wrong password must fail as bad credentials, not as invalid input.
    """

    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's plain text password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class PasswordChangeRequest(RequestModel):
    """
    Schema for changing password (requires current password verification).
    Passwords are compared verbatim, so whitespace is not stripped here.
    """

    model_config = {"str_strip_whitespace": False}

    current_password: str = Field(..., min_length=1, description="Current password for verification")
    new_password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, description="New password (minimum 6 characters)"
    )
    confirm_password: str = Field(..., min_length=1, description="Repeat of the new password")

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChangeRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("Password confirmation must match new password")
        return self


class ActivationRequest(RequestModel):
    is_active: bool = Field(..., description="Whether the user account may authenticate")


# --- Output Schemas (Responses) ---


class UserResponse(BaseModel):
    """
    Response schema for user information. Never carries the password hash.
    """

    # Configuration allows mapping from SQLAlchemy ORM objects
    model_config = {"from_attributes": True}

    id: uuid.UUID = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    is_active: bool = Field(..., description="Whether the user account is active")
    all_roles: list[str] = Field(..., serialization_alias="roles", description="Granted roles")

    created_at: datetime = Field(..., description="Date and time of user creation")
    updated_at: datetime = Field(..., description="Date and time of last update")


class TokenResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
