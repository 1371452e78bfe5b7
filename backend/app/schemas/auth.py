# app/schemas/auth.py
"""
Pydantic schemas for registration and login.
"""
from pydantic import EmailStr, Field, field_validator

from .base import StrictBody

__all__ = ["RegisterIn", "LoginIn"]


class _EmailBody(StrictBody):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        # Stored lowercase, so uniqueness is case-insensitive
        value = value.lower()
        if not 3 <= len(value) <= 50:
            raise ValueError("length must be between 3 and 50 characters")
        return value


class RegisterIn(_EmailBody):
    """Request model for account registration."""
    name: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=5, max_length=500)
    confirmpw: str = Field(min_length=5, max_length=500)


class LoginIn(_EmailBody):
    """Request model for login."""
    password: str = Field(min_length=5, max_length=500)
