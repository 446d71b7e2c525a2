"""
Pydantic models for user data.

The password is stored as an opaque string and never leaves the
service: the API answers with ``UserRead``, which omits it.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class UserBase(CamelModel):
    username: str = Field(..., min_length=1, examples=["john.doe"])
    display_name: Optional[str] = Field(None, examples=["John Doe"])
    initials: Optional[str] = Field(None, max_length=4, examples=["JD"])


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., min_length=1)


class User(UserCreate):
    """Stored user, password included."""

    id: int

    model_config = {"frozen": True}


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
