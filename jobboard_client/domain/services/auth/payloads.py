from __future__ import annotations

"""Request-payload Pydantic models for the backend auth endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Payload expected by ``POST /auth/login``."""

    email: str = Field(..., examples=["john@example.com"])
    password: str = Field(..., examples=["Seeker123!"])


class RegisterRequest(BaseModel):
    """Payload expected by ``POST /auth/register``.

    Extra fields (``username``, ``first_name``...) are forwarded untouched for
    backends that ask for more than the usual three. Missing fields are simply
    not sent; the backend decides what is required and says so in its error.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    email: Optional[str] = Field(default=None, examples=["john@example.com"])
    password: Optional[str] = Field(default=None, examples=["Seeker123!"])
    name: Optional[str] = Field(default=None, examples=["John Doe"])


class RefreshRequest(BaseModel):
    """Payload expected by ``POST /auth/refresh``."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(..., alias="refreshToken", min_length=1)


class UpdateProfileRequest(BaseModel):
    """Payload expected by ``PUT /users/profile``; unset fields are not sent."""

    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
