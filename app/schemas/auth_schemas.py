"""Storefront authentication request and response schemas."""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import AfterValidator, EmailStr, Field

from app.schemas.base_schemas import CamelModel
from app.utils.hash import check_password_length

# Characters and bytes differ for non-ASCII input; bcrypt counts bytes
Password = Annotated[str, AfterValidator(check_password_length)]


class SignupRequest(CamelModel):
    """Request schema for local signup."""

    email: EmailStr = Field(..., description="Login email", examples=["johndoe@example.com"])
    username: str = Field(..., min_length=1, max_length=255, examples=["John Doe"])
    password: Password = Field(..., min_length=6, max_length=72, examples=["password123"])


class SigninRequest(CamelModel):
    email: EmailStr
    password: Password = Field(..., min_length=1, max_length=72)


class GoogleAuthRequest(CamelModel):
    """Google ID token obtained by the storefront client."""

    id_token: str = Field(..., min_length=1)


class GoogleProfile(CamelModel):
    """Verified claims of a Google ID token."""

    sub: str
    email: str
    email_verified: bool = False
    name: Optional[str] = None
    picture: Optional[str] = None


class UserProfile(CamelModel):
    """Redacted user view (no password)."""

    id: int
    email: str
    username: Optional[str] = None
    avatar: Optional[str] = None


class AuthResponse(CamelModel):
    """Token pair plus the authenticated user."""

    user: UserProfile
    access_token: str
    refresh_token: str
    access_token_ttl: int = Field(..., description="Access token lifetime in minutes")
    refresh_token_ttl: int = Field(..., description="Refresh token lifetime in minutes")
