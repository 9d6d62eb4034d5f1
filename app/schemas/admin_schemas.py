"""Admin authentication schemas."""
from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from app.core.security import AdminRole
from app.schemas.auth_schemas import Password
from app.schemas.base_schemas import CamelModel


class AdminSigninRequest(CamelModel):
    email: EmailStr
    password: Password = Field(..., min_length=1, max_length=72)


class AdminCreateRequest(CamelModel):
    """Request schema for creating another admin account."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: Password = Field(..., min_length=6, max_length=72)
    avatar: Optional[str] = None
    role: AdminRole = AdminRole.ADMIN


class AdminProfile(CamelModel):
    id: int
    username: str
    email: str
    avatar: Optional[str] = None
    role: AdminRole
    is_active: bool


class AdminAuthResponse(CamelModel):
    admin: AdminProfile
    access_token: str
    refresh_token: str
    access_token_ttl: int
    refresh_token_ttl: int
