"""JWT issuance/verification and admin role capabilities."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Set

import jwt

from app.core.config import Settings

logger = logging.getLogger(__name__)

ADMIN_ACCESS_TOKEN = "ADMIN_ACCESS_TOKEN"
ADMIN_REFRESH_TOKEN = "ADMIN_REFRESH_TOKEN"
# Type claim of storefront refresh tokens; user bearer auth accepts only untyped tokens
REFRESH_TOKEN = "REFRESH"


class AdminRole(str, Enum):
    """Role stored on an Admin record and carried in the token."""

    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class AdminCapability(str, Enum):
    """Capability flags that routes declare as required."""

    IS_ADMIN = "IS_ADMIN"
    IS_SUPER_ADMIN = "IS_SUPER_ADMIN"


def role_capabilities(role: Optional[str]) -> Set[AdminCapability]:
    """SUPER_ADMIN holds every capability ADMIN holds, plus its own."""
    if role == AdminRole.SUPER_ADMIN.value:
        return {AdminCapability.IS_ADMIN, AdminCapability.IS_SUPER_ADMIN}
    if role == AdminRole.ADMIN.value:
        return {AdminCapability.IS_ADMIN}
    return set()


def has_required_role(role: Optional[str], required: Iterable[AdminCapability]) -> bool:
    return bool(role_capabilities(role) & set(required))


class TokenService:
    """Signs and verifies HS256 tokens with the shared secret from settings."""

    def __init__(self, settings: Settings) -> None:
        self.secret = settings.auth_secret
        self.algorithm = settings.jwt_algorithm
        self.access_ttl_minutes = settings.jwt_expires
        self.refresh_ttl_minutes = settings.refresh_token_time

    def encode(self, claims: Dict[str, Any], expires_minutes: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": now,
            "exp": now + timedelta(minutes=expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry.

        Raises:
            jwt.InvalidTokenError: If the token is malformed, forged, or expired
        """
        return jwt.decode(token, self.secret, algorithms=[self.algorithm])

    def issue_pair(self, claims: Dict[str, Any]) -> Dict[str, str]:
        """Issue a short-lived access token and a longer-lived, typed refresh token."""
        return {
            "access_token": self.encode(claims, self.access_ttl_minutes),
            "refresh_token": self.encode(
                {**claims, "type": REFRESH_TOKEN}, self.refresh_ttl_minutes
            ),
        }

    def issue_admin_pair(self, admin_id: str, email: str, role: str) -> Dict[str, str]:
        claims = {"sub": admin_id, "email": email, "role": role}
        return {
            "access_token": self.encode(
                {**claims, "type": ADMIN_ACCESS_TOKEN}, self.access_ttl_minutes
            ),
            "refresh_token": self.encode(
                {**claims, "type": ADMIN_REFRESH_TOKEN}, self.refresh_ttl_minutes
            ),
        }


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an "Authorization: Bearer <token>" header value."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]
