"""Client for verifying Google ID tokens."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import Settings
from app.schemas.auth_schemas import GoogleProfile

logger = logging.getLogger(__name__)


class GoogleAuthClientError(RuntimeError):
    """Raised when an ID token cannot be verified."""


class GoogleAuthClient:
    """Verifies ID tokens against Google's tokeninfo endpoint."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.tokeninfo_url = settings.google_tokeninfo_url
        self.client_id = settings.google_client_id
        self._timeout = httpx.Timeout(10.0)
        self._transport = transport

    async def verify_id_token(self, id_token: str) -> GoogleProfile:
        """
        Verify an ID token and return its profile claims.

        Raises:
            GoogleAuthClientError: On transport failure, a rejected token, or
                an audience that does not match the configured client id
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self.tokeninfo_url, params={"id_token": id_token})
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise GoogleAuthClientError("Google token verification timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise GoogleAuthClientError(
                f"Google rejected the token: status={exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            raise GoogleAuthClientError(f"Google transport error: {exc}") from exc

        try:
            claims: Dict[str, Any] = response.json()
        except ValueError as exc:
            raise GoogleAuthClientError("Google returned a non-JSON response") from exc

        if self.client_id and claims.get("aud") != self.client_id:
            logger.warning(f"[GOOGLE_AUTH] ✗ Audience mismatch: aud={claims.get('aud')}")
            raise GoogleAuthClientError("Token was issued for another client")

        if not claims.get("sub") or not claims.get("email"):
            raise GoogleAuthClientError("Token is missing sub or email")

        # tokeninfo reports booleans as the strings "true"/"false"
        email_verified = str(claims.get("email_verified", "false")).lower() == "true"

        logger.info(f"[GOOGLE_AUTH] ✓ Token verified: email={claims['email']}, verified={email_verified}")
        return GoogleProfile(
            sub=str(claims["sub"]),
            email=claims["email"],
            email_verified=email_verified,
            name=claims.get("name"),
            picture=claims.get("picture"),
        )
