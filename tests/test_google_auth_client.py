"""Tests for Google ID token verification over a mocked transport."""
from __future__ import annotations

import httpx
import pytest

from app.services.google_auth_client import GoogleAuthClient, GoogleAuthClientError


def _client(settings, handler) -> GoogleAuthClient:
    return GoogleAuthClient(settings, transport=httpx.MockTransport(handler))


def _claims(**overrides) -> dict:
    claims = {
        "aud": "client-123.apps.googleusercontent.com",
        "sub": "1234567890",
        "email": "jane@example.com",
        "email_verified": "true",
        "name": "Jane Doe",
        "picture": "https://example.com/jane.png",
    }
    claims.update(overrides)
    return claims


class TestGoogleAuthClient:
    @pytest.mark.asyncio
    async def test_valid_token_returns_profile(self, settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["id_token"] = request.url.params.get("id_token")
            return httpx.Response(200, json=_claims())

        profile = await _client(settings, handler).verify_id_token("abc.def.ghi")

        assert seen["id_token"] == "abc.def.ghi"
        assert profile.sub == "1234567890"
        assert profile.email == "jane@example.com"
        assert profile.email_verified is True
        assert profile.name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_unverified_email_flag_is_parsed(self, settings):
        client = _client(settings, lambda request: httpx.Response(200, json=_claims(email_verified="false")))

        profile = await client.verify_id_token("token")

        assert profile.email_verified is False

    @pytest.mark.asyncio
    async def test_audience_mismatch_is_rejected(self, settings):
        client = _client(settings, lambda request: httpx.Response(200, json=_claims(aud="someone-else")))

        with pytest.raises(GoogleAuthClientError):
            await client.verify_id_token("token")

    @pytest.mark.asyncio
    async def test_rejected_token_raises(self, settings):
        client = _client(
            settings,
            lambda request: httpx.Response(400, json={"error": "invalid_token"}),
        )

        with pytest.raises(GoogleAuthClientError):
            await client.verify_id_token("expired")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GoogleAuthClientError):
            await _client(settings, handler).verify_id_token("token")

    @pytest.mark.asyncio
    async def test_missing_email_raises(self, settings):
        claims = _claims()
        del claims["email"]
        client = _client(settings, lambda request: httpx.Response(200, json=claims))

        with pytest.raises(GoogleAuthClientError):
            await client.verify_id_token("token")
