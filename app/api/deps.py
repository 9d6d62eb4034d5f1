"""Shared FastAPI dependencies: service container, user auth and the admin guard."""
from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, FrozenSet, Optional, Tuple

import jwt
from fastapi import Path, Request

from app.core.container import ServiceContainer
from app.core.database import MAX_ID
from app.core.exceptions import UnauthorizedError
from app.core.security import (
    ADMIN_ACCESS_TOKEN,
    AdminCapability,
    extract_bearer_token,
    has_required_role,
)

logger = logging.getLogger(__name__)

ANY_ADMIN = frozenset({AdminCapability.IS_ADMIN})
SUPER_ADMIN_ONLY = frozenset({AdminCapability.IS_SUPER_ADMIN})

# Record id in a path segment; out-of-range values are a 422, not a driver overflow
IdPath = Annotated[int, Path(ge=1, le=MAX_ID)]

# (method, path template) -> capabilities, any one of which grants access.
# Routes behind the guard but missing here are refused.
ADMIN_ROUTE_ROLES: Dict[Tuple[str, str], FrozenSet[AdminCapability]] = {
    ("GET", "/admin/auth/profile"): ANY_ADMIN,
    ("POST", "/admin/auth/admins"): SUPER_ADMIN_ONLY,
    ("GET", "/admin/categories"): ANY_ADMIN,
    ("POST", "/admin/categories"): ANY_ADMIN,
    ("GET", "/admin/categories/{category_id}"): ANY_ADMIN,
    ("PATCH", "/admin/categories/{category_id}"): ANY_ADMIN,
    ("DELETE", "/admin/categories/{category_id}"): SUPER_ADMIN_ONLY,
    ("GET", "/admin/brands"): ANY_ADMIN,
    ("POST", "/admin/brands"): ANY_ADMIN,
    ("PATCH", "/admin/brands/{brand_id}"): ANY_ADMIN,
    ("GET", "/admin/products"): ANY_ADMIN,
    ("POST", "/admin/products"): ANY_ADMIN,
    ("PATCH", "/admin/products/bulk"): ANY_ADMIN,
    ("GET", "/admin/products/{product_id}"): ANY_ADMIN,
    ("PATCH", "/admin/products/{product_id}"): ANY_ADMIN,
    ("DELETE", "/admin/products/{product_id}"): SUPER_ADMIN_ONLY,
    ("POST", "/upload/single"): ANY_ADMIN,
    ("POST", "/upload/multiple"): ANY_ADMIN,
}


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def authorize_admin(payload: Dict[str, Any], method: str, path: str) -> bool:
    """
    Decide whether a verified token payload may call the given route.

    Args:
        payload: Decoded token claims
        method: HTTP method
        path: Route path template, e.g. "/admin/products/{product_id}"

    Returns:
        True only for admin access tokens whose role covers the route
    """
    if payload.get("type") != ADMIN_ACCESS_TOKEN:
        return False
    required = ADMIN_ROUTE_ROLES.get((method.upper(), path))
    if not required:
        return False
    return has_required_role(payload.get("role"), required)


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _decode(request: Request, token: Optional[str]) -> Optional[Dict[str, Any]]:
    if not token:
        return None
    try:
        return get_container(request).token_service.decode(token)
    except jwt.InvalidTokenError as exc:
        logger.info(f"[AUTH_GUARD] Token rejected: {type(exc).__name__}")
        return None


async def admin_auth_guard(request: Request) -> Dict[str, Any]:
    """
    Gate an admin route; the verified payload is stored on request.state.admin.

    Raises:
        UnauthorizedError: For a missing, invalid, non-admin or under-privileged token
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    payload = _decode(request, token)
    path = _route_path(request)

    if payload is None or not authorize_admin(payload, request.method, path):
        logger.warning(f"[AUTH_GUARD] ✗ Admin access denied: {request.method} {path}")
        raise UnauthorizedError("Unauthorized")

    request.state.admin = payload
    return payload


async def get_current_user_id(request: Request) -> int:
    """
    Resolve the storefront user id from a bearer access token.

    Raises:
        UnauthorizedError: For a missing or invalid token, a refresh token, or an admin token
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    payload = _decode(request, token)
    if payload is None or payload.get("type") is not None:
        raise UnauthorizedError("Unauthorized")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise UnauthorizedError("Unauthorized") from exc


def current_admin_id(request: Request) -> int:
    """Id of the admin already admitted by admin_auth_guard."""
    try:
        return int(request.state.admin["sub"])
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise UnauthorizedError("Unauthorized") from exc
