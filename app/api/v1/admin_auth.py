"""Back-office authentication endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.api.deps import admin_auth_guard, current_admin_id, get_container
from app.core.container import ServiceContainer
from app.core.database import get_db
from app.schemas.admin_schemas import (
    AdminAuthResponse,
    AdminCreateRequest,
    AdminProfile,
    AdminSigninRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/auth", tags=["admin-auth"])


@router.post("/signin", response_model=AdminAuthResponse)
async def admin_signin(
    request: AdminSigninRequest,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AdminAuthResponse:
    logger.info(f"[API] POST /admin/auth/signin: email={request.email}")
    return container.admin_auth_service.signin(db, request)


@router.get(
    "/profile",
    response_model=AdminProfile,
    dependencies=[Depends(admin_auth_guard)],
)
async def admin_profile(
    http_request: Request,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AdminProfile:
    return container.admin_auth_service.get_profile(db, current_admin_id(http_request))


@router.post(
    "/admins",
    response_model=AdminProfile,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(admin_auth_guard)],
)
async def create_admin(
    request: AdminCreateRequest,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AdminProfile:
    """Create another admin account (SUPER_ADMIN only)."""
    logger.info(f"[API] POST /admin/auth/admins: email={request.email}, role={request.role.value}")
    return container.admin_auth_service.create_admin(db, request)
