"""Back-office authentication and admin account management."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from app.core.security import AdminRole, TokenService
from app.repositories.admin_repository import (
    create_admin,
    get_admin_by_email,
    get_admin_by_id,
)
from app.schemas.admin_schemas import (
    AdminAuthResponse,
    AdminCreateRequest,
    AdminProfile,
    AdminSigninRequest,
)
from app.utils.hash import compare_hash, make_hash

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Signs admins in with tokens typed for the admin guard."""

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    def signin(self, db: Session, request: AdminSigninRequest) -> AdminAuthResponse:
        """
        Raises:
            UnauthorizedError: Unknown email, inactive account, or wrong password
        """
        admin = get_admin_by_email(db, request.email)
        if not admin or not admin.is_active or not compare_hash(request.password, admin.password):
            logger.warning(f"[ADMIN_AUTH_SERVICE] ✗ Invalid credentials: email={request.email}")
            raise UnauthorizedError("Invalid credentials")

        tokens = self.token_service.issue_admin_pair(str(admin.id), admin.email, admin.role)
        logger.info(f"[ADMIN_AUTH_SERVICE] ✓ Admin signin: id={admin.id}, role={admin.role}")
        return AdminAuthResponse(
            admin=AdminProfile.model_validate(admin),
            access_token=tokens["access_token"],
            refresh_token=tokens["refresh_token"],
            access_token_ttl=self.token_service.access_ttl_minutes,
            refresh_token_ttl=self.token_service.refresh_ttl_minutes,
        )

    def get_profile(self, db: Session, admin_id: int) -> AdminProfile:
        admin = get_admin_by_id(db, admin_id)
        if not admin:
            raise NotFoundError("Admin not found")
        return AdminProfile.model_validate(admin)

    def create_admin(self, db: Session, request: AdminCreateRequest) -> AdminProfile:
        if get_admin_by_email(db, request.email):
            raise ConflictError("Email already exists")
        try:
            admin = create_admin(
                db,
                username=request.username,
                email=request.email,
                password=make_hash(request.password),
                avatar=request.avatar,
                role=request.role.value,
            )
        except IntegrityError as exc:
            raise ConflictError("Email already exists") from exc
        return AdminProfile.model_validate(admin)

    def ensure_bootstrap_admin(self, db: Session, settings: Settings) -> None:
        """Create the configured SUPER_ADMIN once, if credentials are set."""
        if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
            return
        if get_admin_by_email(db, settings.bootstrap_admin_email):
            return
        create_admin(
            db,
            username=settings.bootstrap_admin_username,
            email=settings.bootstrap_admin_email,
            password=make_hash(settings.bootstrap_admin_password),
            role=AdminRole.SUPER_ADMIN.value,
        )
        logger.info(f"[ADMIN_AUTH_SERVICE] ✓ Bootstrap super admin created: {settings.bootstrap_admin_email}")
