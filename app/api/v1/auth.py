"""Storefront authentication endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_container, get_current_user_id
from app.core.container import ServiceContainer
from app.core.database import get_db
from app.schemas.auth_schemas import (
    AuthResponse,
    GoogleAuthRequest,
    SigninRequest,
    SignupRequest,
    UserProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AuthResponse:
    """
    Register a local account and return a token pair.

    Returns 409 when the email is already registered.
    """
    logger.info(f"[API] POST /auth/signup: email={request.email}")
    return container.auth_service.signup(db, request)


@router.post("/signin", response_model=AuthResponse)
async def signin(
    request: SigninRequest,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AuthResponse:
    logger.info(f"[API] POST /auth/signin: email={request.email}")
    return container.auth_service.signin(db, request)


@router.post("/google", response_model=AuthResponse)
async def google_signin(
    request: GoogleAuthRequest,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AuthResponse:
    """Log in (or sign up) with a Google ID token."""
    logger.info("[API] POST /auth/google")
    return await container.auth_service.google_signin(db, request.id_token)


@router.get("/profile", response_model=UserProfile)
async def get_profile(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> UserProfile:
    return container.auth_service.get_profile(db, user_id)
