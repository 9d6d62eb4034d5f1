"""Storefront authentication: local signup/signin, Google login, profile."""
from __future__ import annotations

import logging
from typing import Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from app.core.security import TokenService
from app.models.user import User
from app.repositories.user_repository import (
    add_provider,
    create_user,
    get_user_by_email,
    get_user_by_id,
)
from app.schemas.auth_schemas import (
    AuthResponse,
    GoogleProfile,
    SigninRequest,
    SignupRequest,
    UserProfile,
)
from app.services.google_auth_client import GoogleAuthClient, GoogleAuthClientError
from app.utils.hash import compare_hash, make_hash

logger = logging.getLogger(__name__)

GOOGLE_PROVIDER = "google"


class AuthService:
    """Issues token pairs for storefront users."""

    def __init__(self, token_service: TokenService, google_client: GoogleAuthClient) -> None:
        self.token_service = token_service
        self.google_client = google_client

    def signup(self, db: Session, request: SignupRequest) -> AuthResponse:
        """
        Register a local account.

        Raises:
            ConflictError: If the email is already registered
        """
        email = request.email.lower()
        logger.info(f"[AUTH_SERVICE] Signup requested: email={email}")

        if get_user_by_email(db, email):
            logger.warning(f"[AUTH_SERVICE] ✗ Email already exists: {email}")
            raise ConflictError("Email already exists")

        try:
            user = create_user(
                db,
                email=email,
                username=request.username,
                password=make_hash(request.password),
            )
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email
            raise ConflictError("Email already exists") from exc

        return self._auth_response(user)

    def signin(self, db: Session, request: SigninRequest) -> AuthResponse:
        """
        Authenticate with email and password.

        Raises:
            UnauthorizedError: Unknown email, federated-only account, or wrong password
        """
        user = get_user_by_email(db, request.email)
        if not user or not compare_hash(request.password, user.password):
            logger.warning(f"[AUTH_SERVICE] ✗ Invalid credentials: email={request.email}")
            raise UnauthorizedError("Invalid credentials")

        logger.info(f"[AUTH_SERVICE] ✓ Signin: user_id={user.id}")
        return self._auth_response(user)

    async def google_signin(self, db: Session, id_token: str) -> AuthResponse:
        """Verify a Google ID token, then log the matching user in."""
        try:
            profile = await self.google_client.verify_id_token(id_token)
        except GoogleAuthClientError as exc:
            logger.warning(f"[AUTH_SERVICE] ✗ Google token rejected: {exc}")
            raise UnauthorizedError("Invalid Google token") from exc
        return self.handle_google_auth(db, profile)

    def handle_google_auth(self, db: Session, profile: GoogleProfile) -> AuthResponse:
        """
        Find or create the user for a verified Google profile.

        An existing account with the same email gets the Google provider
        linked once; a new account is created with an empty password.

        Raises:
            UnauthorizedError: If Google has not verified the email
        """
        if not profile.email_verified:
            raise UnauthorizedError("Google email not verified")

        user = get_user_by_email(db, profile.email)
        if user:
            user = add_provider(db, user, GOOGLE_PROVIDER, profile.sub)
        else:
            logger.info(f"[AUTH_SERVICE] Creating user from Google profile: email={profile.email}")
            try:
                user = create_user(
                    db,
                    email=profile.email,
                    username=profile.name,
                    avatar=profile.picture,
                    password="",
                    providers=[{"provider": GOOGLE_PROVIDER, "providerId": profile.sub}],
                )
            except IntegrityError as exc:
                raise ConflictError("Email already exists") from exc

        return self._auth_response(user)

    def generate_tokens(self, user_id: int, email: str) -> Dict[str, str]:
        """Access and refresh tokens carrying sub and email claims."""
        return self.token_service.issue_pair({"sub": str(user_id), "email": email})

    def get_profile(self, db: Session, user_id: int) -> UserProfile:
        user = get_user_by_id(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserProfile.model_validate(user)

    def _auth_response(self, user: User) -> AuthResponse:
        tokens = self.generate_tokens(user.id, user.email)
        return AuthResponse(
            user=UserProfile.model_validate(user),
            access_token=tokens["access_token"],
            refresh_token=tokens["refresh_token"],
            access_token_ttl=self.token_service.access_ttl_minutes,
            refresh_token_ttl=self.token_service.refresh_ttl_minutes,
        )
