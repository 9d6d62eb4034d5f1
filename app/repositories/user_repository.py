"""User repository for database access."""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    logger.info(f"[USER_REPOSITORY] Querying user by email: {email}")
    return db.query(User).filter(User.email == email.lower()).first()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    logger.info(f"[USER_REPOSITORY] Querying user by id: {user_id}")
    return db.get(User, user_id)


def create_user(db: Session, **fields: Any) -> User:
    """
    Insert a user and return it refreshed.

    Raises:
        sqlalchemy.exc.IntegrityError: If the email is already taken
    """
    fields["email"] = fields["email"].lower()
    fields.setdefault("providers", [])
    user = User(**fields)
    db.add(user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"[USER_REPOSITORY] ✗ Failed to create user: {fields['email']}", exc_info=True)
        raise
    db.refresh(user)
    logger.info(f"[USER_REPOSITORY] ✓ User created: id={user.id}")
    return user


def add_provider(db: Session, user: User, provider: str, provider_id: str) -> User:
    """Link an identity provider unless one with the same name is already linked."""
    if user.has_provider(provider):
        return user
    # Reassign so the JSON column is flagged dirty
    user.providers = [*(user.providers or []), {"provider": provider, "providerId": provider_id}]
    db.commit()
    db.refresh(user)
    logger.info(f"[USER_REPOSITORY] ✓ Provider linked: user_id={user.id}, provider={provider}")
    return user
