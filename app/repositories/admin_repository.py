"""Admin repository for database access."""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.models.admin import Admin

logger = logging.getLogger(__name__)


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    logger.info(f"[ADMIN_REPOSITORY] Querying admin by email: {email}")
    return db.query(Admin).filter(Admin.email == email.strip().lower()).first()


def get_admin_by_id(db: Session, admin_id: int) -> Optional[Admin]:
    return db.get(Admin, admin_id)


def create_admin(db: Session, **fields: Any) -> Admin:
    fields["email"] = fields["email"].strip().lower()
    fields.setdefault("providers", [])
    admin = Admin(**fields)
    db.add(admin)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"[ADMIN_REPOSITORY] ✗ Failed to create admin: {fields['email']}", exc_info=True)
        raise
    db.refresh(admin)
    logger.info(f"[ADMIN_REPOSITORY] ✓ Admin created: id={admin.id}, role={admin.role}")
    return admin
