"""Brand repository for database access."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.models.brand import Brand

logger = logging.getLogger(__name__)


def get_brand(db: Session, brand_id: int) -> Optional[Brand]:
    return db.get(Brand, brand_id)


def get_brand_by_name(db: Session, name: str) -> Optional[Brand]:
    return db.query(Brand).filter(Brand.name == name).first()


def list_brands(db: Session, is_active: Optional[bool] = None) -> List[Brand]:
    query = db.query(Brand)
    if is_active is not None:
        query = query.filter(Brand.is_active.is_(is_active))
    return query.order_by(Brand.name.asc()).all()


def create_brand(db: Session, **fields: Any) -> Brand:
    brand = Brand(**fields)
    db.add(brand)
    db.commit()
    db.refresh(brand)
    logger.info(f"[BRAND_REPOSITORY] ✓ Brand created: id={brand.id}, slug={brand.slug}")
    return brand


def update_brand(db: Session, brand: Brand, changes: dict[str, Any]) -> Brand:
    for field, value in changes.items():
        setattr(brand, field, value)
    db.commit()
    db.refresh(brand)
    return brand
