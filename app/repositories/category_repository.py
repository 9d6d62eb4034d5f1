"""Category repository for database access."""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.product import Product, product_categories
from app.repositories.query_utils import LIKE_ESCAPE, apply_sort, like_pattern

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "name": Category.name,
    "createdAt": Category.created_at,
    "updatedAt": Category.updated_at,
}


def create_category(db: Session, **fields: Any) -> Category:
    category = Category(**fields)
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info(f"[CATEGORY_REPOSITORY] ✓ Category created: id={category.id}, name={category.name}")
    return category


def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.get(Category, category_id)


def get_categories_by_ids(db: Session, ids: Sequence[int]) -> List[Category]:
    if not ids:
        return []
    return db.query(Category).filter(Category.id.in_(list(ids))).all()


def list_categories(
    db: Session,
    skip: int,
    take: int,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    sort: Tuple[str, str] = ("createdAt", "desc"),
) -> Tuple[List[Category], int]:
    """
    Page through categories.

    Returns:
        Tuple of (categories on the page, total matching count)
    """
    logger.info(
        f"[CATEGORY_REPOSITORY] Listing categories: skip={skip}, take={take}, "
        f"search={search}, is_active={is_active}, sort={sort}"
    )
    query = db.query(Category)
    if search:
        query = query.filter(Category.name.ilike(like_pattern(search), escape=LIKE_ESCAPE))
    if is_active is not None:
        query = query.filter(Category.is_active.is_(is_active))

    total = query.count()
    query = apply_sort(query, SORTABLE_COLUMNS, sort[0], sort[1], Category.id)
    return query.offset(skip).limit(take).all(), total


def list_active_categories(db: Session) -> List[Category]:
    return (
        db.query(Category)
        .filter(Category.is_active.is_(True))
        .order_by(Category.name.asc())
        .all()
    )


def update_category(db: Session, category: Category, changes: dict[str, Any]) -> Category:
    for field, value in changes.items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    logger.info(f"[CATEGORY_REPOSITORY] ✓ Category updated: id={category.id}, fields={list(changes)}")
    return category


def delete_category(db: Session, category: Category) -> None:
    """Hard delete; product links go away and matching primary categories are cleared."""
    category_id = category.id
    db.execute(
        delete(product_categories).where(product_categories.c.category_id == category_id)
    )
    db.execute(
        update(Product)
        .where(Product.primary_category_id == category_id)
        .values(primary_category_id=None)
        .execution_options(synchronize_session=False)
    )
    db.delete(category)
    db.commit()
    logger.info(f"[CATEGORY_REPOSITORY] ✓ Category deleted: id={category_id}")
