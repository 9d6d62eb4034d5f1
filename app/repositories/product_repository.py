"""Product repository for database access."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import and_, or_, update
from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import ColumnElement

from app.core.database import MAX_ID
from app.models.brand import Brand
from app.models.category import Category
from app.models.product import Product, ProductTag, ProductVariant
from app.repositories.query_utils import LIKE_ESCAPE, apply_sort, like_pattern

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
    "name": Product.name,
    "viewCount": Product.view_count,
    "totalSoldCount": Product.total_sold_count,
    "averageRating": Product.average_rating,
    "reviewCount": Product.review_count,
}

STAT_COLUMNS = ("view_count", "total_sold_count", "review_count")


def availability_clause(now: datetime) -> ColumnElement[bool]:
    """Open-ended availability window: either bound may be NULL."""
    return and_(
        or_(Product.available_from.is_(None), Product.available_from <= now),
        or_(Product.available_to.is_(None), Product.available_to >= now),
    )


def storefront_query(db: Session, now: datetime) -> Query:
    """Active products whose availability window contains now."""
    return db.query(Product).filter(Product.is_active.is_(True), availability_clause(now))


def slug_exists(db: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Product.id).filter(Product.slug == slug)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    return query.first() is not None


def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
    logger.info(f"[PRODUCT_REPOSITORY] Querying product by id: {product_id}")
    return db.get(Product, product_id)


def get_products_by_ids(db: Session, ids: Sequence[int]) -> List[Product]:
    return db.query(Product).filter(Product.id.in_(list(ids))).order_by(Product.id).all()


def _as_record_id(segment: str) -> Optional[int]:
    if not (segment.isascii() and segment.isdigit()):
        return None
    value = int(segment)
    return value if 1 <= value <= MAX_ID else None


def get_available_product(db: Session, id_or_slug: str, now: datetime) -> Optional[Product]:
    """
    Resolve a storefront path segment to a visible product.

    An ASCII digit segment within the id range is tried as an id first; any
    segment is then tried as a slug, so numeric slugs still resolve.
    """
    logger.info(f"[PRODUCT_REPOSITORY] Resolving product by id or slug: {id_or_slug}")
    base = storefront_query(db, now)
    record_id = _as_record_id(id_or_slug)
    if record_id is not None:
        product = base.filter(Product.id == record_id).first()
        if product:
            return product
    product = base.filter(Product.slug == id_or_slug).first()
    if product:
        logger.info(f"[PRODUCT_REPOSITORY] ✓ Product found: id={product.id}, slug={product.slug}")
    else:
        logger.warning(f"[PRODUCT_REPOSITORY] ✗ Product not visible: {id_or_slug}")
    return product


def add_product(db: Session, product: Product) -> Product:
    db.add(product)
    return save_product(db, product)


def save_product(db: Session, product: Product) -> Product:
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"[PRODUCT_REPOSITORY] ✗ Failed to save product: slug={product.slug}", exc_info=True)
        raise
    db.refresh(product)
    logger.info(f"[PRODUCT_REPOSITORY] ✓ Product saved: id={product.id}, slug={product.slug}")
    return product


def delete_product(db: Session, product: Product) -> None:
    product_id = product.id
    db.delete(product)
    db.commit()
    logger.info(f"[PRODUCT_REPOSITORY] ✓ Product deleted: id={product_id}")


def find_listing(
    db: Session,
    now: datetime,
    skip: int,
    take: int,
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    brand_id: Optional[int] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    tags: Optional[List[str]] = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> Tuple[List[Product], int]:
    """
    Storefront listing with every optional filter ANDed onto availability.

    Returns:
        Tuple of (products on the page, total matching count)
    """
    logger.info(
        f"[PRODUCT_REPOSITORY] Listing products: skip={skip}, take={take}, search={search}, "
        f"category_id={category_id}, brand_id={brand_id}, price=[{min_price}, {max_price}], "
        f"tags={tags}, sort={sort_by}:{sort_order}"
    )
    query = storefront_query(db, now)

    if category_id is not None:
        query = query.filter(Product.categories.any(Category.id == category_id))

    if brand_id is not None:
        query = query.filter(Product.brand_id == brand_id)

    # The range applies only when both bounds are present
    if min_price is not None and max_price is not None:
        query = query.filter(
            Product.variants.any(
                and_(ProductVariant.price >= min_price, ProductVariant.price <= max_price)
            )
        )

    if tags:
        query = query.filter(Product.tag_rows.any(ProductTag.tag.in_(tags)))

    if search:
        pattern = like_pattern(search)
        query = query.filter(
            or_(
                Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                Product.description.ilike(pattern, escape=LIKE_ESCAPE),
                Product.brand.has(Brand.name.ilike(pattern, escape=LIKE_ESCAPE)),
                Product.tag_rows.any(ProductTag.tag.ilike(pattern, escape=LIKE_ESCAPE)),
            )
        )

    total = query.count()
    query = apply_sort(query, SORTABLE_COLUMNS, sort_by, sort_order, Product.id)
    items = query.offset(skip).limit(take).all()
    logger.info(f"[PRODUCT_REPOSITORY] ✓ Listing returned {len(items)} of {total}")
    return items, total


def find_newest_flagged(db: Session, now: datetime, flag: Any, limit: int) -> List[Product]:
    """Visible products with the given boolean flag set, newest first."""
    return (
        storefront_query(db, now)
        .filter(flag.is_(True))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(limit)
        .all()
    )


def find_best_sellers(db: Session, now: datetime, limit: int) -> List[Product]:
    return (
        storefront_query(db, now)
        .filter(or_(Product.is_best_seller.is_(True), Product.total_sold_count > 0))
        .order_by(Product.total_sold_count.desc(), Product.view_count.desc(), Product.id.desc())
        .limit(limit)
        .all()
    )


def find_related(db: Session, base: Product, now: datetime, limit: int) -> List[Product]:
    """Other visible products sharing a category, the brand, or a tag with base."""
    category_ids = [category.id for category in base.categories]
    shared = []
    if category_ids:
        shared.append(Product.categories.any(Category.id.in_(category_ids)))
    if base.brand_id is not None:
        shared.append(Product.brand_id == base.brand_id)
    if base.tags:
        shared.append(Product.tag_rows.any(ProductTag.tag.in_(base.tags)))
    if not shared:
        return []

    return (
        storefront_query(db, now)
        .filter(Product.id != base.id, or_(*shared))
        .order_by(Product.total_sold_count.desc(), Product.view_count.desc(), Product.id.desc())
        .limit(limit)
        .all()
    )


def increment_stats(
    db: Session,
    product_id: int,
    increments: Dict[str, int],
    average_rating: Optional[float] = None,
) -> bool:
    """
    Apply counter increments in a single UPDATE so concurrent calls add up.

    Returns:
        True if a product row was updated
    """
    values: Dict[str, Any] = {
        column: getattr(Product, column) + amount
        for column, amount in increments.items()
        if column in STAT_COLUMNS
    }
    if average_rating is not None:
        values["average_rating"] = average_rating
    if not values:
        return db.get(Product, product_id) is not None

    result = db.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    logger.info(
        f"[PRODUCT_REPOSITORY] Stats updated: id={product_id}, values={list(values)}, "
        f"rows={result.rowcount}"
    )
    return result.rowcount > 0


def list_admin_products(
    db: Session,
    skip: int,
    take: int,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    category_id: Optional[int] = None,
    brand_id: Optional[int] = None,
    sort: Tuple[str, str] = ("createdAt", "desc"),
) -> Tuple[List[Product], int]:
    """Back-office listing: no availability window, inactive products included."""
    query = db.query(Product)
    if search:
        pattern = like_pattern(search)
        query = query.filter(
            or_(
                Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                Product.slug.ilike(pattern, escape=LIKE_ESCAPE),
                Product.variants.any(ProductVariant.sku.ilike(pattern, escape=LIKE_ESCAPE)),
            )
        )
    if is_active is not None:
        query = query.filter(Product.is_active.is_(is_active))
    if category_id is not None:
        query = query.filter(Product.categories.any(Category.id == category_id))
    if brand_id is not None:
        query = query.filter(Product.brand_id == brand_id)

    total = query.count()
    query = apply_sort(query, SORTABLE_COLUMNS, sort[0], sort[1], Product.id)
    return query.offset(skip).limit(take).all(), total
