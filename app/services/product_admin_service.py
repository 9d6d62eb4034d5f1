"""Back-office product management."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.models.product import Product, ProductVariant
from app.repositories import brand_repository, category_repository, product_repository
from app.schemas.base_schemas import AdminListResponse, AdminPageMeta
from app.schemas.product_schemas import (
    ProductBulkUpdate,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from app.services.product_rules import generate_unique_slug, normalize_variants
from app.utils.pagination import (
    convert_page_to_skip_take,
    convert_sort_string,
    generate_page_meta,
)
from app.utils.time_utils import to_naive_utc

logger = logging.getLogger(__name__)

# Columns that reject NULL; an explicit null in a PATCH body leaves them as they are
NON_NULLABLE_FIELDS = (
    "name",
    "type",
    "images",
    "categories",
    "variants",
    "tags",
    "specifications",
    "is_active",
    "is_featured",
    "is_on_sale",
    "is_new_arrival",
    "is_best_seller",
)


def _sent_changes(request: ProductUpdate) -> Dict[str, Any]:
    """Fields present in a PATCH body; variants keep their defaults for omitted keys."""
    changes = request.sent_fields(*NON_NULLABLE_FIELDS)
    if "variants" in changes:
        changes["variants"] = [variant.model_dump() for variant in request.variants]
    return changes


class ProductAdminService:
    """Create, edit, list and delete products; every write goes through the product rules."""

    def create(self, db: Session, request: ProductCreate) -> ProductRead:
        logger.info(f"[PRODUCT_ADMIN_SERVICE] Creating product: name={request.name}")
        product = Product(
            view_count=0,
            total_sold_count=0,
            average_rating=0,
            review_count=0,
        )
        self._apply_changes(db, product, request.model_dump())
        product = product_repository.add_product(db, product)
        return ProductRead.model_validate(product)

    def update(self, db: Session, product_id: int, request: ProductUpdate) -> ProductRead:
        product = self._require(db, product_id)
        changes = _sent_changes(request)
        logger.info(f"[PRODUCT_ADMIN_SERVICE] Updating product: id={product_id}, fields={list(changes)}")
        self._apply_changes(db, product, changes)
        product = product_repository.save_product(db, product)
        return ProductRead.model_validate(product)

    def bulk_update(self, db: Session, request: ProductBulkUpdate) -> List[ProductRead]:
        """
        Apply one change set to several products in a single transaction.

        A name change gives each product its own slug; each product is flushed
        before the next so later slug probes see earlier ones.
        """
        ids = list(dict.fromkeys(request.ids))
        products = product_repository.get_products_by_ids(db, ids)
        missing = sorted(set(ids) - {p.id for p in products})
        if missing:
            raise NotFoundError("Product not found", details={"ids": missing})

        changes = _sent_changes(request.changes)
        logger.info(f"[PRODUCT_ADMIN_SERVICE] Bulk update: ids={ids}, fields={list(changes)}")
        try:
            for product in products:
                self._apply_changes(db, product, dict(changes))
                db.flush()
            db.commit()
        except Exception:
            db.rollback()
            raise
        return [ProductRead.model_validate(p) for p in products]

    def get(self, db: Session, product_id: int) -> ProductRead:
        return ProductRead.model_validate(self._require(db, product_id))

    def delete(self, db: Session, product_id: int) -> None:
        product_repository.delete_product(db, self._require(db, product_id))

    def list_page(
        self,
        db: Session,
        page: int,
        size: int,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        category_id: Optional[int] = None,
        brand_id: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> AdminListResponse[ProductRead]:
        try:
            sort_spec = convert_sort_string(sort) or ("createdAt", "desc")
            skip, take = convert_page_to_skip_take(page, size)
            products, total = product_repository.list_admin_products(
                db,
                skip,
                take,
                search=search,
                is_active=is_active,
                category_id=category_id,
                brand_id=brand_id,
                sort=sort_spec,
            )
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc

        return AdminListResponse[ProductRead](
            items=[ProductRead.model_validate(p) for p in products],
            pagination=AdminPageMeta.model_validate(generate_page_meta(total, size, page)),
        )

    def _apply_changes(self, db: Session, product: Product, changes: Dict[str, Any]) -> None:
        """Validate then write changes onto product (not yet committed)."""
        if "variants" in changes:
            variants = normalize_variants(changes.pop("variants"))
            product.variants = [
                ProductVariant(position=position, **variant)
                for position, variant in enumerate(variants)
            ]

        if "name" in changes:
            product.slug = generate_unique_slug(db, changes["name"], exclude_id=product.id)

        if "categories" in changes:
            category_ids = list(dict.fromkeys(changes.pop("categories")))
            categories = category_repository.get_categories_by_ids(db, category_ids)
            missing = sorted(set(category_ids) - {c.id for c in categories})
            if missing:
                raise NotFoundError("Category not found", details={"ids": missing})
            product.categories = categories

        if changes.get("primary_category_id") is not None:
            if not category_repository.get_category(db, changes["primary_category_id"]):
                raise NotFoundError("Category not found")

        if changes.get("brand_id") is not None:
            if not brand_repository.get_brand(db, changes["brand_id"]):
                raise NotFoundError("Brand not found")

        if "tags" in changes:
            product.tags = [tag.strip() for tag in changes.pop("tags") if tag.strip()]

        for field in ("available_from", "available_to"):
            if field in changes:
                changes[field] = to_naive_utc(changes[field])

        for field, value in changes.items():
            setattr(product, field, value)

        if (
            product.available_from is not None
            and product.available_to is not None
            and product.available_from > product.available_to
        ):
            raise BadRequestError("availableFrom must not be later than availableTo")

    @staticmethod
    def _require(db: Session, product_id: int) -> Product:
        product = product_repository.get_product_by_id(db, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product
