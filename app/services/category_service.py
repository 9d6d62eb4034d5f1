"""Category and brand management."""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.models.brand import Brand
from app.models.category import Category
from app.repositories import brand_repository, category_repository
from app.schemas.base_schemas import AdminListResponse, AdminPageMeta
from app.schemas.category_schemas import (
    BrandCreate,
    BrandRead,
    BrandUpdate,
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
)
from app.services.product_rules import slugify_name
from app.utils.pagination import (
    convert_page_to_skip_take,
    convert_sort_string,
    generate_page_meta,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """CRUD over categories for the admin surface, read-only views for clients."""

    def create(self, db: Session, request: CategoryCreate) -> CategoryRead:
        fields = request.model_dump(exclude_none=True)
        category = category_repository.create_category(db, **fields)
        return CategoryRead.model_validate(category)

    def list_page(
        self,
        db: Session,
        page: int,
        size: int,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        sort: Optional[str] = None,
    ) -> AdminListResponse[CategoryRead]:
        try:
            sort_spec = convert_sort_string(sort) or ("createdAt", "desc")
            skip, take = convert_page_to_skip_take(page, size)
            categories, total = category_repository.list_categories(
                db, skip, take, search=search, is_active=is_active, sort=sort_spec
            )
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc

        meta = generate_page_meta(total, size, page)
        return AdminListResponse[CategoryRead](
            items=[CategoryRead.model_validate(c) for c in categories],
            pagination=AdminPageMeta.model_validate(meta),
        )

    def get(self, db: Session, category_id: int) -> CategoryRead:
        return CategoryRead.model_validate(self._require(db, category_id))

    def update(self, db: Session, category_id: int, request: CategoryUpdate) -> CategoryRead:
        category = self._require(db, category_id)
        changes = request.sent_fields("name", "is_active")
        category = category_repository.update_category(db, category, changes)
        return CategoryRead.model_validate(category)

    def delete(self, db: Session, category_id: int) -> None:
        category_repository.delete_category(db, self._require(db, category_id))

    def list_active(self, db: Session) -> List[CategoryRead]:
        return [CategoryRead.model_validate(c) for c in category_repository.list_active_categories(db)]

    def get_active(self, db: Session, category_id: int) -> CategoryRead:
        category = category_repository.get_category(db, category_id)
        if not category or not category.is_active:
            raise NotFoundError("Category not found")
        return CategoryRead.model_validate(category)

    @staticmethod
    def _require(db: Session, category_id: int) -> Category:
        category = category_repository.get_category(db, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category


class BrandService:
    """Admin-side brand management."""

    def create(self, db: Session, request: BrandCreate) -> BrandRead:
        if brand_repository.get_brand_by_name(db, request.name):
            raise ConflictError("Brand already exists")
        fields = request.model_dump(exclude_none=True)
        try:
            brand = brand_repository.create_brand(db, slug=self._slug(request.name), **fields)
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError("Brand already exists") from exc
        return BrandRead.model_validate(brand)

    def list_all(self, db: Session, is_active: Optional[bool] = None) -> List[BrandRead]:
        return [BrandRead.model_validate(b) for b in brand_repository.list_brands(db, is_active)]

    def update(self, db: Session, brand_id: int, request: BrandUpdate) -> BrandRead:
        brand = self._require(db, brand_id)
        changes = request.sent_fields("name", "is_active")
        if changes.get("name"):
            changes["slug"] = self._slug(changes["name"])
        try:
            brand = brand_repository.update_brand(db, brand, changes)
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError("Brand already exists") from exc
        return BrandRead.model_validate(brand)

    @staticmethod
    def _slug(name: str) -> str:
        slug = slugify_name(name)
        if not slug:
            raise BadRequestError("Brand name must contain letters or digits")
        return slug

    @staticmethod
    def _require(db: Session, brand_id: int) -> Brand:
        brand = brand_repository.get_brand(db, brand_id)
        if not brand:
            raise NotFoundError("Brand not found")
        return brand
