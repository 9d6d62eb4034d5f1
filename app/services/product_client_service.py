"""Storefront product browsing and stat counters."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.product import Product
from app.repositories import product_repository
from app.schemas.base_schemas import PaginatedResponse
from app.schemas.product_schemas import ProductRead, ProductStatsUpdate
from app.utils.pagination import convert_page_to_skip_take
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


def _read_all(products: List[Product]) -> List[ProductRead]:
    return [ProductRead.model_validate(p) for p in products]


class ProductClientService:
    """
    Read side of the catalog for storefront clients.

    Every query is restricted to active products whose availability window
    contains the current instant, as reported by the injected clock.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self.clock = clock

    def find_all(
        self,
        db: Session,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        brand_id: Optional[int] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        tags: Optional[List[str]] = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> PaginatedResponse[ProductRead]:
        """
        Filtered, paginated storefront listing.

        Args:
            db: Database session
            page: 1-based page number
            limit: Page size
            search: Case-insensitive substring over name, description, brand name and tags
            category_id: Only products linked to this category
            brand_id: Only products of this brand
            min_price: Lower price bound; ignored unless max_price is also given
            max_price: Upper price bound; ignored unless min_price is also given
            tags: Products carrying at least one of these tags
            sort_by: One of the sortable field names (camelCase)
            sort_order: "asc" or "desc"

        Returns:
            PaginatedResponse with items and {total, page, limit, totalPages}
        """
        skip, take = convert_page_to_skip_take(page, limit)
        items, total = product_repository.find_listing(
            db,
            self.clock(),
            skip,
            take,
            search=search.strip() if search else None,
            category_id=category_id,
            brand_id=brand_id,
            min_price=min_price,
            max_price=max_price,
            tags=tags,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return PaginatedResponse[ProductRead].create(
            items=_read_all(items), total=total, page=page, limit=limit
        )

    def find_one(self, db: Session, id_or_slug: str) -> ProductRead:
        """Resolve by id or slug, count the view, and return the product."""
        product = product_repository.get_available_product(db, id_or_slug, self.clock())
        if not product:
            raise NotFoundError("Product not found")

        product_repository.increment_stats(db, product.id, {"view_count": 1})
        return ProductRead.model_validate(product)

    def get_featured_products(self, db: Session, limit: int = 10) -> List[ProductRead]:
        return _read_all(
            product_repository.find_newest_flagged(db, self.clock(), Product.is_featured, limit)
        )

    def get_best_seller_products(self, db: Session, limit: int = 10) -> List[ProductRead]:
        return _read_all(product_repository.find_best_sellers(db, self.clock(), limit))

    def get_new_arrival_products(self, db: Session, limit: int = 10) -> List[ProductRead]:
        return _read_all(
            product_repository.find_newest_flagged(db, self.clock(), Product.is_new_arrival, limit)
        )

    def get_on_sale_products(self, db: Session, limit: int = 10) -> List[ProductRead]:
        return _read_all(
            product_repository.find_newest_flagged(db, self.clock(), Product.is_on_sale, limit)
        )

    def get_related_products(self, db: Session, product_id: int, limit: int = 4) -> List[ProductRead]:
        base = product_repository.get_product_by_id(db, product_id)
        if not base:
            raise NotFoundError("Product not found")
        return _read_all(product_repository.find_related(db, base, self.clock(), limit))

    def increment_product_stats(
        self, db: Session, product_id: int, stats: ProductStatsUpdate
    ) -> ProductRead:
        """
        Add the given increments and/or set the average rating.

        Zero or missing increments are skipped; an empty request returns the
        product unchanged.
        """
        increments = {
            "view_count": stats.view_count_increment,
            "total_sold_count": stats.total_sold_count_increment,
            "review_count": stats.review_count_increment,
        }
        increments = {column: amount for column, amount in increments.items() if amount}

        updated = product_repository.increment_stats(
            db, product_id, increments, average_rating=stats.average_rating
        )
        if not updated:
            raise NotFoundError("Product not found")

        product = product_repository.get_product_by_id(db, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return ProductRead.model_validate(product)
