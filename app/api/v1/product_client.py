"""Public storefront product endpoints."""
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import IdPath, get_container
from app.core.container import ServiceContainer
from app.core.database import MAX_ID, get_db
from app.schemas.base_schemas import PaginatedResponse
from app.schemas.product_schemas import ProductRead, ProductStatsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

SortField = Literal[
    "createdAt",
    "updatedAt",
    "name",
    "viewCount",
    "totalSoldCount",
    "averageRating",
    "reviewCount",
]


@router.get("", response_model=PaginatedResponse[ProductRead])
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None, alias="categoryId", ge=1, le=MAX_ID),
    brand_id: Optional[int] = Query(None, alias="brandId", ge=1, le=MAX_ID),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    tags: Optional[List[str]] = Query(None),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> PaginatedResponse[ProductRead]:
    """
    Storefront listing of active, currently available products.

    The price range filter applies only when both minPrice and maxPrice are given.
    """
    return container.product_client_service.find_all(
        db,
        page=page,
        limit=limit,
        search=search,
        category_id=category_id,
        brand_id=brand_id,
        min_price=min_price,
        max_price=max_price,
        tags=tags,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/featured", response_model=List[ProductRead])
async def featured_products(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[ProductRead]:
    return container.product_client_service.get_featured_products(db, limit)


@router.get("/best-sellers", response_model=List[ProductRead])
async def best_seller_products(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[ProductRead]:
    return container.product_client_service.get_best_seller_products(db, limit)


@router.get("/new-arrivals", response_model=List[ProductRead])
async def new_arrival_products(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[ProductRead]:
    return container.product_client_service.get_new_arrival_products(db, limit)


@router.get("/on-sale", response_model=List[ProductRead])
async def on_sale_products(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[ProductRead]:
    return container.product_client_service.get_on_sale_products(db, limit)


@router.get("/{product_id}/related", response_model=List[ProductRead])
async def related_products(
    product_id: IdPath,
    limit: int = Query(4, ge=1, le=100),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[ProductRead]:
    return container.product_client_service.get_related_products(db, product_id, limit)


@router.post("/{product_id}/stats", response_model=ProductRead)
async def increment_product_stats(
    product_id: IdPath,
    request: ProductStatsUpdate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> ProductRead:
    logger.info(f"[API] POST /products/{product_id}/stats")
    return container.product_client_service.increment_product_stats(db, product_id, request)


# Registered last so the fixed paths above take precedence
@router.get("/{id_or_slug}", response_model=ProductRead)
async def get_product(
    id_or_slug: str,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> ProductRead:
    """Fetch one product by numeric id or slug and count the view."""
    return container.product_client_service.find_one(db, id_or_slug)
