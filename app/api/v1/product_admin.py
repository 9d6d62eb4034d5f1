"""Admin product endpoints."""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import IdPath, admin_auth_guard, get_container
from app.core.container import ServiceContainer
from app.core.database import MAX_ID, get_db
from app.schemas.base_schemas import AdminListResponse
from app.schemas.product_schemas import (
    ProductBulkUpdate,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/products",
    tags=["admin-products"],
    dependencies=[Depends(admin_auth_guard)],
)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> ProductRead:
    """
    Create a product.

    The slug is derived from the name; variants are validated and their
    numeric fields coerced. Referenced categories and brand must exist.
    """
    logger.info(f"[API] POST /admin/products: name={request.name}")
    return container.product_admin_service.create(db, request)


@router.get("", response_model=AdminListResponse[ProductRead])
async def list_products(
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    category_id: Optional[int] = Query(None, alias="categoryId", ge=1, le=MAX_ID),
    brand_id: Optional[int] = Query(None, alias="brandId", ge=1, le=MAX_ID),
    sort: Optional[str] = Query(None, description="field:asc|desc"),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AdminListResponse[ProductRead]:
    return container.product_admin_service.list_page(
        db,
        page,
        size,
        search=search,
        is_active=is_active,
        category_id=category_id,
        brand_id=brand_id,
        sort=sort,
    )


@router.patch("/bulk", response_model=List[ProductRead])
async def bulk_update_products(
    request: ProductBulkUpdate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[ProductRead]:
    logger.info(f"[API] PATCH /admin/products/bulk: ids={request.ids}")
    return container.product_admin_service.bulk_update(db, request)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: IdPath,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> ProductRead:
    return container.product_admin_service.get(db, product_id)


@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: IdPath,
    request: ProductUpdate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> ProductRead:
    logger.info(f"[API] PATCH /admin/products/{product_id}")
    return container.product_admin_service.update(db, product_id, request)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: IdPath,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> None:
    logger.info(f"[API] DELETE /admin/products/{product_id}")
    container.product_admin_service.delete(db, product_id)
