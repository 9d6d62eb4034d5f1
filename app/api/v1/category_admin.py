"""Admin category endpoints."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import IdPath, admin_auth_guard, get_container
from app.core.container import ServiceContainer
from app.core.database import get_db
from app.schemas.base_schemas import AdminListResponse
from app.schemas.category_schemas import CategoryCreate, CategoryRead, CategoryUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/categories",
    tags=["admin-categories"],
    dependencies=[Depends(admin_auth_guard)],
)


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CategoryCreate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> CategoryRead:
    logger.info(f"[API] POST /admin/categories: name={request.name}")
    return container.category_service.create(db, request)


@router.get("", response_model=AdminListResponse[CategoryRead])
async def list_categories(
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    sort: Optional[str] = Query(None, description="field:asc|desc"),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> AdminListResponse[CategoryRead]:
    return container.category_service.list_page(
        db, page, size, search=search, is_active=is_active, sort=sort
    )


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(
    category_id: IdPath,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> CategoryRead:
    return container.category_service.get(db, category_id)


@router.patch("/{category_id}", response_model=CategoryRead)
async def update_category(
    category_id: IdPath,
    request: CategoryUpdate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> CategoryRead:
    logger.info(f"[API] PATCH /admin/categories/{category_id}")
    return container.category_service.update(db, category_id, request)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: IdPath,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> None:
    logger.info(f"[API] DELETE /admin/categories/{category_id}")
    container.category_service.delete(db, category_id)
