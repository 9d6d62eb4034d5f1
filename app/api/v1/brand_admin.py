"""Admin brand endpoints."""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import IdPath, admin_auth_guard, get_container
from app.core.container import ServiceContainer
from app.core.database import get_db
from app.schemas.category_schemas import BrandCreate, BrandRead, BrandUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/brands",
    tags=["admin-brands"],
    dependencies=[Depends(admin_auth_guard)],
)


@router.post("", response_model=BrandRead, status_code=status.HTTP_201_CREATED)
async def create_brand(
    request: BrandCreate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> BrandRead:
    logger.info(f"[API] POST /admin/brands: name={request.name}")
    return container.brand_service.create(db, request)


@router.get("", response_model=List[BrandRead])
async def list_brands(
    is_active: Optional[bool] = Query(None, alias="isActive"),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[BrandRead]:
    return container.brand_service.list_all(db, is_active)


@router.patch("/{brand_id}", response_model=BrandRead)
async def update_brand(
    brand_id: IdPath,
    request: BrandUpdate,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> BrandRead:
    logger.info(f"[API] PATCH /admin/brands/{brand_id}")
    return container.brand_service.update(db, brand_id, request)
