"""Public category endpoints."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import IdPath, get_container
from app.core.container import ServiceContainer
from app.core.database import get_db
from app.schemas.category_schemas import CategoryRead

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryRead])
async def list_active_categories(
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> List[CategoryRead]:
    return container.category_service.list_active(db)


@router.get("/{category_id}", response_model=CategoryRead)
async def get_active_category(
    category_id: IdPath,
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
) -> CategoryRead:
    return container.category_service.get_active(db, category_id)
