"""Admin upload proxy endpoints."""
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.deps import admin_auth_guard, get_container
from app.core.container import ServiceContainer
from app.schemas.product_schemas import UploadResult
from app.services.upload_service import FileBuffer

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/upload",
    tags=["upload"],
    dependencies=[Depends(admin_auth_guard)],
)


async def _read(upload: UploadFile) -> FileBuffer:
    return FileBuffer(
        filename=upload.filename or "upload",
        content=await upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


@router.post("/single", response_model=UploadResult)
async def upload_single(
    file: UploadFile = File(...),
    container: ServiceContainer = Depends(get_container),
) -> UploadResult:
    logger.info(f"[API] POST /upload/single: filename={file.filename}")
    return await container.upload_service.upload_single(await _read(file))


@router.post("/multiple", response_model=List[UploadResult])
async def upload_multiple(
    files: List[UploadFile] = File(...),
    container: ServiceContainer = Depends(get_container),
) -> List[UploadResult]:
    logger.info(f"[API] POST /upload/multiple: count={len(files)}")
    buffers = [await _read(upload) for upload in files]
    return await container.upload_service.upload_multiple(buffers)
