"""Aggregate router for every public and admin endpoint."""
from fastapi import APIRouter

from app.api.v1 import (
    admin_auth,
    auth,
    brand_admin,
    category_admin,
    category_client,
    product_admin,
    product_client,
    upload,
)

router = APIRouter()

router.include_router(auth.router)
router.include_router(admin_auth.router)
router.include_router(category_admin.router)
router.include_router(brand_admin.router)
router.include_router(product_admin.router)
router.include_router(upload.router)
router.include_router(category_client.router)
router.include_router(product_client.router)
