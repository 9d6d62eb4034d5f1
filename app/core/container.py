"""Service wiring, built once per application."""
from __future__ import annotations

from dataclasses import dataclass

from app.core.config import Settings
from app.core.security import TokenService
from app.services.admin_auth_service import AdminAuthService
from app.services.auth_service import AuthService
from app.services.category_service import BrandService, CategoryService
from app.services.google_auth_client import GoogleAuthClient
from app.services.product_admin_service import ProductAdminService
from app.services.product_client_service import ProductClientService
from app.services.upload_service import UploadService


@dataclass
class ServiceContainer:
    settings: Settings
    token_service: TokenService
    auth_service: AuthService
    admin_auth_service: AdminAuthService
    category_service: CategoryService
    brand_service: BrandService
    product_admin_service: ProductAdminService
    product_client_service: ProductClientService
    upload_service: UploadService


def build_container(settings: Settings) -> ServiceContainer:
    token_service = TokenService(settings)
    return ServiceContainer(
        settings=settings,
        token_service=token_service,
        auth_service=AuthService(token_service, GoogleAuthClient(settings)),
        admin_auth_service=AdminAuthService(token_service),
        category_service=CategoryService(),
        brand_service=BrandService(),
        product_admin_service=ProductAdminService(),
        product_client_service=ProductClientService(),
        upload_service=UploadService(settings),
    )
