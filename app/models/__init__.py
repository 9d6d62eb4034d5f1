"""ORM models for the application."""
from app.models.admin import Admin
from app.models.brand import Brand
from app.models.category import Category
from app.models.product import Product, ProductTag, ProductVariant, product_categories
from app.models.user import User

__all__ = [
    "Admin",
    "Brand",
    "Category",
    "Product",
    "ProductTag",
    "ProductVariant",
    "User",
    "product_categories",
]
