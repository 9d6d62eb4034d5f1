"""Write-path rules for products: slug derivation and variant normalization.

Both run explicitly from the product admin service before every insert and
update; nothing here is attached to the ORM as an event hook.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import VariantValidationError
from app.repositories.product_repository import slug_exists
from app.utils.pagination import is_valid_number

logger = logging.getLogger(__name__)

EMPTY_SLUG_FALLBACK = "product"

# Letters NFKD does not decompose into ASCII (Vietnamese đ among them)
_CHAR_REPLACEMENTS = {
    "đ": "d",
    "Đ": "D",
    "ß": "ss",
    "æ": "ae",
    "Æ": "AE",
    "ø": "o",
    "Ø": "O",
    "œ": "oe",
    "Œ": "OE",
    "ł": "l",
    "Ł": "L",
    "&": " and ",
}


def slugify_name(name: str) -> str:
    """
    Lowercase, accent-stripped, hyphen-joined form of name.

    "Giày Đá Bóng Nam" -> "giay-da-bong-nam"
    """
    text = name.strip()
    for source, target in _CHAR_REPLACEMENTS.items():
        text = text.replace(source, target)
    ascii_text = (
        unicodedata.normalize("NFKD", text)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    return re.sub(r"[^a-z0-9]+", "-", ascii_text).strip("-")


def generate_unique_slug(db: Session, name: str, exclude_id: Optional[int] = None) -> str:
    """
    Derive a slug from name that no other product uses.

    Probes base, base-1, base-2, ... in order. The check and the later insert
    are separate statements; the unique index on products.slug rejects a
    concurrent duplicate at commit time.

    Args:
        db: Database session
        name: Product display name
        exclude_id: Product being renamed, so it does not collide with itself

    Returns:
        First unused slug
    """
    base_slug = slugify_name(name) or EMPTY_SLUG_FALLBACK
    if not slug_exists(db, base_slug, exclude_id):
        return base_slug

    counter = 1
    candidate = f"{base_slug}-{counter}"
    while slug_exists(db, candidate, exclude_id):
        counter += 1
        candidate = f"{base_slug}-{counter}"

    logger.info(f"[PRODUCT_RULES] Slug '{base_slug}' taken, using '{candidate}'")
    return candidate


def _require_number(value: Any, field: str, sku: str) -> float:
    if not is_valid_number(value):
        raise VariantValidationError(
            f"Invalid {field} value in variant: {sku}",
            details={"sku": sku, "field": field, "value": str(value)},
        )
    return float(value)


def normalize_variants(variants: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Validate and coerce variant price, sale price and quantity.

    Numeric strings become numbers. A missing, non-numeric, negative or
    non-finite price/quantity (or sale price, when given) rejects the write
    with an error naming the variant's SKU.

    Raises:
        VariantValidationError: On the first offending variant
    """
    normalized: List[Dict[str, Any]] = []
    for variant in variants:
        sku = variant.get("sku") or ""

        price = _require_number(variant.get("price"), "price", sku)

        sale_price = variant.get("sale_price")
        if sale_price is not None and sale_price != "":
            sale_price = _require_number(sale_price, "sale price", sku)
        else:
            sale_price = None

        quantity = _require_number(variant.get("quantity"), "quantity", sku)
        if not quantity.is_integer():
            raise VariantValidationError(
                f"Invalid quantity value in variant: {sku}",
                details={"sku": sku, "field": "quantity", "value": str(variant.get("quantity"))},
            )

        normalized.append(
            {
                **variant,
                "sku": sku,
                "price": price,
                "sale_price": sale_price,
                "quantity": int(quantity),
                "sold_count": int(variant.get("sold_count") or 0),
                "attributes": variant.get("attributes") or {},
                "images": variant.get("images") or [],
            }
        )
    return normalized
