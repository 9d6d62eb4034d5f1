"""Pagination and sort-string helpers shared by admin and client listings."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

_SORT_PATTERN = re.compile(r"^[a-zA-Z0-9_]+:(asc|desc)$")


def convert_page_to_skip_take(page: int, size: int) -> Tuple[int, int]:
    """Translate a 1-based page number into (skip, take)."""
    return (page - 1) * size, size


@dataclass
class Pagination:
    """Page metadata for admin listings."""

    item_count: int  # items on the current page
    total_items: int
    items_per_page: int
    total_pages: int
    current_page: int


def generate_page_meta(number_of_items: int, page_size: int, current_page: int) -> Pagination:
    """
    Build page metadata from a total count.

    The current page is clamped into [1, total_pages]; an empty result set
    reports page 1 of 0.
    """
    if number_of_items == 0:
        return Pagination(0, 0, page_size, 0, 1)

    total_pages = math.ceil(number_of_items / page_size)
    valid_current_page = min(max(current_page, 1), total_pages)

    is_last_page = valid_current_page == total_pages
    item_count = (number_of_items % page_size or page_size) if is_last_page else page_size

    return Pagination(item_count, number_of_items, page_size, total_pages, valid_current_page)


def convert_sort_string(sort: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Parse "field:asc" / "field:desc" into (field, order).

    Raises:
        ValueError: If the string does not match the expected format
    """
    if not sort:
        return None
    if not _SORT_PATTERN.match(sort):
        raise ValueError("Sort field must be in format: field_name:asc or field_name:desc")
    field, order = sort.split(":")
    return field, order


def is_valid_number(value: Any) -> bool:
    """True for finite, non-negative numbers or numeric strings."""
    if isinstance(value, bool) or value is None:
        return False
    try:
        num = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(num) and num >= 0
