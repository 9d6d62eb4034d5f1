"""Tests for hashing and pagination helpers."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.utils.hash import BCRYPT_MAX_BYTES, check_password_length, compare_hash, make_hash
from app.utils.pagination import (
    convert_page_to_skip_take,
    convert_sort_string,
    generate_page_meta,
    is_valid_number,
)


class TestHash:
    def test_hash_round_trip(self):
        hashed = make_hash("password123")

        assert hashed != "password123"
        assert compare_hash("password123", hashed)
        assert not compare_hash("password124", hashed)

    def test_hashes_are_salted(self):
        assert make_hash("same") != make_hash("same")

    @pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash"])
    def test_empty_or_malformed_hash_never_matches(self, stored):
        """Federated-only accounts store an empty password."""
        assert compare_hash("anything", stored) is False

    def test_length_limit_counts_utf8_bytes(self):
        at_limit = "đ" * (BCRYPT_MAX_BYTES // 2)

        assert check_password_length(at_limit) == at_limit
        assert compare_hash(at_limit, make_hash(at_limit))
        with pytest.raises(ValueError):
            check_password_length(at_limit + "a")

    def test_bootstrap_password_over_byte_limit_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(
                bootstrap_admin_email="root@example.com",
                bootstrap_admin_password="mậtkhẩuđẹp" * 5,
            )


class TestPagination:
    def test_page_to_skip_take(self):
        assert convert_page_to_skip_take(1, 10) == (0, 10)
        assert convert_page_to_skip_take(3, 25) == (50, 25)

    def test_page_meta_last_page_partial(self):
        meta = generate_page_meta(23, 10, 3)

        assert meta.total_pages == 3
        assert meta.current_page == 3
        assert meta.item_count == 3
        assert meta.total_items == 23

    def test_page_meta_clamps_current_page(self):
        meta = generate_page_meta(5, 10, 9)

        assert meta.current_page == 1
        assert meta.item_count == 5

    def test_page_meta_empty(self):
        meta = generate_page_meta(0, 10, 4)

        assert (meta.item_count, meta.total_pages, meta.current_page) == (0, 0, 1)

    def test_sort_string(self):
        assert convert_sort_string("name:asc") == ("name", "asc")
        assert convert_sort_string("createdAt:desc") == ("createdAt", "desc")
        assert convert_sort_string(None) is None

    @pytest.mark.parametrize("bad", ["name", "name:up", "name:asc:desc", "na me:asc"])
    def test_sort_string_rejects_bad_format(self, bad):
        with pytest.raises(ValueError):
            convert_sort_string(bad)


class TestIsValidNumber:
    @pytest.mark.parametrize("value", [0, 12, 9.99, "15", "0.5"])
    def test_accepts_numbers_and_numeric_strings(self, value):
        assert is_valid_number(value)

    @pytest.mark.parametrize("value", [None, True, "abc", "", -1, "-2", float("nan"), float("inf"), "inf"])
    def test_rejects_non_numeric(self, value):
        assert not is_valid_number(value)
