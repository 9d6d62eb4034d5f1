"""Tests for storefront browsing: listing filters, detail lookup and stats."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from app.core.exceptions import NotFoundError
from app.models.brand import Brand
from app.models.category import Category
from app.schemas.product_schemas import ProductStatsUpdate
from app.services.product_client_service import ProductClientService

NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def service() -> ProductClientService:
    return ProductClientService(clock=lambda: NOW)


@pytest.fixture
def category(db_session) -> Category:
    category = Category(name="Shoes", is_active=True)
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture
def brand(db_session) -> Brand:
    brand = Brand(name="Acme", slug="acme", is_active=True)
    db_session.add(brand)
    db_session.commit()
    return brand


def _variant(sku: str, price: float) -> dict:
    return {"sku": sku, "price": price, "quantity": 1}


class TestFindAll:
    def test_price_range_needs_a_variant_inside_both_bounds(self, db_session, service, make_product):
        make_product("Cheap", variants=[_variant("C-1", 5)])
        make_product("Middle", variants=[_variant("M-1", 15)])
        make_product("Spread", variants=[_variant("S-1", 8), _variant("S-2", 25)])
        make_product("Edge", variants=[_variant("E-1", 20)])

        result = service.find_all(db_session, min_price=10, max_price=20)

        assert sorted(p.name for p in result.items) == ["Edge", "Middle"]
        assert result.meta.total == 2

    def test_single_price_bound_disables_the_filter(self, db_session, service, make_product):
        make_product("Cheap", variants=[_variant("C-1", 5)])
        make_product("Pricey", variants=[_variant("P-1", 500)])

        assert service.find_all(db_session, min_price=10).meta.total == 2
        assert service.find_all(db_session, max_price=20).meta.total == 2

    def test_availability_window_and_active_flag(self, db_session, service, make_product):
        make_product("Open")
        make_product("Started", available_from=NOW - timedelta(days=1))
        make_product("Future", available_from=NOW + timedelta(days=1))
        make_product("Expired", available_to=NOW - timedelta(seconds=1))
        make_product("Inside", available_from=NOW - timedelta(days=1), available_to=NOW + timedelta(days=1))
        make_product("Hidden", is_active=False)

        names = {p.name for p in service.find_all(db_session, limit=50).items}

        assert names == {"Open", "Started", "Inside"}

    def test_search_covers_name_description_brand_and_tags(
        self, db_session, service, make_product, brand
    ):
        make_product("Trail Runner")
        make_product("Plain", description="Great for TRAIL days")
        make_product("Branded", brand_id=brand.id)
        make_product("Tagged", tags=["acme-fans"])
        make_product("Unrelated")

        trail = {p.name for p in service.find_all(db_session, search="trail").items}
        acme = {p.name for p in service.find_all(db_session, search="ACME").items}

        assert trail == {"Trail Runner", "Plain"}
        assert acme == {"Branded", "Tagged"}

    def test_search_treats_wildcards_literally(self, db_session, service, make_product):
        make_product("100% Cotton")
        make_product("Cotton Blend")

        names = [p.name for p in service.find_all(db_session, search="100%").items]

        assert names == ["100% Cotton"]

    def test_search_is_anded_with_availability(self, db_session, service, make_product):
        make_product("Trail Hidden", is_active=False)

        assert service.find_all(db_session, search="trail").meta.total == 0

    def test_category_brand_and_tag_filters(self, db_session, service, make_product, category, brand):
        make_product("In Category", categories=[category.id])
        make_product("Of Brand", brand_id=brand.id)
        make_product("With Tags", tags=["summer", "sale"])

        assert [p.name for p in service.find_all(db_session, category_id=category.id).items] == ["In Category"]
        assert [p.name for p in service.find_all(db_session, brand_id=brand.id).items] == ["Of Brand"]
        assert [p.name for p in service.find_all(db_session, tags=["winter", "sale"]).items] == ["With Tags"]

    def test_sort_and_pagination_meta(self, db_session, service, make_product):
        for name in ["Charlie", "Alpha", "Echo", "Bravo", "Delta"]:
            make_product(name)

        first = service.find_all(db_session, page=1, limit=2, sort_by="name", sort_order="asc")
        last = service.find_all(db_session, page=3, limit=2, sort_by="name", sort_order="asc")

        assert [p.name for p in first.items] == ["Alpha", "Bravo"]
        assert [p.name for p in last.items] == ["Echo"]
        assert first.meta.model_dump(by_alias=True) == {"total": 5, "page": 1, "limit": 2, "totalPages": 3}

    def test_unknown_sort_field_is_rejected(self, db_session, service):
        with pytest.raises(ValueError):
            service.find_all(db_session, sort_by="password")


class TestFindOne:
    def test_by_id_and_by_slug(self, db_session, service, make_product):
        product = make_product("Blue Sneaker")

        assert service.find_one(db_session, str(product.id)).id == product.id
        assert service.find_one(db_session, "blue-sneaker").id == product.id

    def test_numeric_slug_still_resolves(self, db_session, service, make_product):
        product = make_product("2024")

        assert service.find_one(db_session, "2024").id == product.id

    def test_digit_slug_beyond_id_range_resolves_by_slug(self, db_session, service, make_product):
        product = make_product("99999999999999999999999")

        assert service.find_one(db_session, "99999999999999999999999").id == product.id

    def test_view_is_counted(self, db_session, service, make_product):
        product = make_product("Counted")

        service.find_one(db_session, "counted")
        second = service.find_one(db_session, "counted")

        assert second.view_count == 2
        assert product.view_count == 0

    @pytest.mark.parametrize(
        "fields",
        [
            {"is_active": False},
            {"available_from": NOW + timedelta(hours=1)},
            {"available_to": NOW - timedelta(hours=1)},
        ],
    )
    def test_invisible_product_is_not_found(self, db_session, service, make_product, fields):
        product = make_product("Invisible", **fields)

        with pytest.raises(NotFoundError):
            service.find_one(db_session, str(product.id))
        with pytest.raises(NotFoundError):
            service.find_one(db_session, product.slug)

    def test_unknown_product_is_not_found(self, db_session, service):
        with pytest.raises(NotFoundError):
            service.find_one(db_session, "nope")


class TestFixedListings:
    def test_flagged_listings(self, db_session, service, make_product):
        make_product("Featured", is_featured=True)
        make_product("Fresh", is_new_arrival=True)
        make_product("Discounted", is_on_sale=True)
        make_product("Featured Hidden", is_featured=True, is_active=False)

        assert [p.name for p in service.get_featured_products(db_session)] == ["Featured"]
        assert [p.name for p in service.get_new_arrival_products(db_session)] == ["Fresh"]
        assert [p.name for p in service.get_on_sale_products(db_session)] == ["Discounted"]

    def test_best_sellers_order_by_sold_then_views(self, db_session, service, make_product):
        flagged = make_product("Flagged", is_best_seller=True)
        popular = make_product("Popular")
        viewed = make_product("Viewed")
        make_product("Nobody")

        service.increment_product_stats(db_session, popular.id, ProductStatsUpdate(total_sold_count_increment=10))
        service.increment_product_stats(
            db_session, viewed.id, ProductStatsUpdate(total_sold_count_increment=10, view_count_increment=5)
        )

        names = [p.name for p in service.get_best_seller_products(db_session)]

        assert names == ["Viewed", "Popular", "Flagged"]
        assert flagged.id not in {p.id for p in service.get_best_seller_products(db_session, limit=2)}

    def test_related_share_category_brand_or_tag(self, db_session, service, make_product, category, brand):
        base = make_product("Base", categories=[category.id], brand_id=brand.id, tags=["retro"])
        make_product("Same Category", categories=[category.id])
        make_product("Same Brand", brand_id=brand.id)
        make_product("Same Tag", tags=["retro"])
        make_product("Stranger", tags=["modern"])
        make_product("Hidden Sibling", categories=[category.id], is_active=False)

        related = {p.name for p in service.get_related_products(db_session, base.id, limit=10)}

        assert related == {"Same Category", "Same Brand", "Same Tag"}
        assert len(service.get_related_products(db_session, base.id)) == 3

    def test_related_of_missing_product_is_not_found(self, db_session, service):
        with pytest.raises(NotFoundError):
            service.get_related_products(db_session, 404)


class TestIncrementStats:
    def test_two_view_increments_add_up(self, db_session, service, make_product):
        product = make_product("Stats")

        service.increment_product_stats(db_session, product.id, ProductStatsUpdate(view_count_increment=1))
        result = service.increment_product_stats(
            db_session, product.id, ProductStatsUpdate(view_count_increment=1)
        )

        assert result.view_count == 2
        assert result.total_sold_count == 0
        assert result.review_count == 0
        assert result.average_rating == 0

    def test_rating_is_set_not_added(self, db_session, service, make_product):
        product = make_product("Rated")

        service.increment_product_stats(db_session, product.id, ProductStatsUpdate(average_rating=4.5))
        result = service.increment_product_stats(
            db_session, product.id, ProductStatsUpdate(average_rating=3.0, review_count_increment=2)
        )

        assert result.average_rating == 3.0
        assert result.review_count == 2

    def test_empty_payload_returns_product_unchanged(self, db_session, service, make_product):
        product = make_product("Untouched")

        result = service.increment_product_stats(db_session, product.id, ProductStatsUpdate())

        assert result.view_count == 0
        assert result.id == product.id

    def test_missing_product_is_not_found(self, db_session, service):
        with pytest.raises(NotFoundError):
            service.increment_product_stats(db_session, 999, ProductStatsUpdate(view_count_increment=1))
        with pytest.raises(NotFoundError):
            service.increment_product_stats(db_session, 999, ProductStatsUpdate())


class TestProductClientApi:
    def test_listing_response_shape(self, client, make_product):
        make_product("Shape", variants=[_variant("SH-1", 12)])

        response = client.get("/products", params={"minPrice": 10, "maxPrice": 20, "sortBy": "name"})

        assert response.status_code == 200
        body = response.json()
        assert body["meta"] == {"total": 1, "page": 1, "limit": 10, "totalPages": 1}
        item = body["items"][0]
        assert item["slug"] == "shape"
        assert item["variants"][0]["price"] == 12
        assert "viewCount" in item and "isActive" in item

    def test_repeated_tags_query(self, client, make_product):
        make_product("Tagged", tags=["a"])
        make_product("Other", tags=["b"])

        response = client.get("/products?tags=a&tags=c")

        assert [p["name"] for p in response.json()["items"]] == ["Tagged"]

    def test_bad_sort_is_422(self, client):
        assert client.get("/products", params={"sortBy": "password"}).status_code == 422
        assert client.get("/products", params={"sortOrder": "up"}).status_code == 422

    def test_fixed_routes_win_over_slug(self, client, make_product):
        make_product("Star", is_featured=True)

        response = client.get("/products/featured")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Star"]

    def test_detail_and_stats(self, client, make_product):
        product = make_product("Detail")

        assert client.get("/products/detail").json()["viewCount"] == 1
        stats = client.post(f"/products/{product.id}/stats", json={"viewCountIncrement": 1})
        stats = client.post(f"/products/{product.id}/stats", json={"viewCountIncrement": 1})

        assert stats.status_code == 200
        assert stats.json()["viewCount"] == 3

    def test_invalid_stats_are_422(self, client, make_product):
        product = make_product("Bounds")

        assert client.post(f"/products/{product.id}/stats", json={"averageRating": 6}).status_code == 422
        assert client.post(f"/products/{product.id}/stats", json={"viewCountIncrement": -1}).status_code == 422

    def test_unavailable_detail_is_404(self, client, make_product):
        from app.utils.time_utils import utcnow

        product = make_product("Later", available_from=utcnow() + timedelta(days=2))

        response = client.get(f"/products/{product.id}")

        assert response.status_code == 404
        assert response.json()["errorCode"] == "NOT_FOUND"

    @pytest.mark.parametrize("segment", ["%C2%B2", "99999999999999999999999", "0"])
    def test_non_id_digit_segment_falls_back_to_slug_and_is_404(self, client, segment):
        response = client.get(f"/products/{segment}")

        assert response.status_code == 404
        assert response.json()["errorCode"] == "NOT_FOUND"

    def test_out_of_range_ids_are_422(self, client):
        too_big = "99999999999999999999999"

        assert client.get(f"/products/{too_big}/related").status_code == 422
        assert client.post(f"/products/{too_big}/stats", json={"viewCountIncrement": 1}).status_code == 422
        assert client.get("/products", params={"categoryId": too_big}).status_code == 422
        assert client.get("/products", params={"brandId": too_big}).status_code == 422
