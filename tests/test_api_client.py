"""
Tests for CatalogClient against the in-process store and mocked transports
"""
from decimal import Decimal

import httpx
import pytest

from pricebook_web.api_client import CatalogClient, StoreError


@pytest.mark.asyncio
class TestCatalogClientAgainstStore:

    async def test_list_categories_and_refs(self, catalog_client, populated_db):
        categories = await catalog_client.list_categories()
        refs = await catalog_client.product_category_refs()

        assert [c.name for c in categories] == ["Accessories", "Bags", "Watches"]
        assert len(refs) == 15

    async def test_list_products_page(self, catalog_client, populated_db):
        watches = (await catalog_client.list_categories())[2]

        page = await catalog_client.list_products(category_id=watches.id, skip=0, limit=12)

        assert page.total == 14
        assert len(page.products) == 12
        assert page.products[0].price == Decimal("1001.00")

    async def test_find_by_sku_joins_category_name(self, catalog_client, populated_db):
        result = await catalog_client.find_by_sku("BAG-001")

        assert result is not None
        assert result.name == "Travel Backpack"
        assert result.category_name == "Bags"
        assert result.price_max == Decimal("2999.00")

    async def test_find_by_sku_no_match(self, catalog_client, populated_db):
        assert await catalog_client.find_by_sku("NOPE-404") is None

    async def test_get_missing_category_returns_none(self, catalog_client, test_db):
        assert await catalog_client.get_category("missing") is None

    async def test_create_product_round_trip(self, catalog_client, test_db):
        category = await catalog_client.create_category({"name": "Wallets", "icon": "briefcase"})

        product = await catalog_client.create_product({
            "name": "Bifold",
            "sku": "WAL-1",
            "price": "499.50",
            "price_max": None,
            "image_url": "https://img.example.com/wal.jpg",
            "category_id": category.id,
        })

        assert product.category_id == category.id
        assert await catalog_client.count_products(category.id) == 1

    async def test_conflict_detail_becomes_message(self, catalog_client, populated_db):
        bags = (await catalog_client.list_categories())[1]

        with pytest.raises(StoreError) as exc_info:
            await catalog_client.delete_category(bags.id)

        assert exc_info.value.status_code == 409
        assert "Cannot delete category with products" in exc_info.value.message


@pytest.mark.asyncio
class TestCatalogClientErrors:

    async def test_server_error_detail(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(500, json={"detail": "Internal Server Error"})
        )
        client = CatalogClient(base_url="http://store", transport=transport)

        with pytest.raises(StoreError) as exc_info:
            await client.list_categories()

        assert exc_info.value.message == "Internal Server Error"
        assert exc_info.value.status_code == 500
        await client.aclose()

    async def test_plain_text_error_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad gateway"))
        client = CatalogClient(base_url="http://store", transport=transport)

        with pytest.raises(StoreError, match="Bad gateway"):
            await client.list_categories()
        await client.aclose()

    async def test_connection_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = CatalogClient(base_url="http://store", transport=httpx.MockTransport(refuse))

        with pytest.raises(StoreError, match="Cannot connect to the catalog store"):
            await client.find_by_sku("ROLEX-001")
        await client.aclose()

    async def test_api_key_header_sent(self):
        seen = {}

        def handler(request):
            seen["key"] = request.headers.get("X-API-Key")
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[])

        client = CatalogClient(base_url="http://store", api_key="k3y", transport=httpx.MockTransport(handler))
        await client.list_categories()
        await client.aclose()

        assert seen["key"] == "k3y"
        assert seen["params"] == {"order": "name"}

    async def test_non_json_success_body(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>proxy error</html>")
        )
        client = CatalogClient(base_url="http://store", transport=transport)

        with pytest.raises(StoreError, match="Unexpected response from the catalog store") as exc_info:
            await client.find_by_sku("ROLEX-001")

        assert exc_info.value.status_code == 200
        await client.aclose()

    @pytest.mark.parametrize("body", [
        {"products": "nope"},
        [{"id": "c1"}],
        {"unexpected": 1},
    ])
    async def test_body_with_wrong_shape(self, body):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
        client = CatalogClient(base_url="http://store", transport=transport)

        with pytest.raises(StoreError, match="Unexpected response from the catalog store"):
            await client.list_products(category_id="cat-1")
        with pytest.raises(StoreError, match="Unexpected response from the catalog store"):
            await client.list_categories()
        with pytest.raises(StoreError, match="Unexpected response from the catalog store"):
            await client.count_products()
        await client.aclose()
