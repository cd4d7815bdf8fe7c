"""
Tests for the debounced SKU quick-search
"""
import asyncio
from decimal import Decimal

import httpx
import pytest

from pricebook_web.api_client import CatalogClient
from pricebook_web.models import ProductSearchResult
from pricebook_web.sku_search import (
    NOT_FOUND_MESSAGE,
    MessageKind,
    SkuSearch,
    normalize_sku,
)


class GatedClient:
    """find_by_sku blocks on a per-SKU event so tests decide completion order"""

    def __init__(self):
        self.calls = []
        self.gates = {}

    def gate(self, sku):
        self.gates[sku] = asyncio.Event()
        return self.gates[sku]

    async def find_by_sku(self, sku):
        self.calls.append(sku)
        gate = self.gates.get(sku)
        if gate is not None:
            await gate.wait()
        return ProductSearchResult(
            id=f"id-{sku}",
            name=f"Product {sku}",
            sku=sku,
            price=Decimal("100.00"),
            image_url="https://img.example.com/x.jpg",
            category_id="cat-1",
            category_name="Watches",
        )


def test_normalize_sku():
    assert normalize_sku("  rolex-001 ") == "ROLEX-001"


@pytest.mark.unit
@pytest.mark.asyncio
class TestSkuSearch:

    async def test_stale_response_is_dropped(self):
        client = GatedClient()
        first, second = client.gate("D1"), client.gate("D2")
        search = SkuSearch(client, delay=0)

        d1 = asyncio.create_task(search.dispatch("d1"))
        await asyncio.sleep(0)
        d2 = asyncio.create_task(search.dispatch("d2"))
        await asyncio.sleep(0)

        second.set()
        await d2
        assert search.state.result.sku == "D2"

        first.set()
        await d1
        assert search.state.result.sku == "D2"
        assert search.state.searching is False
        assert client.calls == ["D1", "D2"]

    async def test_debounce_sends_one_normalized_lookup(self):
        client = GatedClient()
        search = SkuSearch(client, delay=0.01)

        search.on_input("r")
        search.on_input("rol")
        search.on_input("rolex-001 ")
        await search.settle()

        assert client.calls == ["ROLEX-001"]
        assert search.state.result.name == "Product ROLEX-001"
        assert search.state.message == ""

    async def test_not_found_message(self, fake_client):
        search = SkuSearch(fake_client, delay=0)

        await search.dispatch("NOPE-404")

        assert search.state.result is None
        assert search.state.searching is False
        assert search.state.message == NOT_FOUND_MESSAGE
        assert search.state.message_kind == MessageKind.INFO

    async def test_found_via_fake_store(self, fake_client):
        search = SkuSearch(fake_client, delay=0)

        await search.dispatch("rolex-007")

        assert search.state.result.name == "Rolex Model 07"
        assert fake_client.called("find_by_sku") == [("find_by_sku", "ROLEX-007")]

    async def test_store_error_shown_verbatim(self, fake_client):
        fake_client.fail_with = "Request to the catalog store timed out"
        search = SkuSearch(fake_client, delay=0)

        await search.dispatch("ROLEX-001")

        assert search.state.searching is False
        assert search.state.message == "Request to the catalog store timed out"
        assert search.state.message_kind == MessageKind.ERROR

    async def test_blank_input_sends_nothing(self, fake_client):
        search = SkuSearch(fake_client, delay=0)

        search.on_input("   ")
        await search.settle()

        assert fake_client.called("find_by_sku") == []
        assert search.state.searching is False

    async def test_clearing_discards_in_flight_lookup(self):
        client = GatedClient()
        gate = client.gate("ROLEX-001")
        search = SkuSearch(client, delay=0)

        search.on_input("ROLEX-001")
        while not client.calls:
            await asyncio.sleep(0)
        assert search.state.searching is True

        search.clear()
        gate.set()
        await search.settle()

        assert search.state.result is None
        assert search.state.searching is False
        assert search.state.message == ""

    async def test_on_change_sees_searching_then_result(self):
        client = GatedClient()
        seen = []
        search = SkuSearch(client, delay=0, on_change=lambda s: seen.append(s.searching))

        await search.dispatch("BAG-001")

        assert seen == [True, False]

    async def test_garbled_store_reply_ends_in_error(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>proxy error</html>")
        )
        client = CatalogClient(base_url="http://store", transport=transport)
        search = SkuSearch(client, delay=0)

        await search.dispatch("ROLEX-001")

        assert search.state.searching is False
        assert search.state.result is None
        assert search.state.message_kind == MessageKind.ERROR
        assert "Unexpected response from the catalog store" in search.state.message
        await client.aclose()
