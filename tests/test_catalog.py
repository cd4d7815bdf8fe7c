"""
Tests for the category listing and per-category counts
"""
import pytest

from pricebook_web.catalog import CatalogListing, count_by_category
from pricebook_web.icons import CategoryIcon
from pricebook_web.models import Category


class TestCountByCategory:

    def test_every_category_gets_an_entry(self):
        categories = [Category(id="a", name="A"), Category(id="b", name="B")]

        counts = count_by_category(categories, ["a", "a", None, "a"])

        assert counts == {"a": 3, "b": 0}

    def test_unknown_references_are_kept_separately(self):
        counts = count_by_category([Category(id="a", name="A")], ["a", "ghost"])

        assert counts["a"] == 1
        assert counts["ghost"] == 1


@pytest.mark.unit
@pytest.mark.asyncio
class TestCatalogListing:

    async def test_sorted_by_name_with_counts(self, fake_client):
        listing = CatalogListing(fake_client)

        summaries = await listing.load()

        assert [s.category.name for s in summaries] == ["Accessories", "Bags", "Watches"]
        assert [s.product_count for s in summaries] == [0, 1, 26]
        assert summaries[1].count_label == "1 product"
        assert summaries[2].count_label == "26 products"
        assert listing.loading is False

    async def test_counts_use_a_single_bulk_fetch(self, fake_client):
        await CatalogListing(fake_client).load()

        assert len(fake_client.called("product_category_refs")) == 1
        assert fake_client.called("count_products") == []

    async def test_unknown_icon_falls_back(self, fake_client):
        summaries = await CatalogListing(fake_client).load()

        icons = {s.category.name: s.icon for s in summaries}
        assert icons["Accessories"] is CategoryIcon.SHOPPING_BAG
        assert icons["Bags"] is CategoryIcon.BACKPACK

    async def test_empty_catalog(self, fake_client_factory):
        client = fake_client_factory()
        listing = CatalogListing(client)

        summaries = await listing.load()

        assert summaries == []
        assert listing.is_empty
        assert listing.error == ""
        assert client.called("product_category_refs") == []

    async def test_failure_still_finishes_loading(self, fake_client):
        fake_client.fail_with = "Cannot connect to the catalog store"
        listing = CatalogListing(fake_client)

        summaries = await listing.load()

        assert summaries == []
        assert listing.loading is False
        assert listing.error == "Cannot connect to the catalog store"
