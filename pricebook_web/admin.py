"""
Admin CRUD for categories and products.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List

from pricebook_web.api_client import CatalogClient
from pricebook_web.catalog import CatalogListing, CategorySummary
from pricebook_web.forms import CategoryForm, ProductForm
from pricebook_web.models import Category, Product

logger = logging.getLogger(__name__)

CATEGORY_NOT_EMPTY_MESSAGE = (
    "Cannot delete category with products. Please delete all products first."
)


class CategoryNotEmptyError(Exception):
    """Category still has products and cannot be deleted."""

    def __init__(self, category_id: str, product_count: int):
        super().__init__(CATEGORY_NOT_EMPTY_MESSAGE)
        self.category_id = category_id
        self.product_count = product_count


class CategoryAdmin:
    """Category management; keeps the last loaded product counts."""

    def __init__(self, client: CatalogClient):
        self.client = client
        self.listing = CatalogListing(client)

    async def list(self) -> List[CategorySummary]:
        return await self.listing.load()

    def product_count(self, category_id: str) -> int:
        return self.listing.product_count(category_id)

    async def create(self, form: CategoryForm) -> Category:
        category = await self.client.create_category(form.to_payload())
        logger.info(f"Category created: {category.name}")
        return category

    async def update(self, category_id: str, form: CategoryForm) -> Category:
        category = await self.client.update_category(category_id, form.to_payload())
        logger.info(f"Category updated: {category.name}")
        return category

    async def delete(self, category_id: str) -> None:
        """Refuses, without contacting the store, while products remain."""
        count = self.product_count(category_id)
        if count > 0:
            raise CategoryNotEmptyError(category_id, count)
        await self.client.delete_category(category_id)
        logger.info(f"Category deleted: {category_id}")


@dataclass
class ProductRow:
    product: Product
    category_name: str


@dataclass
class ProductAdmin:
    client: CatalogClient
    page_size: int = 100
    categories: List[Category] = field(default_factory=list)

    async def list(self) -> List[ProductRow]:
        """All products, newest first, with their category names."""
        categories, products = await asyncio.gather(
            self.client.list_categories(order="name"),
            self._all_products(),
        )
        self.categories = categories
        names = {c.id: c.name for c in categories}
        return [ProductRow(p, names.get(p.category_id, "Unknown")) for p in products]

    async def _all_products(self) -> List[Product]:
        products: List[Product] = []
        skip = 0
        while True:
            page = await self.client.list_products(
                order="-created_at", skip=skip, limit=self.page_size
            )
            products.extend(page.products)
            skip += len(page.products)
            if not page.products or skip >= page.total:
                return products

    async def create(self, form: ProductForm) -> Product:
        product = await self.client.create_product(form.to_payload())
        logger.info(f"Product created: {product.sku}")
        return product

    async def update(self, product_id: str, form: ProductForm) -> Product:
        product = await self.client.update_product(product_id, form.to_payload())
        logger.info(f"Product updated: {product.sku}")
        return product

    async def delete(self, product_id: str) -> None:
        await self.client.delete_product(product_id)
        logger.info(f"Product deleted: {product_id}")
