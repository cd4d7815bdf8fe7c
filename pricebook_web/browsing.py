"""
Paginated product listing for one category, with an incremental filter.

The filter only narrows the page that is already loaded; it never sends a
new query for the whole category.
"""

import asyncio
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from pricebook_web.api_client import CatalogClient, StoreError
from pricebook_web.config import settings
from pricebook_web.models import Category, Product

logger = logging.getLogger(__name__)


class BrowseState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


def total_pages(total: int, page_size: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / page_size)


def clamp_page(page: int, pages: int) -> int:
    if pages <= 0:
        return 1
    return max(1, min(page, pages))


def dedupe_products(products: Iterable[Product]) -> List[Product]:
    """Drops repeated ids (first one wins) and orders by name."""
    seen = set()
    unique = []
    for product in products:
        if product.id in seen:
            continue
        seen.add(product.id)
        unique.append(product)
    return sorted(unique, key=lambda p: p.name)


def filter_products(products: Iterable[Product], query: str) -> List[Product]:
    """Case-insensitive substring match on name or SKU."""
    needle = query.strip().lower()
    if not needle:
        return list(products)
    return [
        p for p in products
        if needle in p.name.lower() or needle in p.sku.lower()
    ]


@dataclass
class CategoryBrowser:
    client: CatalogClient
    page_size: int = field(default_factory=lambda: settings.PAGE_SIZE)
    category_id: Optional[str] = None
    category: Optional[Category] = None
    products: List[Product] = field(default_factory=list)
    total: int = 0
    page: int = 1
    query: str = ""
    state: BrowseState = BrowseState.IDLE
    error: str = ""
    _load_seq: int = field(default=0, init=False, repr=False)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @property
    def visible_products(self) -> List[Product]:
        return filter_products(self.products, self.query)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    async def load_category(self, category_id: str) -> None:
        """Switches to a category and loads its first page."""
        self.category_id = category_id
        self.category = None
        self.products = []
        self.total = 0
        self.query = ""
        self.page = 1
        seq = self._begin_load()
        try:
            category, page = await asyncio.gather(
                self.client.get_category(category_id),
                self.client.list_products(
                    category_id=category_id, order="name", skip=0, limit=self.page_size
                ),
            )
        except StoreError as e:
            self._fail(seq, e)
            return
        if seq != self._load_seq:
            return
        self.category = category
        self._apply_page(page.products, page.total)

    async def go_to_page(self, page: int) -> bool:
        """Loads another page; out-of-range or current page is a no-op."""
        if self.category_id is None:
            return False
        if page < 1 or page > self.total_pages or page == self.page:
            return False
        await self._load_page(page)
        return True

    async def next_page(self) -> bool:
        return await self.go_to_page(self.page + 1)

    async def previous_page(self) -> bool:
        return await self.go_to_page(self.page - 1)

    async def set_query(self, text: str) -> None:
        """Changes the filter text; the page goes back to 1."""
        if text == self.query:
            return
        self.query = text
        if self.page != 1 and self.category_id is not None:
            await self._load_page(1)

    async def _load_page(self, page: int) -> None:
        self.page = page
        seq = self._begin_load()
        try:
            result = await self.client.list_products(
                category_id=self.category_id,
                order="name",
                skip=(page - 1) * self.page_size,
                limit=self.page_size,
            )
        except StoreError as e:
            self._fail(seq, e)
            return
        if seq != self._load_seq:
            return
        self._apply_page(result.products, result.total)

    def _begin_load(self) -> int:
        self._load_seq += 1
        self.state = BrowseState.LOADING
        self.error = ""
        return self._load_seq

    def _apply_page(self, products: List[Product], total: int) -> None:
        self.products = dedupe_products(products)[: self.page_size]
        self.total = total
        self.page = clamp_page(self.page, self.total_pages)
        self.state = BrowseState.READY

    def _fail(self, seq: int, error: StoreError) -> None:
        logger.error(f"Error loading products for category {self.category_id}: {error}")
        if seq != self._load_seq:
            return
        self.products = []
        self.error = error.message
        self.state = BrowseState.READY
