"""
Category listing with per-category product counts.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from pricebook_web.api_client import CatalogClient, StoreError
from pricebook_web.icons import CategoryIcon
from pricebook_web.models import Category

logger = logging.getLogger(__name__)


@dataclass
class CategorySummary:
    category: Category
    product_count: int

    @property
    def icon(self) -> CategoryIcon:
        return CategoryIcon.from_key(self.category.icon)

    @property
    def count_label(self) -> str:
        noun = "product" if self.product_count == 1 else "products"
        return f"{self.product_count} {noun}"


def count_by_category(categories: Iterable[Category], refs: Iterable[Optional[str]]) -> Dict[str, int]:
    """
    Reduces product category references into a count per category.

    Every category gets an entry (0 when it has no products); references to
    unknown categories are kept so callers can spot orphans.
    """
    counts: Dict[str, int] = {c.id: 0 for c in categories}
    for category_id, n in Counter(ref for ref in refs if ref).items():
        counts[category_id] = counts.get(category_id, 0) + n
    return counts


@dataclass
class CatalogListing:
    """Loads categories (ordered by name) and their product counts."""

    client: CatalogClient
    categories: List[Category] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    loading: bool = False
    error: str = ""

    async def load(self) -> List[CategorySummary]:
        self.loading = True
        self.error = ""
        try:
            categories = await self.client.list_categories(order="name")
            refs = await self.client.product_category_refs() if categories else []
            self.categories = categories
            self.counts = count_by_category(categories, refs)
        except StoreError as e:
            logger.error(f"Error loading categories: {e}")
            self.categories = []
            self.counts = {}
            self.error = e.message
        finally:
            self.loading = False
        return self.summaries

    @property
    def summaries(self) -> List[CategorySummary]:
        return [CategorySummary(c, self.counts.get(c.id, 0)) for c in self.categories]

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.categories

    def product_count(self, category_id: str) -> int:
        return self.counts.get(category_id, 0)
