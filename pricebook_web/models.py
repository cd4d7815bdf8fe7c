"""
Client-side copies of store rows.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class Category(BaseModel):
    id: str
    name: str
    icon: str = "shopping-bag"
    created_at: Optional[datetime] = None


class Product(BaseModel):
    id: str
    name: str
    sku: str
    price: Decimal
    price_max: Optional[Decimal] = None
    image_url: str
    category_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductSearchResult(Product):
    """Product returned by the SKU lookup, joined with its category name."""

    category_name: Optional[str] = None


class ProductPage(BaseModel):
    total: int
    skip: int
    limit: int
    products: List[Product]
