"""
Database models for the Pricebook store.

All SQLAlchemy models are imported here so they register with Base.metadata.
"""

from pricebook.models.category import Category
from pricebook.models.product import Product

__all__ = [
    "Category",
    "Product",
]
