"""
Pytest configuration - shared fixtures
"""
import sys
import os
from decimal import Decimal
from typing import Dict, Generator, List, Optional

# In-memory store for every test; must be set before pricebook.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from pricebook.database import Base, get_db
from pricebook.main import app
from pricebook.models.category import Category
from pricebook.models.product import Product

from pricebook_web.api_client import CatalogClient, StoreError
from pricebook_web.models import (
    Category as CategoryRow,
    Product as ProductRow,
    ProductPage,
    ProductSearchResult,
)


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Create in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def override_get_db(test_db):
    def _get_db():
        yield test_db
    app.dependency_overrides[get_db] = _get_db
    yield
    del app.dependency_overrides[get_db]


@pytest.fixture
def api(override_get_db) -> TestClient:
    """TestClient for the store API backed by the in-memory database"""
    return TestClient(app)


@pytest_asyncio.fixture
async def catalog_client(override_get_db):
    """CatalogClient talking to the store app in-process"""
    client = CatalogClient(
        base_url="http://testserver",
        api_key="",
        transport=httpx.ASGITransport(app=app),
    )
    yield client
    await client.aclose()


@pytest.fixture
def populated_db(test_db):
    """Two categories with watches and bags, one empty category"""
    session = test_db

    watches = Category(name="Watches", icon="briefcase")
    bags = Category(name="Bags", icon="backpack")
    empty = Category(name="Accessories", icon="unknown-icon")
    session.add_all([watches, bags, empty])
    session.flush()

    for i in range(1, 15):
        session.add(
            Product(
                name=f"Rolex Model {i:02d}",
                sku=f"ROLEX-{i:03d}",
                price=Decimal("1000.00") + i,
                image_url=f"https://img.example.com/rolex-{i}.jpg",
                category_id=watches.id,
            )
        )
    session.add(
        Product(
            name="Travel Backpack",
            sku="bag-001",
            price=Decimal("2499.00"),
            price_max=Decimal("2999.00"),
            image_url="https://img.example.com/bag.jpg",
            category_id=bags.id,
        )
    )
    session.commit()
    return session


def make_product(
    id: str,
    name: str,
    sku: str,
    category_id: str = "cat-1",
    price: str = "100.00",
    price_max: Optional[str] = None,
) -> ProductRow:
    return ProductRow(
        id=id,
        name=name,
        sku=sku,
        price=Decimal(price),
        price_max=Decimal(price_max) if price_max is not None else None,
        image_url=f"https://img.example.com/{id}.jpg",
        category_id=category_id,
    )


class FakeCatalogClient:
    """In-memory stand-in for CatalogClient recording every call"""

    def __init__(self, categories: List[CategoryRow] = None, products: List[ProductRow] = None):
        self.categories = list(categories or [])
        self.products = list(products or [])
        self.calls: List[tuple] = []
        self.fail_with: Optional[str] = None

    def _check(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_with:
            raise StoreError(self.fail_with, status_code=500)

    def called(self, name) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]

    async def list_categories(self, order: str = "name") -> List[CategoryRow]:
        self._check("list_categories", order)
        return sorted(self.categories, key=lambda c: c.name)

    async def get_category(self, category_id: str) -> Optional[CategoryRow]:
        self._check("get_category", category_id)
        return next((c for c in self.categories if c.id == category_id), None)

    async def product_category_refs(self) -> List[str]:
        self._check("product_category_refs")
        return [p.category_id for p in self.products]

    async def list_products(self, category_id=None, search=None, order="name", skip=0, limit=50) -> ProductPage:
        self._check("list_products", category_id, skip, limit, search)
        rows = [p for p in self.products if category_id is None or p.category_id == category_id]
        if order == "-created_at":
            rows = list(reversed(rows))
        else:
            rows = sorted(rows, key=lambda p: p.name)
        return ProductPage(total=len(rows), skip=skip, limit=limit, products=rows[skip:skip + limit])

    async def find_by_sku(self, sku: str) -> Optional[ProductSearchResult]:
        self._check("find_by_sku", sku)
        for p in self.products:
            if p.sku.upper() == sku.upper():
                return ProductSearchResult(**p.model_dump(), category_name="Watches")
        return None

    async def create_category(self, fields: Dict) -> CategoryRow:
        self._check("create_category", fields)
        category = CategoryRow(id=f"cat-{len(self.categories) + 1}", **fields)
        self.categories.append(category)
        return category

    async def update_category(self, category_id: str, fields: Dict) -> CategoryRow:
        self._check("update_category", category_id, fields)
        return CategoryRow(id=category_id, **fields)

    async def delete_category(self, category_id: str) -> None:
        self._check("delete_category", category_id)
        self.categories = [c for c in self.categories if c.id != category_id]

    async def create_product(self, fields: Dict) -> ProductRow:
        self._check("create_product", fields)
        product = ProductRow(id=f"prod-{len(self.products) + 1}", **fields)
        self.products.append(product)
        return product

    async def update_product(self, product_id: str, fields: Dict) -> ProductRow:
        self._check("update_product", product_id, fields)
        return ProductRow(id=product_id, **fields)

    async def delete_product(self, product_id: str) -> None:
        self._check("delete_product", product_id)
        self.products = [p for p in self.products if p.id != product_id]


@pytest.fixture
def fake_client() -> FakeCatalogClient:
    categories = [
        CategoryRow(id="cat-2", name="Watches", icon="briefcase"),
        CategoryRow(id="cat-1", name="Bags", icon="backpack"),
        CategoryRow(id="cat-3", name="Accessories", icon="whatever"),
    ]
    products = [
        make_product(f"w{i}", f"Rolex Model {i:02d}", f"ROLEX-{i:03d}", category_id="cat-2")
        for i in range(1, 27)
    ]
    products.append(make_product("b1", "Travel Backpack", "BAG-001", category_id="cat-1", price="2499", price_max="2999"))
    return FakeCatalogClient(categories, products)


@pytest.fixture
def fake_client_factory():
    return FakeCatalogClient


@pytest.fixture
def product_factory():
    return make_product
