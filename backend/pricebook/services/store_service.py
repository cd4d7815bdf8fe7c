"""
Query and write operations over the categories and products tables.
"""

import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from pricebook.models.category import Category
from pricebook.models.product import Product
from pricebook.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
)

logger = logging.getLogger(__name__)

# order parameter -> ORDER BY clause; "-" prefix means descending
PRODUCT_ORDERINGS = {
    "name": (Product.name.asc(), Product.id.asc()),
    "-name": (Product.name.desc(), Product.id.asc()),
    "created_at": (Product.created_at.asc(), Product.id.asc()),
    "-created_at": (Product.created_at.desc(), Product.id.asc()),
    "price": (Product.price.asc(), Product.id.asc()),
    "-price": (Product.price.desc(), Product.id.asc()),
}

CATEGORY_ORDERINGS = {
    "name": (Category.name.asc(),),
    "-name": (Category.name.desc(),),
    "created_at": (Category.created_at.asc(),),
    "-created_at": (Category.created_at.desc(),),
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class StoreService:
    """CRUD and filtered reads for the catalog tables."""

    # --- Categories ---

    def list_categories(self, db: Session, order: str = "name") -> List[Category]:
        if order not in CATEGORY_ORDERINGS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported order: {order}",
            )
        return db.query(Category).order_by(*CATEGORY_ORDERINGS[order]).all()

    def get_category(self, db: Session, category_id: str) -> Category:
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    def create_category(self, db: Session, data: CategoryCreate) -> Category:
        self._ensure_unique_category_name(db, data.name)
        category = Category(name=data.name, icon=data.icon)
        db.add(category)
        db.commit()
        db.refresh(category)
        logger.info(f"Created category {category.id} ({category.name})")
        return category

    def update_category(self, db: Session, category_id: str, data: CategoryUpdate) -> Category:
        category = self.get_category(db, category_id)
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in fields and fields["name"] != category.name:
            self._ensure_unique_category_name(db, fields["name"])
        for key, value in fields.items():
            setattr(category, key, value)
        db.commit()
        db.refresh(category)
        logger.info(f"Updated category {category.id}")
        return category

    def delete_category(self, db: Session, category_id: str) -> None:
        category = self.get_category(db, category_id)
        product_count = self.count_products(db, category_id=category_id)
        if product_count > 0:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Cannot delete category with products. Please delete all products first.",
            )
        db.delete(category)
        db.commit()
        logger.info(f"Deleted category {category_id}")

    def _ensure_unique_category_name(self, db: Session, name: str) -> None:
        existing = db.query(Category).filter(Category.name == name).first()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Category with this name already exists",
            )

    # --- Products ---

    def list_products(
        self,
        db: Session,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        order: str = "name",
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Product], int]:
        """Returns one page of products and the total matching count."""
        if order not in PRODUCT_ORDERINGS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported order: {order}",
            )

        query = db.query(Product)

        if category_id:
            query = query.filter(Product.category_id == category_id)

        if search:
            pattern = f"%{_escape_like(search)}%"
            query = query.filter(
                or_(
                    Product.name.ilike(pattern, escape="\\"),
                    Product.sku.ilike(pattern, escape="\\"),
                )
            )

        total = query.count()
        products = (
            query.order_by(*PRODUCT_ORDERINGS[order]).offset(skip).limit(limit).all()
        )
        return products, total

    def count_products(self, db: Session, category_id: Optional[str] = None) -> int:
        query = db.query(func.count(Product.id))
        if category_id:
            query = query.filter(Product.category_id == category_id)
        return query.scalar() or 0

    def category_refs(self, db: Session) -> List[str]:
        """category_id of every product, one entry per product."""
        return [row[0] for row in db.query(Product.category_id).all()]

    def lookup_by_sku(self, db: Session, sku: str) -> Optional[Product]:
        """Case-insensitive exact SKU match with the category eagerly loaded."""
        return (
            db.query(Product)
            .options(joinedload(Product.category))
            .filter(Product.sku.ilike(_escape_like(sku), escape="\\"))
            .order_by(Product.name.asc())
            .first()
        )

    def get_product(self, db: Session, product_id: str) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def create_product(self, db: Session, data: ProductCreate) -> Product:
        self.get_category(db, data.category_id)
        product = Product(**data.model_dump())
        db.add(product)
        db.commit()
        db.refresh(product)
        logger.info(f"Created product {product.id} ({product.sku})")
        return product

    def update_product(self, db: Session, product_id: str, data: ProductUpdate) -> Product:
        product = self.get_product(db, product_id)
        fields = data.model_dump(exclude_unset=True)
        if fields.get("category_id"):
            self.get_category(db, fields["category_id"])

        new_price = fields.get("price", product.price)
        new_price_max = fields.get("price_max", product.price_max)
        if new_price is not None and new_price_max is not None and new_price_max < new_price:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="price_max must be greater than or equal to price",
            )

        for key, value in fields.items():
            if value is None and key != "price_max":
                continue
            setattr(product, key, value)
        db.commit()
        db.refresh(product)
        logger.info(f"Updated product {product.id}")
        return product

    def delete_product(self, db: Session, product_id: str) -> None:
        product = self.get_product(db, product_id)
        db.delete(product)
        db.commit()
        logger.info(f"Deleted product {product_id}")


store_service = StoreService()
