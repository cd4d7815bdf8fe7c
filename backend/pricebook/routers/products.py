"""
API endpoints for the products table.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from pricebook.config import settings
from pricebook.database import get_db
from pricebook.schemas import (
    CountResponse,
    ProductCreate,
    ProductListResponse,
    ProductLookupResponse,
    ProductResponse,
    ProductUpdate,
)
from pricebook.services.store_service import store_service

router = APIRouter()


@router.get("", response_model=ProductListResponse)
def list_products(
    category_id: Optional[str] = None,
    search: Optional[str] = None,
    order: str = "name",
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """List products with optional category filter and name/SKU search."""
    products, total = store_service.list_products(
        db,
        category_id=category_id,
        search=search,
        order=order,
        skip=skip,
        limit=limit,
    )
    return ProductListResponse(
        total=total,
        skip=skip,
        limit=limit,
        products=[ProductResponse.model_validate(p) for p in products],
    )


@router.get("/count", response_model=CountResponse)
def count_products(category_id: Optional[str] = None, db: Session = Depends(get_db)):
    """Count-only projection, optionally for one category."""
    return CountResponse(count=store_service.count_products(db, category_id=category_id))


@router.get("/category-refs", response_model=List[str])
def category_refs(db: Session = Depends(get_db)):
    """category_id of every product (one entry per product)."""
    return store_service.category_refs(db)


@router.get("/lookup", response_model=Optional[ProductLookupResponse])
def lookup_by_sku(sku: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    """Case-insensitive exact SKU match; null when nothing matches."""
    product = store_service.lookup_by_sku(db, sku)
    if product is None:
        return None
    data = ProductResponse.model_validate(product).model_dump()
    data["category_name"] = product.category.name if product.category else None
    return ProductLookupResponse(**data)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, db: Session = Depends(get_db)):
    return store_service.get_product(db, product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(product: ProductCreate, db: Session = Depends(get_db)):
    """Create a new product."""
    return store_service.create_product(db, product)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(product_id: str, product: ProductUpdate, db: Session = Depends(get_db)):
    """Update an existing product."""
    return store_service.update_product(db, product_id, product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, db: Session = Depends(get_db)):
    store_service.delete_product(db, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
