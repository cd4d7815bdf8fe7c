"""
API endpoints for the categories table.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from pricebook.database import get_db
from pricebook.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from pricebook.services.store_service import store_service

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
def list_categories(order: str = "name", db: Session = Depends(get_db)):
    """List all categories, ordered by name unless asked otherwise."""
    return store_service.list_categories(db, order=order)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, db: Session = Depends(get_db)):
    return store_service.get_category(db, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    """Create a new category."""
    return store_service.create_category(db, category)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str, category: CategoryUpdate, db: Session = Depends(get_db)
):
    """Update name and/or icon of a category."""
    return store_service.update_category(db, category_id, category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, db: Session = Depends(get_db)):
    """Delete an empty category."""
    store_service.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
