from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, model_validator


# --- Shared ---
class PaginatedResponse(BaseModel):
    total: int
    skip: int
    limit: int


class CountResponse(BaseModel):
    count: int


# --- Category ---
class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field("shopping-bag", max_length=50)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=50)


class CategoryResponse(CategoryBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


# --- Product ---
class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    sku: str = Field(..., min_length=1, max_length=64)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    price_max: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    image_url: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)


class ProductCreate(ProductBase):
    @model_validator(mode="after")
    def check_price_range(self):
        if self.price_max is not None and self.price_max < self.price:
            raise ValueError("price_max must be greater than or equal to price")
        return self


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    sku: Optional[str] = Field(None, min_length=1, max_length=64)
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    price_max: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    image_url: Optional[str] = Field(None, min_length=1)
    category_id: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def check_price_range(self):
        if (
            self.price is not None
            and self.price_max is not None
            and self.price_max < self.price
        ):
            raise ValueError("price_max must be greater than or equal to price")
        return self


class ProductResponse(ProductBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductLookupResponse(ProductResponse):
    category_name: Optional[str] = None


class ProductListResponse(PaginatedResponse):
    products: List[ProductResponse]
