"""
Validation of admin form input before anything is sent to the store.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from pricebook_web.icons import CategoryIcon


class FormError(Exception):
    """Form input rejected before submission."""


def _parse_amount(value: Any, label: str) -> Decimal:
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"{label} must be a number")
    if not amount.is_finite():
        raise ValueError(f"{label} must be a number")
    if amount < 0:
        raise ValueError(f"{label} cannot be negative")
    return amount.quantize(Decimal("0.01"))


class CategoryForm(BaseModel):
    name: str
    icon: CategoryIcon = CategoryIcon.SHOPPING_BAG

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name is required")
        return v

    @field_validator("icon", mode="before")
    @classmethod
    def known_icon(cls, v):
        return CategoryIcon.from_key(v)

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "icon": self.icon.value}


class ProductForm(BaseModel):
    name: str
    sku: str
    price: Decimal
    price_max: Optional[Decimal] = None
    image_url: str
    category_id: str

    @field_validator("name", "sku", "image_url", "category_id", mode="before")
    @classmethod
    def required_text(cls, v, info):
        v = (v or "").strip() if isinstance(v, str) or v is None else v
        if not v:
            labels = {
                "name": "Product name",
                "sku": "SKU",
                "image_url": "Image",
                "category_id": "Category",
            }
            raise ValueError(f"{labels[info.field_name]} is required")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v):
        if v is None or str(v).strip() == "":
            raise ValueError("Price is required")
        return _parse_amount(v, "Price")

    @field_validator("price_max", mode="before")
    @classmethod
    def parse_price_max(cls, v):
        if v is None or str(v).strip() == "":
            return None
        return _parse_amount(v, "Max price")

    @model_validator(mode="after")
    def check_range(self):
        if self.price_max is not None and self.price_max < self.price:
            raise ValueError("Max price must be greater than or equal to price")
        return self

    def to_payload(self) -> Dict[str, Any]:
        """JSON-safe body for the store API (amounts as strings)."""
        return {
            "name": self.name,
            "sku": self.sku,
            "price": str(self.price),
            "price_max": str(self.price_max) if self.price_max is not None else None,
            "image_url": self.image_url,
            "category_id": self.category_id,
        }


def _first_message(error: ValidationError) -> str:
    first = error.errors()[0]
    message = first.get("msg", "Invalid input")
    # pydantic prefixes ValueError messages with "Value error, "
    return message.removeprefix("Value error, ")


def parse_category_form(**fields) -> CategoryForm:
    try:
        return CategoryForm(**fields)
    except ValidationError as e:
        raise FormError(_first_message(e)) from e


def parse_product_form(**fields) -> ProductForm:
    try:
        return ProductForm(**fields)
    except ValidationError as e:
        raise FormError(_first_message(e)) from e
