"""
# `app/schemas/product.py` — Product Schema Documentation

## Overview
Pydantic models for creating, updating and listing a store's products.
Every product belongs to one store and (optionally) one category, and carries the
modifier groups and discounts the checkout screen offers for it.

---

## Building blocks

### `ModifierOption`
| Field | Type    | Required | Description |
|-------|---------|----------|-------------|
| name  | `str`   | ✔        | Option label (e.g. "Large") |
| price | `float` | ✖        | Incremental unit price (default 0) |

### `ModifierGroup`
| Field   | Type                   | Required | Description |
|---------|------------------------|----------|-------------|
| name    | `str`                  | ✔        | Group name (e.g. "Size") |
| options | `list[ModifierOption]` | ✖        | Selectable options, at most one is chosen per line |

### `Discount`
| Field | Type                           | Required | Description |
|-------|--------------------------------|----------|-------------|
| name  | `str`                          | ✔        | Discount label, unique per product |
| type  | `"percentage"` \\| `"fixed"`   | ✔        | Percentage of the running total, or fixed amount per unit |
| value | `float`                        | ✔        | Percent (10 = 10%) or amount |

---

## Input Schemas

### `ProductCreate`
| Field       | Type                  | Required | Description |
|-------------|-----------------------|----------|-------------|
| name        | `str`                 | ✔        | Product name |
| description | `str`                 | ✖        | Description |
| price       | `float`               | ✔        | Unit price (≥0) |
| category    | `str` / `null`        | ✖        | Category ID (same store) |
| modifiers   | `list[ModifierGroup]` | ✖        | Modifier groups |
| discounts   | `list[Discount]`      | ✖        | Available discounts |

### `ProductUpdate`
Same fields, all optional; only the provided ones are written.

---

## Output Schemas

### `ProductOut`
`ProductCreate` fields plus `id`, `store` and `created_at`.

"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

DiscountType = Literal["percentage", "fixed"]


class ModifierOption(BaseModel):
    name: str = Field(..., min_length=1, description="Option label")
    price: float = Field(0.0, description="Incremental unit price")


class ModifierGroup(BaseModel):
    name: str = Field(..., min_length=1, description="Modifier group name")
    options: List[ModifierOption] = Field(default_factory=list)


class Discount(BaseModel):
    name: str = Field(..., min_length=1, description="Discount label")
    type: DiscountType = Field(..., description="percentage | fixed")
    value: float = Field(..., description="Percent or amount")


class ProductBase(BaseModel):
    """Common product fields for creation."""
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field("", description="Detailed description of the product")
    price: float = Field(..., ge=0, description="Unit price")
    category: Optional[str] = Field(None, description="Category ID this product belongs to")
    modifiers: List[ModifierGroup] = Field(default_factory=list)
    discounts: List[Discount] = Field(default_factory=list)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    """Schema for updating product fields."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    modifiers: Optional[List[ModifierGroup]] = None
    discounts: Optional[List[Discount]] = None


class ProductOut(ProductBase):
    id: str
    store: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
