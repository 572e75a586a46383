# app/schemas/sale.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.product import Discount, ModifierOption

PaymentMethod = Literal["cash", "card"]
SaleStatus = Literal["completed", "refunded"]


class SelectedModifier(BaseModel):
    """One chosen option of a modifier group on a line."""
    name: str = Field(..., min_length=1, description="Modifier group name")
    option: ModifierOption


# (Input) one line of a checkout
class SaleItemIn(BaseModel):
    product: str = Field(..., min_length=1, description="Product ID")
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0, description="Unit price at sale time")
    modifiers: List[SelectedModifier] = Field(default_factory=list)
    discounts: List[Discount] = Field(default_factory=list)


# (Input) sale creation payload
class SaleCreate(BaseModel):
    store: str = Field(..., min_length=1, description="Store ID")
    items: List[SaleItemIn] = Field(..., min_length=1)
    total: float
    payment_method: PaymentMethod
    # Accepted for the terminal's convenience, never persisted
    payment_details: Optional[Dict[str, Any]] = None


class SaleItemOut(SaleItemIn):
    subtotal: float
    product_name: Optional[str] = None


class SaleOut(BaseModel):
    id: str
    store: str
    items: List[SaleItemOut] = Field(default_factory=list)
    total: float
    payment_method: PaymentMethod
    status: SaleStatus = "completed"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SalesMetrics(BaseModel):
    total_sales: float = 0.0
    total_orders: int = 0
    average_order_value: float = 0.0
