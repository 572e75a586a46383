# app/services/cart.py
"""
Checkout cart: ordered line items keyed by product, with per-line modifier and
discount selections and the totals derived from them.

Lines keep insertion order (receipt order). One line per product; adding a product
again bumps its quantity. Quantity never drops below 1 through `change_quantity`.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterator, List

from pydantic import BaseModel, Field

from app.schemas.product import Discount, ModifierOption, ProductOut
from app.schemas.sale import SelectedModifier
from app.services import pricing


class LineItem(BaseModel):
    product: ProductOut
    quantity: int = Field(1, ge=1)
    selected_modifiers: List[SelectedModifier] = Field(default_factory=list)
    selected_discounts: List[Discount] = Field(default_factory=list)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def unit_price(self) -> float:
        return self.product.price

    def total(self) -> float:
        return pricing.line_total(
            self.product.price, self.quantity, self.selected_modifiers, self.selected_discounts
        )


class Cart:
    """In-memory cart owned by a single checkout view."""

    def __init__(self) -> None:
        self._lines: List[LineItem] = []

    # ---------- reading ----------
    @property
    def lines(self) -> List[LineItem]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(list(self._lines))

    def find(self, product_id: str) -> LineItem | None:
        for line in self._lines:
            if line.product.id == product_id:
                return line
        return None

    # ---------- mutations ----------
    def add_item(self, product: ProductOut) -> LineItem:
        """Bump the existing line for `product`, else append a fresh one."""
        line = self.find(product.id)
        if line is not None:
            line.quantity += 1
            return line
        line = LineItem(product=product, quantity=1)
        self._lines.append(line)
        return line

    def remove_item(self, product_id: str) -> None:
        self._lines = [line for line in self._lines if line.product.id != product_id]

    def change_quantity(self, product_id: str, delta: int) -> None:
        line = self.find(product_id)
        if line is None:
            return
        new_quantity = line.quantity + delta
        if new_quantity > 0:
            line.quantity = new_quantity

    def _line_at(self, line_index: int) -> LineItem:
        if not 0 <= line_index < len(self._lines):
            raise IndexError(f"No cart line at index {line_index}")
        return self._lines[line_index]

    def toggle_modifier(self, line_index: int, group_name: str, option: ModifierOption) -> None:
        """Select `option` for `group_name`, replacing any previous choice of that group."""
        line = self._line_at(line_index)
        for i, selected in enumerate(line.selected_modifiers):
            if selected.name == group_name:
                line.selected_modifiers[i] = SelectedModifier(name=group_name, option=option)
                return
        line.selected_modifiers.append(SelectedModifier(name=group_name, option=option))

    def toggle_discount(self, line_index: int, discount: Discount) -> None:
        """Switch `discount` on or off for a line (matched by name)."""
        line = self._line_at(line_index)
        kept = [d for d in line.selected_discounts if d.name != discount.name]
        if len(kept) == len(line.selected_discounts):
            kept.append(discount)
        line.selected_discounts = kept

    def clear(self) -> None:
        self._lines = []

    # ---------- totals ----------
    def line_total(self, line: LineItem) -> float:
        return line.total()

    def total(self) -> float:
        running = Decimal("0")
        for line in self._lines:
            running += pricing.line_total_decimal(
                line.product.price, line.quantity, line.selected_modifiers, line.selected_discounts
            )
        return float(running)
