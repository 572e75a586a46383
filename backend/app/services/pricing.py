# app/services/pricing.py
"""
Line pricing shared by the checkout cart and the sales repository.

line total = unit_price * qty + sum(option.price * qty), then every discount in
selection order: percentage -> running * (1 - value/100), fixed -> running - value * qty.

Amounts are handled as Decimal built from their string form and returned as float.
No rounding: 2-decimal formatting is left to whoever prints the number.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from app.schemas.product import Discount
from app.schemas.sale import SelectedModifier

_HUNDRED = Decimal("100")


def _money(value: Any) -> Decimal:
    return Decimal(str(value or 0))


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def modifier_unit_price(modifiers: Iterable[SelectedModifier | dict]) -> Decimal:
    """Sum of the selected options' incremental unit prices."""
    total = Decimal("0")
    for m in modifiers or []:
        total += _money(_field(_field(m, "option"), "price"))
    return total


def apply_discount(running: Decimal, discount: Discount | dict, quantity: int) -> Decimal:
    kind = _field(discount, "type")
    value = _money(_field(discount, "value"))
    if kind == "percentage":
        return running * (1 - value / _HUNDRED)
    if kind == "fixed":
        return running - value * quantity
    raise ValueError(f"Unknown discount type: {kind!r}")


def line_total_decimal(
    unit_price: Any,
    quantity: int,
    modifiers: Iterable[SelectedModifier | dict] = (),
    discounts: Iterable[Discount | dict] = (),
) -> Decimal:
    qty = int(quantity)
    running = _money(unit_price) * qty + modifier_unit_price(modifiers) * qty
    # Order matters: 10% then -3 differs from -3 then 10%
    for d in discounts or []:
        running = apply_discount(running, d, qty)
    return running


def line_total(
    unit_price: Any,
    quantity: int,
    modifiers: Iterable[SelectedModifier | dict] = (),
    discounts: Iterable[Discount | dict] = (),
) -> float:
    return float(line_total_decimal(unit_price, quantity, modifiers, discounts))


def sum_totals(values: Iterable[Any]) -> float:
    return float(sum((_money(v) for v in values), Decimal("0")))
