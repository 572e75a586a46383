# app/services/receipt.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.services.cart import Cart


class ReceiptLine(BaseModel):
    name: str
    quantity: int
    modifiers: List[str] = Field(default_factory=list)  # "Size: Large"
    amount: float  # unit price x quantity


class Receipt(BaseModel):
    store_name: str
    address: str = ""
    phone: str = ""
    lines: List[ReceiptLine] = Field(default_factory=list)
    total: float
    payment_method: str
    date: datetime


def build_receipt(
    store: Dict[str, Any],
    cart: Cart,
    sale: Dict[str, Any],
    printed_at: Optional[datetime] = None,
) -> Receipt:
    """Receipt for the sale just confirmed, lines in cart order."""
    return Receipt(
        store_name=store.get("name", ""),
        address=store.get("address", ""),
        phone=store.get("phone", ""),
        lines=[
            ReceiptLine(
                name=line.product.name,
                quantity=line.quantity,
                modifiers=[f"{m.name}: {m.option.name}" for m in line.selected_modifiers],
                amount=line.product.price * line.quantity,
            )
            for line in cart
        ],
        total=cart.total(),
        payment_method=sale.get("payment_method", ""),
        date=printed_at or datetime.now(timezone.utc),
    )


def _row(left: str, right: str, width: int) -> str:
    gap = max(width - len(left) - len(right), 1)
    return f"{left}{' ' * gap}{right}"


def render_receipt(receipt: Receipt, width: int = 40, symbol: str = "$") -> str:
    """Plain-text receipt, amounts shown with 2 decimals."""
    out = [
        receipt.store_name.center(width).rstrip(),
    ]
    for extra in (receipt.address, receipt.phone):
        if extra:
            out.append(extra.center(width).rstrip())
    out.append("-" * width)
    for line in receipt.lines:
        out.append(_row(f"{line.name} x{line.quantity}", f"{symbol}{line.amount:.2f}", width))
        for mod in line.modifiers:
            out.append(f"    + {mod}")
    out.append("-" * width)
    out.append(_row("Total", f"{symbol}{receipt.total:.2f}", width))
    out.append(_row("Payment Method", receipt.payment_method.capitalize(), width))
    out.append(_row("Date", receipt.date.strftime("%Y-%m-%d %H:%M"), width))
    return "\n".join(out)
