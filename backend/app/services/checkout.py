# app/services/checkout.py
"""
Checkout flow of a terminal: cart -> sale request -> receipt.

States: IDLE -> AWAITING_PAYMENT -> SUBMITTING -> RECEIPT_SHOWN | IDLE (failure).
Payment opens only from IDLE and a sale is submitted only from AWAITING_PAYMENT.
Closing the receipt goes back to IDLE and empties the cart.

A failed submission keeps the cart as it was so the cashier can retry. There is no
retry, backoff or idempotency key: a resubmission is a new, independent request.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Dict, List, Literal, Optional, Protocol

from pydantic import BaseModel

from app.services.cart import Cart

logger = logging.getLogger("pos.checkout")

PAYMENT_FAILED = "Failed to process payment"
PAYMENT_OK = "Payment processed successfully"


class CheckoutState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_PAYMENT = "awaiting_payment"
    SUBMITTING = "submitting"
    RECEIPT_SHOWN = "receipt_shown"


class CheckoutError(Exception):
    pass


class Notification(BaseModel):
    level: Literal["success", "error", "info"]
    message: str


class SalesGateway(Protocol):
    async def create_sale(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...


def build_sale_payload(
    store_id: str,
    cart: Cart,
    payment_method: str,
    payment_details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "store": store_id,
        "items": [
            {
                "product": line.product.id,
                "quantity": line.quantity,
                "modifiers": [m.model_dump() for m in line.selected_modifiers],
                "discounts": [d.model_dump() for d in line.selected_discounts],
                "price": line.product.price,
            }
            for line in cart
        ],
        "total": cart.total(),
        "payment_method": payment_method,
        "payment_details": payment_details,
    }


class CheckoutSession:
    """Cart plus checkout state of one sales view."""

    def __init__(
        self,
        store_id: str,
        gateway: SalesGateway,
        cart: Optional[Cart] = None,
        notifier: Optional[Callable[[Notification], None]] = None,
    ):
        self.store_id = store_id
        self.gateway = gateway
        self.cart = cart if cart is not None else Cart()
        self.state = CheckoutState.IDLE
        self.last_sale: Optional[Dict[str, Any]] = None
        self.notifications: List[Notification] = []
        self._notifier = notifier

    def _notify(self, level: str, message: str) -> None:
        note = Notification(level=level, message=message)
        self.notifications.append(note)
        if self._notifier is not None:
            self._notifier(note)

    @property
    def submitting(self) -> bool:
        return self.state == CheckoutState.SUBMITTING

    @property
    def can_checkout(self) -> bool:
        return not self.cart.is_empty and self.state == CheckoutState.IDLE

    def open_payment(self) -> None:
        if self.cart.is_empty:
            raise CheckoutError("Nothing to check out")
        if self.state != CheckoutState.IDLE:
            raise CheckoutError(f"Cannot start a payment while {self.state.value}")
        self.state = CheckoutState.AWAITING_PAYMENT

    def cancel_payment(self) -> None:
        if self.state == CheckoutState.AWAITING_PAYMENT:
            self.state = CheckoutState.IDLE

    async def submit(self, payment_method: str, payment_details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if self.submitting:
            raise CheckoutError("A payment is already being processed")
        if self.cart.is_empty:
            raise CheckoutError("Cart is empty")
        if self.state != CheckoutState.AWAITING_PAYMENT:
            raise CheckoutError("No payment in progress")

        payload = build_sale_payload(self.store_id, self.cart, payment_method, payment_details)
        self.state = CheckoutState.SUBMITTING
        try:
            sale = await self.gateway.create_sale(payload)
        except Exception as exc:
            # Any gateway failure leaves the cart in place for a retry
            logger.warning("Sale submission for store %s failed: %r", self.store_id, exc)
            self.state = CheckoutState.IDLE
            self._notify("error", PAYMENT_FAILED)
            raise CheckoutError(f"{PAYMENT_FAILED}: {exc}") from exc

        self.last_sale = {**sale, "payment_method": payment_method, "payment_details": payment_details}
        self.state = CheckoutState.RECEIPT_SHOWN
        self._notify("success", PAYMENT_OK)
        logger.info("Sale %s completed for store %s", sale.get("id"), self.store_id)
        return self.last_sale

    def close_receipt(self) -> None:
        self.state = CheckoutState.IDLE
        self.cart.clear()
        self.last_sale = None
