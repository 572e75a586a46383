"""
Sales persistence.

- `create_sale` stores the submitted lines with a server-computed `subtotal` per line,
  the submitted `total`, status `completed` and server timestamps.
- `list_sales` returns a store's sales newest first (optionally within a date range),
  with each line's product name resolved from the catalog.
- `sales_metrics` aggregates total / count / average over a date range.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import FailedPrecondition
from google.cloud import firestore as gcf
from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter

from app.config import collection_name, get_db
from app.repositories.products import index_products_by_id
from app.schemas.sale import SalesMetrics
from app.services.metrics import compute_metrics
from app.services.pricing import line_total_decimal, sum_totals
from app.utils.firestore_docs import snapshot_to_dict

logger = logging.getLogger("pos.sales")

COL = "sales"
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _col():
    return get_db().collection(collection_name(COL))


def _build_items(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    out = []
    for it in items:
        quantity = int(it["quantity"])
        modifiers = it.get("modifiers") or []
        discounts = it.get("discounts") or []
        subtotal = line_total_decimal(it["price"], quantity, modifiers, discounts)
        out.append({
            "product": it["product"],
            "quantity": quantity,
            "price": float(it["price"]),
            "modifiers": modifiers,
            "discounts": discounts,
            "subtotal": float(subtotal),
        })
    return out


def create_sale(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Persist a checkout. `payload` follows SaleCreate (payment_details is dropped)."""
    items = _build_items(payload["items"])
    total = float(payload["total"])
    computed = sum_totals(it["subtotal"] for it in items)
    if abs(computed - total) > 0.005:
        logger.warning(
            "Sale total %.2f for store %s differs from line subtotals %.2f",
            total, payload["store"], computed,
        )

    ref = _col().document()
    ref.set({
        "id": ref.id,
        "store": payload["store"],
        "items": items,
        "total": total,
        "payment_method": payload["payment_method"],
        "status": "completed",
        "created_at": SERVER_TIMESTAMP,
        "updated_at": SERVER_TIMESTAMP,
    })
    logger.info("Sale %s recorded for store %s (%d lines, total %.2f)", ref.id, payload["store"], len(items), total)
    return snapshot_to_dict(ref.get())


def _in_range(created_at: Optional[datetime], start: Optional[datetime], end: Optional[datetime]) -> bool:
    if created_at is None:
        return start is None and end is None
    if start is not None and created_at < start:
        return False
    if end is not None and created_at > end:
        return False
    return True


def _query_sales(store_id: str, start: Optional[datetime], end: Optional[datetime]) -> List[Dict[str, Any]]:
    base = _col().where(filter=FieldFilter("store", "==", store_id))
    q = base
    if start is not None:
        q = q.where(filter=FieldFilter("created_at", ">=", start))
    if end is not None:
        q = q.where(filter=FieldFilter("created_at", "<=", end))

    # Composite index present: ranged, ordered query; otherwise store filter only, rest here
    try:
        return [snapshot_to_dict(d) for d in q.order_by("created_at", direction=gcf.Query.DESCENDING).stream()]
    except FailedPrecondition:
        logger.debug("No index for sales(store, created_at); filtering and sorting in memory")

    sales = [snapshot_to_dict(d) for d in base.stream()]
    sales = [s for s in sales if _in_range(s.get("created_at"), start, end)]
    sales.sort(key=lambda s: s.get("created_at") or _EPOCH, reverse=True)
    return sales


def list_sales(
    store_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    sales = _query_sales(store_id, start, end)
    if not sales:
        return sales
    catalog = index_products_by_id(store_id)
    for sale in sales:
        for item in sale.get("items", []):
            product = catalog.get(item.get("product"))
            item["product_name"] = product.get("name") if product else None
    return sales


def sales_metrics(store_id: str, start: datetime, end: datetime) -> SalesMetrics:
    return compute_metrics(_query_sales(store_id, start, end))
