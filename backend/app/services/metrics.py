# app/services/metrics.py
from __future__ import annotations

from typing import Any, Dict, Iterable

from app.schemas.sale import SalesMetrics
from app.services.pricing import sum_totals


def compute_metrics(sales: Iterable[Dict[str, Any]]) -> SalesMetrics:
    """
    Reporting aggregate over already-filtered sale documents.
    average_order_value is 0 when there are no orders.
    """
    totals = [s.get("total", 0) for s in sales]
    total_sales = sum_totals(totals)
    total_orders = len(totals)
    return SalesMetrics(
        total_sales=total_sales,
        total_orders=total_orders,
        average_order_value=total_sales / total_orders if total_orders > 0 else 0.0,
    )
