from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.security import get_current_user
from app.repositories import sales as sales_repo
from app.repositories import stores as stores_repo
from app.routers.stores import owned_store
from app.schemas.principal import Principal
from app.schemas.sale import SaleCreate, SaleOut, SalesMetrics
from app.utils.firestore_docs import day_end_utc, day_start_utc

router = APIRouter(prefix="/sales", tags=["Sales"])


def _check_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")


@router.post("", response_model=SaleOut, status_code=status.HTTP_201_CREATED, summary="Create Sale")
@router.post("/", response_model=SaleOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_sale(payload: SaleCreate, current_user: Principal = Depends(get_current_user)):
    """
    Records a completed checkout. Line subtotals are computed here; payment details are not stored.
    """
    store = stores_repo.get_store(payload.store)
    if not store or store.get("owner") != current_user.uid:
        raise HTTPException(status_code=404, detail="Store not found")
    saved = sales_repo.create_sale(payload.model_dump(exclude={"payment_details"}))
    return SaleOut(**saved)


@router.get("/{store_id}", response_model=List[SaleOut], summary="List Sales")
def list_sales(
    start_date: Optional[date] = Query(None, description="First day (inclusive, UTC)"),
    end_date: Optional[date] = Query(None, description="Last day (inclusive, UTC)"),
    store: dict = Depends(owned_store),
):
    _check_range(start_date, end_date)
    sales = sales_repo.list_sales(store["id"], day_start_utc(start_date), day_end_utc(end_date))
    return [SaleOut(**s) for s in sales]


@router.get("/{store_id}/metrics", response_model=SalesMetrics, summary="Sales Metrics")
def sales_metrics(
    start_date: date = Query(..., description="First day (inclusive, UTC)"),
    end_date: date = Query(..., description="Last day (inclusive, UTC)"),
    store: dict = Depends(owned_store),
):
    _check_range(start_date, end_date)
    return sales_repo.sales_metrics(store["id"], day_start_utc(start_date), day_end_utc(end_date))
