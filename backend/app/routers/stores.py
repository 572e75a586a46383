# app/routers/stores.py
"""
Store management (owner scoped)
- GET/POST /stores          → list the caller's stores / create one
- GET/PUT/DELETE /stores/{id}
Stores owned by somebody else answer 404, same as missing ones.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.core.security import get_current_user
from app.repositories import stores as stores_repo
from app.schemas.principal import Principal
from app.schemas.store import StoreCreate, StoreOut, StoreUpdate

router = APIRouter(prefix="/stores", tags=["Stores"])


def owned_store(store_id: str, current_user: Principal = Depends(get_current_user)) -> dict:
    """Dependency: the store document, if it belongs to the caller."""
    store = stores_repo.get_store(store_id)
    if not store or store.get("owner") != current_user.uid:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


@router.get("", response_model=List[StoreOut], summary="List Stores")
@router.get("/", response_model=List[StoreOut], include_in_schema=False)
def list_stores(current_user: Principal = Depends(get_current_user)):
    return [StoreOut(**s) for s in stores_repo.list_stores(current_user.uid)]


@router.post("", response_model=StoreOut, status_code=status.HTTP_201_CREATED, summary="Create Store")
@router.post("/", response_model=StoreOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_store(payload: StoreCreate, current_user: Principal = Depends(get_current_user)):
    return StoreOut(**stores_repo.create_store(current_user.uid, payload.model_dump()))


@router.get("/{store_id}", response_model=StoreOut, summary="Get Store")
def get_store(store: dict = Depends(owned_store)):
    return StoreOut(**store)


@router.put("/{store_id}", response_model=StoreOut, summary="Update Store")
def update_store(payload: StoreUpdate, store: dict = Depends(owned_store)):
    updated = stores_repo.update_store(store["id"], payload.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="Store not found")
    return StoreOut(**updated)


@router.delete("/{store_id}", status_code=204, summary="Delete Store")
def delete_store(store: dict = Depends(owned_store)):
    stores_repo.delete_store(store["id"])
    return Response(status_code=204)
