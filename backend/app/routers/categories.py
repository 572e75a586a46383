# app/routers/categories.py
"""
Category management for a store's catalog
- GET/POST /stores/{store_id}/categories
- GET/PUT/DELETE /stores/{store_id}/categories/{category_id}
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.repositories import categories as categories_repo
from app.routers.stores import owned_store
from app.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate

router = APIRouter(prefix="/stores/{store_id}/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut], summary="List Categories")
@router.get("/", response_model=List[CategoryOut], include_in_schema=False)
def list_categories(response: Response, store: dict = Depends(owned_store)):
    response.headers["Cache-Control"] = "private, max-age=60"
    return [CategoryOut(**c) for c in categories_repo.list_categories(store["id"])]


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED, summary="Create Category")
@router.post("/", response_model=CategoryOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_category(payload: CategoryCreate, store: dict = Depends(owned_store)):
    return CategoryOut(**categories_repo.create_category(store["id"], payload.model_dump()))


@router.get("/{category_id}", response_model=CategoryOut, summary="Get Category")
def get_category(category_id: str, store: dict = Depends(owned_store)):
    data = categories_repo.get_category(store["id"], category_id)
    if not data:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryOut(**data)


@router.put("/{category_id}", response_model=CategoryOut, summary="Update Category")
def update_category(category_id: str, payload: CategoryUpdate, store: dict = Depends(owned_store)):
    data = categories_repo.update_category(store["id"], category_id, payload.model_dump(exclude_unset=True))
    if not data:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryOut(**data)


@router.delete("/{category_id}", status_code=204, summary="Delete Category")
def delete_category(category_id: str, store: dict = Depends(owned_store)):
    if not categories_repo.delete_category(store["id"], category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return Response(status_code=204)
