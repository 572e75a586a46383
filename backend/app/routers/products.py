"""
# `app/routers/products.py` — Product Management

## `GET /stores/{store_id}/products`
Lists the store's products (soft-deleted ones excluded), sorted by name.
**Optional query parameters:**
- `category`: category ID (`all` or empty = every category)
- `search`: case-insensitive substring of the product name

## `GET /stores/{store_id}/products/{product_id}`
One product; `404` when missing, deleted or in another store.

## `POST /stores/{store_id}/products`
Creates a product (JSON body, `ProductCreate`). When `category` is given it must be a
category of the same store, otherwise `400`.

## `PUT /stores/{store_id}/products/{product_id}`
Field-wise update (`ProductUpdate`); same category rule.

## `DELETE /stores/{store_id}/products/{product_id}`
Soft delete by default (`is_deleted=True`), `hard=true` removes the document.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.repositories import categories as categories_repo
from app.repositories import products as products_repo
from app.routers.stores import owned_store
from app.schemas.product import ProductCreate, ProductOut, ProductUpdate

router = APIRouter(prefix="/stores/{store_id}/products", tags=["Products"])


def _check_category(store_id: str, category_id: Optional[str]) -> None:
    if category_id and categories_repo.get_category(store_id, category_id) is None:
        raise HTTPException(status_code=400, detail="Unknown category for this store")


@router.get("", response_model=List[ProductOut], summary="List Products")
@router.get("/", response_model=List[ProductOut], include_in_schema=False)
def list_products(
    category: Optional[str] = Query(None, description="Category ID (optional)"),
    search: Optional[str] = Query(None, description="Name contains (optional)"),
    store: dict = Depends(owned_store),
):
    return [ProductOut(**p) for p in products_repo.list_products(store["id"], category=category, search=search)]


@router.get("/{product_id}", response_model=ProductOut, summary="Get Product")
def get_product(product_id: str, store: dict = Depends(owned_store)):
    data = products_repo.get_product(store["id"], product_id)
    if not data:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut(**data)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED, summary="Create Product")
@router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_product(payload: ProductCreate, store: dict = Depends(owned_store)):
    _check_category(store["id"], payload.category)
    return ProductOut(**products_repo.create_product(store["id"], payload.model_dump()))


@router.put("/{product_id}", response_model=ProductOut, summary="Update Product")
def update_product(product_id: str, payload: ProductUpdate, store: dict = Depends(owned_store)):
    patch = payload.model_dump(exclude_unset=True)
    _check_category(store["id"], patch.get("category"))
    data = products_repo.update_product(store["id"], product_id, patch)
    if not data:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut(**data)


@router.delete("/{product_id}", summary="Delete Product")
def delete_product(product_id: str, hard: bool = False, store: dict = Depends(owned_store)):
    if not products_repo.delete_product(store["id"], product_id, hard=hard):
        raise HTTPException(status_code=404, detail="Product not found")
    if hard:
        return {"detail": "Product permanently deleted"}
    return {"detail": "Product deleted"}
