"""
Products of a store (top-level `products` collection, `store` field).

Soft delete by default: `is_deleted=True` hides the product from listings and lookups
while old sales keep resolving its name through `index_products_by_id(include_deleted=True)`.
"""
import logging
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter

from app.config import collection_name, get_db
from app.utils.firestore_docs import snapshot_to_dict

logger = logging.getLogger("pos.catalog")

COL = "products"


def _col():
    return get_db().collection(collection_name(COL))


def create_product(store_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = _col().document()
    payload = {
        "id": ref.id,
        "store": store_id,
        "name": data["name"].strip(),
        "description": (data.get("description") or "").strip(),
        "price": float(data["price"]),
        "category": data.get("category"),
        "modifiers": data.get("modifiers") or [],
        "discounts": data.get("discounts") or [],
        "is_deleted": False,
        "created_at": SERVER_TIMESTAMP,
    }
    ref.set(payload)
    logger.info("Product %s created in store %s", ref.id, store_id)
    return snapshot_to_dict(ref.get())


def _store_products(store_id: str, include_deleted: bool = False):
    q = _col().where(filter=FieldFilter("store", "==", store_id))
    if not include_deleted:
        q = q.where(filter=FieldFilter("is_deleted", "==", False))
    return [snapshot_to_dict(doc) for doc in q.stream()]


def filter_products(
    products: List[Dict[str, Any]],
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Category match ('all' or empty means any) and case-insensitive name search."""
    needle = (search or "").strip().lower()
    out = []
    for p in products:
        if category and category != "all" and p.get("category") != category:
            continue
        if needle and needle not in (p.get("name") or "").lower():
            continue
        out.append(p)
    return out


def list_products(
    store_id: str,
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Dict[str, Any]]:
    products = _store_products(store_id)
    products.sort(key=lambda p: (p.get("name") or "").lower())
    return filter_products(products, category=category, search=search)


def index_products_by_id(store_id: str, include_deleted: bool = True) -> Dict[str, Dict[str, Any]]:
    return {p["id"]: p for p in _store_products(store_id, include_deleted=include_deleted)}


def get_product(store_id: str, product_id: str) -> Optional[Dict[str, Any]]:
    snap = _col().document(product_id).get()
    if not snap.exists:
        return None
    data = snapshot_to_dict(snap)
    if data.get("store") != store_id or data.get("is_deleted"):
        return None
    return data


def update_product(store_id: str, product_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if get_product(store_id, product_id) is None:
        return None
    ref = _col().document(product_id)
    update_data = {k: v for k, v in patch.items() if v is not None}
    if "name" in update_data:
        update_data["name"] = update_data["name"].strip()
    if "price" in update_data:
        update_data["price"] = float(update_data["price"])
    if update_data:
        ref.update(update_data)
    return snapshot_to_dict(ref.get())


def delete_product(store_id: str, product_id: str, hard: bool = False) -> bool:
    if get_product(store_id, product_id) is None:
        return False
    ref = _col().document(product_id)
    if hard:
        ref.delete()
    else:
        ref.update({"is_deleted": True})
    logger.info("Product %s deleted (hard=%s)", product_id, hard)
    return True
