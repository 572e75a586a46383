from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter

from app.config import collection_name, get_db
from app.utils.firestore_docs import snapshot_to_dict

COL = "categories"


def _col():
    return get_db().collection(collection_name(COL))


def create_category(store_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = _col().document()
    ref.set({
        "id": ref.id,
        "store": store_id,
        "name": data["name"].strip(),
        "description": (data.get("description") or "").strip(),
        "created_at": SERVER_TIMESTAMP,
    })
    return snapshot_to_dict(ref.get())


def list_categories(store_id: str) -> List[Dict[str, Any]]:
    q = _col().where(filter=FieldFilter("store", "==", store_id))
    out = [snapshot_to_dict(doc) for doc in q.stream()]
    out.sort(key=lambda c: c.get("name", "").lower())
    return out


def get_category(store_id: str, category_id: str) -> Optional[Dict[str, Any]]:
    snap = _col().document(category_id).get()
    if not snap.exists:
        return None
    data = snapshot_to_dict(snap)
    if data.get("store") != store_id:
        return None
    return data


def update_category(store_id: str, category_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if get_category(store_id, category_id) is None:
        return None
    ref = _col().document(category_id)
    update_data = {k: v.strip() for k, v in patch.items() if v is not None}
    if update_data:
        ref.update(update_data)
    return snapshot_to_dict(ref.get())


def delete_category(store_id: str, category_id: str) -> bool:
    if get_category(store_id, category_id) is None:
        return False
    _col().document(category_id).delete()
    return True
