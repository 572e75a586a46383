import logging
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP, FieldFilter

from app.config import collection_name, get_db
from app.utils.firestore_docs import snapshot_to_dict

logger = logging.getLogger("pos.catalog")

COL = "stores"


def _col():
    return get_db().collection(collection_name(COL))


def create_store(owner: str, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = _col().document()
    ref.set({
        "id": ref.id,
        "owner": owner,
        "name": data["name"].strip(),
        "address": (data.get("address") or "").strip(),
        "phone": (data.get("phone") or "").strip(),
        "created_at": SERVER_TIMESTAMP,
        "updated_at": SERVER_TIMESTAMP,
    })
    logger.info("Store %s created for owner %s", ref.id, owner)
    return snapshot_to_dict(ref.get())


def list_stores(owner: str) -> List[Dict[str, Any]]:
    q = _col().where(filter=FieldFilter("owner", "==", owner))
    stores = [snapshot_to_dict(doc) for doc in q.stream()]
    stores.sort(key=lambda s: s.get("name", "").lower())
    return stores


def get_store(store_id: str) -> Optional[Dict[str, Any]]:
    snap = _col().document(store_id).get()
    return snapshot_to_dict(snap) if snap.exists else None


def update_store(store_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    ref = _col().document(store_id)
    if not ref.get().exists:
        return None
    update_data = {k: (v.strip() if isinstance(v, str) else v) for k, v in patch.items() if v is not None}
    update_data["updated_at"] = SERVER_TIMESTAMP
    ref.update(update_data)
    return snapshot_to_dict(ref.get())


def delete_store(store_id: str) -> bool:
    """Removes the store document. Sales keep pointing at the old id."""
    ref = _col().document(store_id)
    if not ref.get().exists:
        return False
    ref.delete()
    logger.info("Store %s deleted", store_id)
    return True
