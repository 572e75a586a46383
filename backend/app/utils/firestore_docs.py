from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional


def to_dt(ts):
    """Firestore timestamp (or datetime) -> datetime; anything else -> None."""
    if ts is None:
        return None
    if isinstance(ts, datetime):
        return ts
    if hasattr(ts, "to_datetime"):
        return ts.to_datetime()
    return None


def snapshot_to_dict(snap) -> Dict[str, Any]:
    """Document snapshot -> plain dict with `id` and datetime timestamps."""
    data = snap.to_dict() or {}
    data["id"] = data.get("id") or snap.id
    for key in ("created_at", "updated_at"):
        if key in data:
            data[key] = to_dt(data[key])
    return data


def day_start_utc(d: Optional[date]) -> Optional[datetime]:
    if d is None:
        return None
    # 00:00:00 UTC
    return datetime.combine(d, time.min).replace(tzinfo=timezone.utc)


def day_end_utc(d: Optional[date]) -> Optional[datetime]:
    if d is None:
        return None
    # 23:59:59.999999 UTC
    return datetime.combine(d, time.max).replace(tzinfo=timezone.utc)
