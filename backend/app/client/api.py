"""
app/client/api.py - Async HTTP client for the POS API (used by checkout terminals).

Every call carries the session's bearer token. GET results are cached per tag
(stores / products / categories / sales) until a mutation on the same tag or a
`reset_cache()` (wired to `Session.logout`).
Non-2xx answers raise `ApiError` with the server's message; transport problems
surface as `httpx.HTTPError`.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import httpx

from app.client.session import Session
from app.config import settings

logger = logging.getLogger("pos.client")


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    detail = body.get("detail", body.get("message")) if isinstance(body, dict) else None
    if isinstance(detail, list):
        # FastAPI validation errors
        return "; ".join(str(e.get("msg", e)) if isinstance(e, dict) else str(e) for e in detail)
    return str(detail or resp.reason_phrase)


class PosApiClient:
    def __init__(
        self,
        session: Session,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self._transport = transport
        self._cache: Dict[str, Dict[Tuple, Any]] = {}
        session.on_logout(self.reset_cache)

    # ---------- plumbing ----------
    def reset_cache(self) -> None:
        self._cache.clear()

    def invalidate(self, tag: str) -> None:
        self._cache.pop(tag, None)

    def _headers(self) -> Dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    async def _request(self, method: str, path: str, *, params=None, json=None) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as client:
            resp = await client.request(method, path, params=params, json=json, headers=self._headers())
        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("%s %s failed: %s %s", method, path, resp.status_code, message)
            raise ApiError(resp.status_code, message)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    async def _get(self, tag: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        key = (path, tuple(sorted((params or {}).items())))
        bucket = self._cache.setdefault(tag, {})
        if key not in bucket:
            bucket[key] = await self._request("GET", path, params=params)
        return bucket[key]

    async def _mutate(self, tag: str, method: str, path: str, json=None) -> Any:
        result = await self._request(method, path, json=json)
        self.invalidate(tag)
        return result

    # ---------- stores ----------
    async def list_stores(self) -> List[Dict[str, Any]]:
        return await self._get("stores", "/stores")

    async def get_store(self, store_id: str) -> Dict[str, Any]:
        return await self._get("stores", f"/stores/{store_id}")

    async def create_store(self, name: str, address: str = "", phone: str = "") -> Dict[str, Any]:
        return await self._mutate("stores", "POST", "/stores", {"name": name, "address": address, "phone": phone})

    async def update_store(self, store_id: str, **patch: Any) -> Dict[str, Any]:
        return await self._mutate("stores", "PUT", f"/stores/{store_id}", patch)

    async def delete_store(self, store_id: str) -> None:
        await self._mutate("stores", "DELETE", f"/stores/{store_id}")

    # ---------- catalog ----------
    async def list_products(self, store_id: str) -> List[Dict[str, Any]]:
        return await self._get("products", f"/stores/{store_id}/products")

    async def list_categories(self, store_id: str) -> List[Dict[str, Any]]:
        return await self._get("categories", f"/stores/{store_id}/categories")

    # ---------- sales ----------
    async def create_sale(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate("sales", "POST", "/sales", payload)

    async def list_sales(
        self, store_id: str, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        params = {}
        if start_date:
            params["start_date"] = start_date.isoformat()
        if end_date:
            params["end_date"] = end_date.isoformat()
        return await self._get("sales", f"/sales/{store_id}", params)

    async def sales_metrics(self, store_id: str, start_date: date, end_date: date) -> Dict[str, Any]:
        params = {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()}
        return await self._get("sales", f"/sales/{store_id}/metrics", params)
