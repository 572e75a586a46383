"""
Tests for the async API client (httpx.MockTransport, no network).
"""
import asyncio
import json
from datetime import date

import httpx
import pytest

from app.client.api import ApiError, PosApiClient
from app.client.session import Session


class Recorder:
    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "POST" and path == "/sales":
            body = json.loads(request.content)
            if body["payment_method"] not in ("cash", "card"):
                return httpx.Response(422, json={"detail": [{"msg": "Input should be 'cash' or 'card'"}]})
            return httpx.Response(201, json={"id": "sale-1", **body})
        if path == "/stores/s-1/products":
            return httpx.Response(200, json=[{"id": "p-1", "name": "Coffee", "price": 10.0}])
        if path == "/sales/s-1/metrics":
            return httpx.Response(200, json={"total_sales": 30.0, "total_orders": 2, "average_order_value": 15.0})
        if path == "/sales/s-1":
            return httpx.Response(200, json=[])
        if path == "/stores/gone":
            return httpx.Response(404, json={"detail": "Store not found"})
        return httpx.Response(500, text="boom")


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def api(tmp_path, recorder):
    session = Session.load(str(tmp_path / "session.json"))
    session.set_credentials("tok-1", "u-1")
    return PosApiClient(session, base_url="http://pos.test", transport=httpx.MockTransport(recorder))


def test_bearer_token_sent(api, recorder):
    asyncio.run(api.list_products("s-1"))
    assert recorder.requests[0].headers["Authorization"] == "Bearer tok-1"


def test_get_results_are_cached(api, recorder):
    first = asyncio.run(api.list_products("s-1"))
    second = asyncio.run(api.list_products("s-1"))

    assert first == second == [{"id": "p-1", "name": "Coffee", "price": 10.0}]
    assert len(recorder.requests) == 1


def test_create_sale_invalidates_sales(api, recorder):
    asyncio.run(api.list_sales("s-1"))
    asyncio.run(api.create_sale({"store": "s-1", "items": [], "total": 0, "payment_method": "cash"}))
    asyncio.run(api.list_sales("s-1"))

    assert [r.method for r in recorder.requests] == ["GET", "POST", "GET"]


def test_logout_resets_cache(api, recorder):
    asyncio.run(api.list_products("s-1"))
    api.session.logout()
    asyncio.run(api.list_products("s-1"))

    assert len(recorder.requests) == 2
    assert "Authorization" not in recorder.requests[1].headers


def test_metrics_query_params(api, recorder):
    metrics = asyncio.run(api.sales_metrics("s-1", date(2024, 5, 1), date(2024, 5, 31)))

    assert metrics["average_order_value"] == 15.0
    params = recorder.requests[0].url.params
    assert params["start_date"] == "2024-05-01"
    assert params["end_date"] == "2024-05-31"


def test_validation_error_message(api):
    with pytest.raises(ApiError) as exc:
        asyncio.run(api.create_sale({"store": "s-1", "items": [], "total": 0, "payment_method": "qr"}))
    assert exc.value.status_code == 422
    assert "cash" in exc.value.message


def test_not_found_message(api):
    with pytest.raises(ApiError) as exc:
        asyncio.run(api.get_store("gone"))
    assert exc.value.status_code == 404
    assert exc.value.message == "Store not found"


def test_plain_text_error(api):
    with pytest.raises(ApiError) as exc:
        asyncio.run(api.list_stores())
    assert exc.value.status_code == 500
    assert exc.value.message == "boom"
