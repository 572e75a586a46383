import pytest
from fastapi.testclient import TestClient

import app.config as config
from app.core.security import get_current_user
from app.main import app
from app.schemas.principal import Principal
from app.schemas.product import Discount, ModifierGroup, ModifierOption, ProductOut
from firestore_fake import FakeFirestore

OWNER = "owner-1"


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeFirestore()
    monkeypatch.setattr(config, "_db", db)
    return db


class AuthAs:
    """Mutable caller used by the dependency override."""

    def __init__(self, uid):
        self.principal = Principal(uid=uid)

    def switch(self, uid):
        self.principal = Principal(uid=uid)


@pytest.fixture
def auth():
    return AuthAs(OWNER)


@pytest.fixture
def client(fake_db, auth):
    app.dependency_overrides[get_current_user] = lambda: auth.principal
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def store(client):
    resp = client.post("/stores", json={"name": "Corner Cafe", "address": "1 Main St", "phone": "555-0100"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def coffee():
    return ProductOut(
        id="p-coffee",
        store="s-1",
        name="Coffee",
        price=10.0,
        modifiers=[
            ModifierGroup(
                name="Size",
                options=[ModifierOption(name="Regular", price=0), ModifierOption(name="Large", price=1.5)],
            )
        ],
        discounts=[
            Discount(name="Happy hour", type="percentage", value=10),
            Discount(name="Coupon", type="fixed", value=3),
        ],
    )


@pytest.fixture
def bagel():
    return ProductOut(id="p-bagel", store="s-1", name="Bagel", price=2.5)
