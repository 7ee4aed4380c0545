import pytest
from fastapi.testclient import TestClient

from api.app import create_app, status_for
from conftest import make_user
from core.access import ROLE_ADMIN
from core.auth_service import authenticate_user, create_user
from core.config import Settings
from core.context import AppContext
from core.errors import (
    AccessDeniedError,
    InvalidTransitionError,
    NotFoundError,
    OrderReadOnlyError,
    ValidationError,
)
from models.food_item import FoodItem


@pytest.fixture
def context():
    return AppContext.from_settings(Settings(database_url="sqlite://"))


@pytest.fixture
def seeded(context):
    db = context.session()
    try:
        alice = make_user(db, "alice@example.com")
        bob = make_user(db, "bob@example.com")
        admin = make_user(db, "admin@bigbite.com", role=ROLE_ADMIN)
        burger = FoodItem(name="Classic Burger", price=100.0, category="Burgers")
        fries = FoodItem(name="Fries", price=50.0, category="sides")
        hidden = FoodItem(name="Chef Special", price=300.0, category="Specials", available=False)
        db.add_all([burger, fries, hidden])
        db.commit()
        return {
            "alice": {"X-User-Id": str(alice.id)},
            "bob": {"X-User-Id": str(bob.id)},
            "admin": {"X-User-Id": str(admin.id)},
            "burger": burger.id,
            "fries": fries.id,
            "hidden": hidden.id,
        }
    finally:
        db.close()


@pytest.fixture
def client(context, seeded):
    with TestClient(create_app(context=context)) as test_client:
        yield test_client


def order_body(seeded, **overrides):
    body = {
        "items": [{"foodId": seeded["burger"], "quantity": 2}, {"foodId": seeded["fries"]}],
        "deliveryAddress": "12 Main Street",
        "phoneNumber": "0912-000-111",
        "recipientName": "Alice",
    }
    body.update(overrides)
    return body


def place(client, seeded, who="alice", **overrides):
    resp = client.post("/orders", json=order_body(seeded, **overrides), headers=seeded[who])
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_status_mapping():
    assert status_for(ValidationError("x")) == 400
    assert status_for(InvalidTransitionError("pending", "completed", [])) == 400
    assert status_for(OrderReadOnlyError("completed")) == 400
    assert status_for(AccessDeniedError("x")) == 403
    assert status_for(NotFoundError("x")) == 404


def test_health(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_unknown_route_uses_message_body(client):
    resp = client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found"}


def test_create_order_returns_camel_case(client, seeded):
    order = place(client, seeded)

    assert order["totalPrice"] == 250.0
    assert order["status"] == "pending"
    assert order["allowedNext"] == ["preparing", "cancelled"]
    assert order["deliveryAddress"] == "12 Main Street"
    assert order["recipientName"] == "Alice"
    assert order["user"]["email"] == "alice@example.com"
    assert [(i["name"], i["unitPrice"], i["quantity"], i["subtotal"]) for i in order["items"]] == [
        ("Classic Burger", 100.0, 2, 200.0),
        ("Fries", 50.0, 1, 50.0),
    ]
    assert "createdAt" in order and "updatedAt" in order


def test_missing_identity_is_401(client, seeded):
    resp = client.post("/orders", json=order_body(seeded))
    assert resp.status_code == 401
    assert resp.json() == {"message": "Authentication required"}

    resp = client.get("/orders/1", headers={"X-User-Id": "9999"})
    assert resp.status_code == 401


def test_create_order_validation_errors(client, seeded):
    resp = client.post("/orders", json=order_body(seeded, items=[]), headers=seeded["alice"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Order must contain at least one item"

    resp = client.post("/orders", json=order_body(seeded, deliveryAddress="  "), headers=seeded["alice"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Delivery address is required"

    hidden = [{"foodId": seeded["hidden"], "quantity": 1}]
    resp = client.post("/orders", json=order_body(seeded, items=hidden), headers=seeded["alice"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Some food items are invalid or unavailable"


def test_oversized_quantity_is_400(client, seeded):
    items = [{"foodId": seeded["burger"], "quantity": 10**20}]
    resp = client.post("/orders", json=order_body(seeded, items=items), headers=seeded["alice"])
    assert resp.status_code == 400
    assert "message" in resp.json()

    items = [{"foodId": seeded["burger"], "quantity": 1000}]
    resp = client.post("/orders", json=order_body(seeded, items=items), headers=seeded["alice"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Quantity must be at most 999"

    assert client.get("/orders", headers=seeded["admin"]).json() == []


def test_malformed_body_is_400(client, seeded):
    resp = client.post("/orders", json={"items": "nope"}, headers=seeded["alice"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


def test_status_walk_over_http(client, seeded):
    order_id = place(client, seeded)["id"]

    resp = client.put(f"/orders/{order_id}/status", json={"status": "delivering"}, headers=seeded["admin"])
    assert resp.status_code == 400
    assert resp.json()["currentStatus"] == "pending"
    assert resp.json()["allowedNext"] == ["preparing", "cancelled"]

    for status in ("preparing", "delivering", "completed"):
        resp = client.put(f"/orders/{order_id}/status", json={"status": status}, headers=seeded["admin"])
        assert resp.status_code == 200, resp.text
        assert resp.json()["status"] == status

    assert resp.json()["allowedNext"] == []
    resp = client.put(f"/orders/{order_id}/status", json={"status": "cancelled"}, headers=seeded["admin"])
    assert resp.status_code == 400
    assert resp.json()["currentStatus"] == "completed"


def test_customer_cannot_change_status(client, seeded):
    order_id = place(client, seeded)["id"]
    resp = client.put(f"/orders/{order_id}/status", json={"status": "cancelled"}, headers=seeded["alice"])
    assert resp.status_code == 403


def test_order_visibility(client, seeded):
    order_id = place(client, seeded)["id"]

    assert client.get(f"/orders/{order_id}", headers=seeded["alice"]).status_code == 200
    assert client.get(f"/orders/{order_id}", headers=seeded["admin"]).status_code == 200
    assert client.get(f"/orders/{order_id}", headers=seeded["bob"]).status_code == 403
    assert client.get("/orders/9999", headers=seeded["admin"]).status_code == 404


def test_list_endpoints(client, seeded):
    first = place(client, seeded)["id"]
    second = place(client, seeded)["id"]
    place(client, seeded, who="bob")

    alice_id = seeded["alice"]["X-User-Id"]
    resp = client.get(f"/orders/user/{alice_id}", headers=seeded["alice"])
    assert [o["id"] for o in resp.json()] == [second, first]
    assert client.get(f"/orders/user/{alice_id}", headers=seeded["bob"]).status_code == 403

    assert client.get("/orders", headers=seeded["alice"]).status_code == 403
    assert len(client.get("/orders", headers=seeded["admin"]).json()) == 3

    client.put(f"/orders/{first}/status", json={"status": "cancelled"}, headers=seeded["admin"])
    cancelled = client.get("/orders", params={"status": "cancelled"}, headers=seeded["admin"]).json()
    assert [o["id"] for o in cancelled] == [first]


def test_analytics_overview(client, seeded):
    order_id = place(client, seeded)["id"]
    place(client, seeded)
    for status in ("preparing", "delivering", "completed"):
        client.put(f"/orders/{order_id}/status", json={"status": status}, headers=seeded["admin"])

    resp = client.get("/orders/analytics/overview", params={"days": "abc"}, headers=seeded["admin"])
    assert resp.status_code == 200
    data = resp.json()
    assert data["range"]["days"] == 7
    assert len(data["dailySeries"]) == 7
    assert data["kpis"]["totalOrders"] == 2
    assert data["kpis"]["completedOrders"] == 1
    assert data["kpis"]["totalRevenue"] == 250.0
    assert data["kpis"]["revenueToday"] == 250.0
    assert data["dailySeries"][-1]["orders"] == 2

    assert client.get("/orders/analytics/overview", headers=seeded["alice"]).status_code == 403

    sellers = client.get("/orders/analytics/best-sellers", headers=seeded["admin"]).json()
    assert sellers[0] == {"name": "Classic Burger", "quantity": 2, "revenue": 200.0}


def test_food_endpoints(client, seeded):
    menu = client.get("/foods").json()
    assert {f["name"] for f in menu} == {"Classic Burger", "Fries", "Chef Special"}
    assert {f["displayCategory"] for f in menu} == {"Burgers", "Sides", "Specials"}
    assert len(client.get("/foods", params={"available": "true"}).json()) == 2
    assert client.get("/foods/categories").json() == ["Burgers", "Sides", "Specials"]

    resp = client.post("/foods", json={"name": "Tea", "price": 30}, headers=seeded["alice"])
    assert resp.status_code == 403

    resp = client.post("/foods", json={"name": "Tea", "price": 30, "category": "drinks"}, headers=seeded["admin"])
    assert resp.status_code == 201
    tea = resp.json()
    assert tea["displayCategory"] == "Drinks"

    resp = client.put(f"/foods/{tea['id']}", json={"available": False}, headers=seeded["admin"])
    assert resp.json()["available"] is False

    resp = client.post("/foods", json={"name": "Bad", "price": -2}, headers=seeded["admin"])
    assert resp.status_code == 400

    resp = client.delete(f"/foods/{tea['id']}", headers=seeded["admin"])
    assert resp.json() == {"message": "Food deleted"}
    assert client.get(f"/foods/{tea['id']}").status_code == 404


class CodeCatcher:
    def __init__(self):
        self.codes = {}

    def send_password_reset(self, to_email, code, full_name=""):
        self.codes[to_email] = code
        return True


def register(context, email="dana@example.com", password="secret1"):
    db = context.session()
    try:
        return {"X-User-Id": str(create_user(db, "Dana", email, password).id)}
    finally:
        db.close()


def test_profile_endpoints(client, context):
    dana = register(context)

    me = client.get("/users/me", headers=dana).json()
    assert me["email"] == "dana@example.com"
    assert me["authProvider"] == "local"

    resp = client.put("/users/me", json={"fullName": " Dana Lee ", "deliveryAddress": "5 Side Road"}, headers=dana)
    assert resp.status_code == 200
    assert resp.json()["fullName"] == "Dana Lee"
    assert resp.json()["deliveryAddress"] == "5 Side Road"

    assert client.get("/users/me").status_code == 401


def test_change_password_endpoint(client, context):
    dana = register(context)

    resp = client.put("/users/me/password", json={"currentPassword": "nope12", "newPassword": "newpass1"},
                      headers=dana)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Incorrect current password"}

    resp = client.put("/users/me/password", json={"currentPassword": "secret1", "newPassword": "newpass1"},
                      headers=dana)
    assert resp.status_code == 200


def test_forgot_and_reset_password(client, context):
    register(context)
    catcher = CodeCatcher()
    context.mailer = catcher

    generic = {"message": "If an account with that email exists, we've sent a reset code."}
    assert client.post("/auth/forgot-password", json={"email": "nobody@example.com"}).json() == generic
    resp = client.post("/auth/forgot-password", json={"email": "Dana@example.com"})
    assert resp.status_code == 200
    assert resp.json() == generic
    assert list(catcher.codes) == ["dana@example.com"]

    code = catcher.codes["dana@example.com"]
    wrong = "000000" if code != "000000" else "111111"
    resp = client.post("/auth/reset-password", json={"email": "dana@example.com", "code": wrong, "password": "newpass1"})
    assert resp.status_code == 400

    resp = client.post("/auth/reset-password", json={"email": "dana@example.com", "code": code, "password": "newpass1"})
    assert resp.status_code == 200
    assert "reset" in resp.json()["message"]

    db = context.session()
    try:
        user, _ = authenticate_user(db, "dana@example.com", "newpass1")
    finally:
        db.close()
    assert user is not None


@pytest.mark.parametrize("body, message", [
    ({}, "Email is required"),
    ({"email": "  "}, "Email is required"),
    ({"email": "not-an-email"}, "Invalid email format"),
])
def test_forgot_password_validation(client, body, message):
    resp = client.post("/auth/forgot-password", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"message": message}
