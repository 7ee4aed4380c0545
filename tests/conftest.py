import pytest

from core.access import Actor, ROLE_ADMIN, ROLE_USER
from core.db import create_session_factory
from models.food_item import FoodItem
from models.user import User

# Not a usable hash; tests that log in register through create_user
PASSWORD_HASH = "x"


@pytest.fixture
def session_factory():
    """Fresh in-memory database per test."""
    return create_session_factory("sqlite://")


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def make_user(db, email, role=ROLE_USER, full_name=None):
    user = User(full_name=full_name or email.split("@")[0].title(), email=email,
                password_hash=PASSWORD_HASH, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def customer(db):
    return make_user(db, "alice@example.com", full_name="Alice")


@pytest.fixture
def other_customer(db):
    return make_user(db, "bob@example.com", full_name="Bob")


@pytest.fixture
def admin(db):
    return make_user(db, "admin@bigbite.com", role=ROLE_ADMIN, full_name="Admin User")


@pytest.fixture
def customer_actor(customer):
    return Actor.from_user(customer)


@pytest.fixture
def other_actor(other_customer):
    return Actor.from_user(other_customer)


@pytest.fixture
def admin_actor(admin):
    return Actor.from_user(admin)


@pytest.fixture
def foods(db):
    """burger 100, fries 50, soda 25 and an unavailable special."""
    items = {
        "burger": FoodItem(name="Classic Burger", price=100.0, category="burgers", description="Beef"),
        "fries": FoodItem(name="Fries", price=50.0, category="Sides"),
        "soda": FoodItem(name="Soda", price=25.0, category="drinks"),
        "special": FoodItem(name="Chef Special", price=300.0, category="Specials", available=False),
    }
    db.add_all(items.values())
    db.commit()
    for item in items.values():
        db.refresh(item)
    return items


def order_lines(*pairs):
    return [{"food_id": food.id, "quantity": quantity} for food, quantity in pairs]
