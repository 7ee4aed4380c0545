import pytest

from core.cart_service import add_to_cart, get_user_cart
from core.catalog_service import (
    create_food,
    delete_food,
    find_available_by_ids,
    get_food,
    list_categories,
    list_foods,
    set_availability,
    update_food,
)
from core.errors import AccessDeniedError, NotFoundError, ValidationError
from models.audit_log import AuditLog
from models.food_item import normalize_category


@pytest.mark.parametrize("raw,expected", [
    ("burgers", "Burgers"), ("  DRINKS ", "Drinks"), ("", "Uncategorized"), (None, "Uncategorized"),
])
def test_normalize_category(raw, expected):
    assert normalize_category(raw) == expected


def test_list_foods_filters_on_display_category(db, foods):
    assert [f.name for f in list_foods(db, category="BURGERS")] == ["Classic Burger"]
    assert len(list_foods(db, category="All")) == 4
    assert len(list_foods(db)) == 4


def test_list_foods_available_only(db, foods):
    names = {f.name for f in list_foods(db, available_only=True)}
    assert "Chef Special" not in names
    assert len(names) == 3


def test_list_categories_are_normalized(db, foods):
    assert list_categories(db) == ["Burgers", "Drinks", "Sides", "Specials"]


def test_find_available_by_ids_skips_hidden(db, foods):
    ids = [foods["burger"].id, foods["special"].id, 999]
    assert [f.id for f in find_available_by_ids(db, ids)] == [foods["burger"].id]
    assert find_available_by_ids(db, []) == []


def test_get_food_missing(db):
    with pytest.raises(NotFoundError):
        get_food(db, 42)


def test_create_food_rounds_price_and_audits(db, admin_actor):
    food = create_food(db, admin_actor, " Onion Rings ", "79.999", category="sides")
    assert food.name == "Onion Rings"
    assert food.price == 80.0
    assert food.available is True
    assert food.display_category == "Sides"
    assert db.query(AuditLog).filter(AuditLog.action.like("Created food%")).count() == 1


@pytest.mark.parametrize("name,price", [("", 10), ("Tea", -1), ("Tea", "free"), ("Tea", float("nan"))])
def test_create_food_validation(db, admin_actor, name, price):
    with pytest.raises(ValidationError):
        create_food(db, admin_actor, name, price)


def test_catalog_writes_are_admin_only(db, customer_actor, foods):
    with pytest.raises(AccessDeniedError):
        create_food(db, customer_actor, "Tea", 10)
    with pytest.raises(AccessDeniedError):
        update_food(db, customer_actor, foods["soda"].id, price=1)
    with pytest.raises(AccessDeniedError):
        delete_food(db, customer_actor, foods["soda"].id)


def test_update_food_partial(db, admin_actor, foods):
    food = update_food(db, admin_actor, foods["fries"].id, price=55, description=None)
    assert food.price == 55.0
    assert food.name == "Fries"


def test_update_food_rejects_unknown_fields(db, admin_actor, foods):
    with pytest.raises(ValidationError):
        update_food(db, admin_actor, foods["fries"].id, calories=300)


def test_set_availability(db, admin_actor, foods):
    assert set_availability(db, admin_actor, foods["special"].id, True).available is True
    assert set_availability(db, admin_actor, foods["burger"].id, False).available is False


def test_delete_food_clears_carts(db, admin_actor, customer, foods):
    add_to_cart(db, customer.id, foods["soda"].id, 2)
    delete_food(db, admin_actor, foods["soda"].id)

    assert get_user_cart(db, customer.id) == []
    with pytest.raises(NotFoundError):
        get_food(db, foods["soda"].id)
