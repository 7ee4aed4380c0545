import pytest

from core.errors import ValidationError
from core.order_status import (
    OrderStatus,
    TRANSITIONS,
    allowed_next,
    can_transition,
    is_terminal,
    parse_status,
)


def test_transition_table():
    assert allowed_next("pending") == [OrderStatus.PREPARING, OrderStatus.CANCELLED]
    assert allowed_next("preparing") == [OrderStatus.DELIVERING]
    assert allowed_next("delivering") == [OrderStatus.COMPLETED]
    assert allowed_next("completed") == []
    assert allowed_next("cancelled") == []


def test_every_status_has_an_entry():
    assert set(TRANSITIONS) == set(OrderStatus)


@pytest.mark.parametrize("src,dst", [
    ("pending", "delivering"),
    ("pending", "completed"),
    ("preparing", "cancelled"),
    ("preparing", "pending"),
    ("delivering", "cancelled"),
    ("completed", "pending"),
    ("cancelled", "pending"),
])
def test_forbidden_moves(src, dst):
    assert not can_transition(src, dst)


def test_terminal_statuses():
    assert is_terminal("completed")
    assert is_terminal(OrderStatus.CANCELLED)
    assert not is_terminal("delivering")


def test_parse_status_is_lenient_on_case_and_blanks():
    assert parse_status("  Preparing ") is OrderStatus.PREPARING
    assert parse_status(OrderStatus.PENDING) is OrderStatus.PENDING


def test_parse_status_rejects_unknown():
    with pytest.raises(ValidationError) as exc:
        parse_status("shipped")
    assert "shipped" in exc.value.message


def test_str_is_wire_value():
    assert str(OrderStatus.DELIVERING) == "delivering"
    assert f"{OrderStatus.COMPLETED}" == "completed"
    assert OrderStatus.PENDING.label == "Order Placed"
