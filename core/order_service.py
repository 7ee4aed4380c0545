# core/order_service.py
"""
Order lifecycle: creating price-snapshotted orders and moving them through
pending -> preparing -> delivering -> completed (or pending -> cancelled).
"""
import logging
from datetime import datetime
from typing import Iterable, List, Mapping, Optional
from sqlalchemy.orm import Session

from core.access import Actor, require_admin, require_owner_or_admin
from core.catalog_service import find_available_by_ids
from core.errors import InvalidTransitionError, NotFoundError, OrderReadOnlyError, ValidationError
from core.logger import log_action
from core.order_status import OrderStatus, allowed_next, is_terminal, parse_status
from models.order import Order, OrderItem

logger = logging.getLogger(__name__)

MAX_QUANTITY = 999
# Largest value a 64-bit INTEGER column holds
MAX_DB_ID = 2**63 - 1


def _required_text(value, message: str) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(message)
    return text


def _coerce_food_id(raw) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid food id: {raw!r}")
    try:
        food_id = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid food id: {raw!r}")
    if abs(food_id) > MAX_DB_ID:
        raise ValidationError(f"Invalid food id: {raw!r}")
    return food_id


def _coerce_quantity(raw) -> int:
    """Missing or non-positive quantities count as 1; non-integers are rejected."""
    if raw is None or raw == "":
        return 1
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValidationError(f"Invalid quantity: {raw!r}")
    try:
        quantity = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid quantity: {raw!r}")
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Quantity must be at most {MAX_QUANTITY}")
    return quantity if quantity > 0 else 1


def create_order(
    db: Session,
    actor: Actor,
    items: Iterable[Mapping],
    delivery_address: str,
    phone_number: str,
    recipient_name: Optional[str] = None,
) -> Order:
    """
    Build and persist a pending order for `actor`.

    `items` is a list of {"food_id": ..., "quantity": ...}. Each line copies the
    food's current name and price so later menu edits never touch this order.
    A single unknown or unavailable food rejects the whole order.
    """
    items = list(items or [])
    if not items:
        raise ValidationError("Order must contain at least one item")

    address = _required_text(delivery_address, "Delivery address is required")
    phone = _required_text(phone_number, "Phone number is required")
    recipient = recipient_name.strip() if isinstance(recipient_name, str) else None

    requested = []
    for raw in items:
        if not isinstance(raw, Mapping):
            raise ValidationError("Each item must be an object with a food_id")
        requested.append((_coerce_food_id(raw.get("food_id")), _coerce_quantity(raw.get("quantity"))))

    wanted_ids = {food_id for food_id, _ in requested}
    foods = {food.id: food for food in find_available_by_ids(db, wanted_ids)}
    if len(foods) != len(wanted_ids):
        missing = sorted(wanted_ids - set(foods))
        logger.info("Order rejected for user %s: unavailable food ids %s", actor.user_id, missing)
        raise ValidationError("Some food items are invalid or unavailable")

    lines = []
    total = 0.0
    for food_id, quantity in requested:
        food = foods[food_id]
        subtotal = round(food.price * quantity, 2)
        total += subtotal
        lines.append(OrderItem(
            food_id=food.id,
            name=food.name,
            unit_price=food.price,
            quantity=quantity,
            subtotal=subtotal,
        ))

    now = datetime.now()
    order = Order(
        user_id=actor.user_id,
        items=lines,
        total_price=round(total, 2),
        status=OrderStatus.PENDING.value,
        delivery_address=address,
        phone_number=phone,
        recipient_name=recipient or None,
        created_at=now,
        updated_at=now,
    )
    try:
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(order)
    logger.info("Order #%s created for user %s (%d lines, total %.2f)",
                order.id, actor.user_id, len(lines), order.total_price)
    return order


def _load_order(db: Session, order_id) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError("Order not found")
    return order


def transition_order(db: Session, actor: Actor, order_id, requested_status) -> Order:
    """
    Move an order to `requested_status` (admins only).

    The write is a compare-and-set on the status read here, so two racing
    updates can't both apply; the loser gets an error describing the state
    the winner left behind.
    """
    require_admin(actor, "Only admins can update order status")
    target = parse_status(requested_status)
    order = _load_order(db, order_id)
    current = OrderStatus(order.status)

    if is_terminal(current):
        raise OrderReadOnlyError(current)
    options = allowed_next(current)
    if target not in options:
        raise InvalidTransitionError(current, target, options)

    updated = (
        db.query(Order)
        .filter(Order.id == order.id, Order.status == current.value)
        .update({Order.status: target.value, Order.updated_at: datetime.now()}, synchronize_session=False)
    )
    if updated != 1:
        db.rollback()
        db.refresh(order)
        fresh = OrderStatus(order.status)
        logger.warning("Order #%s changed concurrently (%s -> %s requested, now %s)",
                       order.id, current.value, target.value, fresh.value)
        if is_terminal(fresh):
            raise OrderReadOnlyError(fresh, "Order was completed or cancelled by another update")
        raise InvalidTransitionError(fresh, target, allowed_next(fresh), "Order status changed by another update")

    log_action(db, actor.email, f"Updated order #{order.id}: {current.value} -> {target.value}", commit=False)
    db.commit()
    db.refresh(order)
    logger.info("Order #%s: %s -> %s by user %s", order.id, current.value, target.value, actor.user_id)
    return order


def get_order(db: Session, actor: Actor, order_id) -> Order:
    order = _load_order(db, order_id)
    require_owner_or_admin(actor, order.user_id, "Not allowed to view this order")
    return order


def list_orders_by_user(db: Session, actor: Actor, user_id) -> List[Order]:
    """A user's orders, newest first."""
    require_owner_or_admin(actor, user_id, "Not allowed to view these orders")
    return (
        db.query(Order)
        .filter(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def list_all_orders(db: Session, actor: Actor, status=None) -> List[Order]:
    """Every order, newest first, optionally narrowed to one status (admins only)."""
    require_admin(actor, "Only admins can list all orders")
    query = db.query(Order)
    if status:
        query = query.filter(Order.status == parse_status(status).value)
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()
