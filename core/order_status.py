"""Order status enumeration and allowed transitions."""
from enum import Enum
from typing import Dict, List

from core.errors import ValidationError


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    DELIVERING = "delivering"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self):
        return self.value

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


# Forward-only; cancellation is only possible before preparation starts
TRANSITIONS: Dict[OrderStatus, List[OrderStatus]] = {
    OrderStatus.PENDING: [OrderStatus.PREPARING, OrderStatus.CANCELLED],
    OrderStatus.PREPARING: [OrderStatus.DELIVERING],
    OrderStatus.DELIVERING: [OrderStatus.COMPLETED],
    OrderStatus.COMPLETED: [],
    OrderStatus.CANCELLED: [],
}

TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

# Steps shown by the order tracker, in order
PROGRESS_STEPS = [
    OrderStatus.PENDING,
    OrderStatus.PREPARING,
    OrderStatus.DELIVERING,
    OrderStatus.COMPLETED,
]

STATUS_LABELS = {
    OrderStatus.PENDING: "Order Placed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.DELIVERING: "Delivering",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
}


def parse_status(value) -> OrderStatus:
    """Coerce a string (any case, surrounding blanks allowed) into an OrderStatus."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status '{value}'. Allowed: {allowed}")


def allowed_next(status) -> List[OrderStatus]:
    return list(TRANSITIONS.get(parse_status(status), []))


def can_transition(src, dst) -> bool:
    return parse_status(dst) in allowed_next(src)


def is_terminal(status) -> bool:
    return parse_status(status) in TERMINAL_STATUSES
