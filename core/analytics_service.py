from sqlalchemy.orm import Session
from models.order import Order
from core.access import Actor, require_admin
from core.order_status import OrderStatus
from datetime import datetime, timedelta, time
from collections import defaultdict
import logging

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7
MIN_WINDOW_DAYS = 1
MAX_WINDOW_DAYS = 30


def clamp_window_days(days) -> int:
    """Coerce the requested window to an int in [1, 30]; junk falls back to 7."""
    if days is None:
        return DEFAULT_WINDOW_DAYS
    try:
        days = int(days)
    except (TypeError, ValueError):
        return DEFAULT_WINDOW_DAYS
    return min(max(days, MIN_WINDOW_DAYS), MAX_WINDOW_DAYS)


def day_bounds(day):
    """Start and end (inclusive) of a local calendar day."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def window_bounds(days: int, now: datetime = None):
    """[today - (days-1) 00:00:00, today 23:59:59.999999] in server local time."""
    now = now or datetime.now()
    today = now.date()
    start, _ = day_bounds(today - timedelta(days=days - 1))
    _, end = day_bounds(today)
    return start, end


def get_overview(db: Session, actor: Actor, days=DEFAULT_WINDOW_DAYS, now: datetime = None):
    """
    KPIs, per-status counts and a per-day series over the last `days` days.

    Buckets use the order's creation day. `revenueToday` is the exception: it
    sums orders completed today (last update today), whatever day they were
    placed on, so it need not match the last bucket's revenue.

    Returns: dict with kpis, statusCounts, dailySeries, range
    """
    require_admin(actor, "Only admins can view analytics")
    days = clamp_window_days(days)
    now = now or datetime.now()
    start, end = window_bounds(days, now)

    orders = db.query(Order).filter(
        Order.created_at >= start,
        Order.created_at <= end
    ).order_by(Order.created_at.asc()).all()

    status_counts = {status.value: 0 for status in OrderStatus}

    # One empty bucket per day, oldest first
    series = {}
    for i in range(days):
        day = start.date() + timedelta(days=i)
        series[day] = {
            "date": day.strftime("%a"),
            "day": day.isoformat(),
            "orders": 0,
            "revenue": 0.0,
        }

    total_revenue = 0.0
    completed_orders = 0

    for order in orders:
        status = order.status or OrderStatus.PENDING.value
        if status in status_counts:
            status_counts[status] += 1

        bucket = series.get(order.created_at.date())

        # Orders trend counts everything that wasn't cancelled
        if status != OrderStatus.CANCELLED.value and bucket is not None:
            bucket["orders"] += 1

        # Revenue is completed-only
        if status == OrderStatus.COMPLETED.value:
            price = float(order.total_price or 0)
            if bucket is not None:
                bucket["revenue"] += price
            total_revenue += price
            completed_orders += 1

    daily_series = list(series.values())
    for bucket in daily_series:
        bucket["revenue"] = round(bucket["revenue"], 2)

    revenue_today, completed_today = get_revenue_today(db, now)
    logger.debug("Revenue today: %.2f from %d completed orders", revenue_today, completed_today)

    return {
        "kpis": {
            "totalRevenue": round(total_revenue, 2),
            "revenueToday": revenue_today,
            "totalOrders": len(orders),
            "completedOrders": completed_orders,
            "ordersToday": daily_series[-1]["orders"],
            "pendingOrders": status_counts[OrderStatus.PENDING.value],
            "cancelledOrders": status_counts[OrderStatus.CANCELLED.value],
        },
        "statusCounts": status_counts,
        "dailySeries": daily_series,
        "range": {"start": start, "end": end, "days": days},
    }


def get_revenue_today(db: Session, now: datetime = None):
    """
    Revenue of orders that reached 'completed' today.
    There is no completed_at column, so the last update time stands in for it.
    Returns: (revenue, order count)
    """
    now = now or datetime.now()
    start, end = day_bounds(now.date())
    completed = db.query(Order).filter(
        Order.status == OrderStatus.COMPLETED.value,
        Order.updated_at >= start,
        Order.updated_at <= end
    ).all()
    return round(sum(float(o.total_price or 0) for o in completed), 2), len(completed)


def get_best_selling_items(db: Session, actor: Actor, limit=5):
    """
    Get top selling items across all completed orders (no window)
    Returns: list of dicts with item name, quantity sold, revenue
    """
    require_admin(actor, "Only admins can view analytics")
    orders = db.query(Order).filter(Order.status == OrderStatus.COMPLETED.value).all()

    # Aggregate by snapshot name; the food itself may be gone
    item_stats = defaultdict(lambda: {"quantity": 0, "revenue": 0.0})

    for order in orders:
        for line in order.items:
            item_stats[line.name]["quantity"] += line.quantity
            item_stats[line.name]["revenue"] += line.unit_price * line.quantity

    items_list = [
        {
            "name": name,
            "quantity": stats["quantity"],
            "revenue": round(stats["revenue"], 2),
        }
        for name, stats in item_stats.items()
    ]

    items_list.sort(key=lambda x: (-x["quantity"], x["name"]))

    return items_list[:max(int(limit), 0)]
