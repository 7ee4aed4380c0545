import logging
import threading
from types import SimpleNamespace

from sqlalchemy.exc import OperationalError

from core.errors import NotFoundError
from ui.order_tracking_view import watch_order


def scripted_fetch(*steps):
    """fetch() that raises or returns each step in turn."""
    remaining = list(steps)

    def fetch():
        step = remaining.pop(0)
        if isinstance(step, Exception):
            raise step
        return SimpleNamespace(status=step)

    return fetch, remaining


def test_database_error_is_logged_and_polling_continues(caplog):
    fetch, remaining = scripted_fetch(
        OperationalError("SELECT", {}, Exception("database is locked")),
        "preparing",
        "completed",
        "never fetched",
    )
    seen = []

    with caplog.at_level(logging.ERROR, logger="ui.order_tracking_view"):
        watch_order(7, fetch, lambda order: seen.append(order.status), threading.Event(), 0)

    assert seen == ["preparing", "completed"]
    assert remaining == ["never fetched"]
    assert "order #7" in caplog.text


def test_service_error_stops_polling():
    fetch, remaining = scripted_fetch(NotFoundError("Order not found"), "preparing")
    seen = []
    watch_order(7, fetch, seen.append, threading.Event(), 0)
    assert seen == []
    assert remaining == ["preparing"]


def test_stop_event_ends_polling_before_fetch():
    fetch, remaining = scripted_fetch("preparing")
    stop_event = threading.Event()
    stop_event.set()
    watch_order(7, fetch, lambda order: None, stop_event, 0)
    assert remaining == ["preparing"]
