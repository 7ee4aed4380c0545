"""
Live order tracker: shows one order's progress and re-polls its status
until the order reaches a terminal state or the user leaves the screen.
"""
import logging
import threading
import flet as ft
from sqlalchemy.exc import SQLAlchemyError
from core.errors import BigBiteError
from core.order_service import get_order
from core.order_status import is_terminal
from ui.order_widgets import progress_tracker, status_badge
from ui.utils import current_actor, money, section_header

logger = logging.getLogger(__name__)

def watch_order(order_id, fetch, on_update, stop_event, interval):
    """
    Re-fetch the order every `interval` seconds and hand it to on_update.
    Stops on a terminal status, a service error or stop_event; database
    errors are logged and retried on the next tick.
    """
    while not stop_event.wait(interval):
        try:
            order = fetch()
        except BigBiteError as ex:
            logger.warning("Tracker for order #%s stopped: %s", order_id, ex.message)
            break
        except SQLAlchemyError:
            logger.exception("Tracker for order #%s could not reach the database; retrying", order_id)
            continue
        on_update(order)
        if is_terminal(order.status):
            break
    logger.debug("Tracker for order #%s ended", order_id)

def order_tracking_view(page: ft.Page, context, order_id, on_back):
    """Returns (control, stop); call stop() when navigating away."""
    actor = current_actor(page)
    stop_event = threading.Event()

    status_area = ft.Container(padding=ft.padding.symmetric(horizontal=10, vertical=20))
    badge_area = ft.Container()
    updated_text = ft.Text("", size=11, color="grey700")
    details = ft.Column(spacing=6)

    def fetch():
        # Fresh session per poll so we never read a cached status
        db = context.session()
        try:
            return get_order(db, actor, order_id)
        finally:
            db.close()

    def render(order):
        status_area.content = progress_tracker(order.status)
        badge_area.content = status_badge(order.status, size=13)
        updated_text.value = f"Last update: {order.updated_at.strftime('%Y-%m-%d %H:%M:%S')}"

    def render_details(order):
        details.controls = [
            ft.Text(f"Deliver to: {order.recipient_name or '-'}", size=13, color="black"),
            ft.Text(order.delivery_address, size=13, color="black"),
            ft.Text(order.phone_number, size=13, color="grey700"),
            ft.Divider(height=1),
            *[
                ft.Row([
                    ft.Text(f"{line.quantity}x {line.name}", size=13, expand=True),
                    ft.Text(money(line.subtotal), size=13, weight="bold"),
                ])
                for line in order.items
            ],
            ft.Divider(height=1),
            ft.Row([
                ft.Text("Total", size=15, weight="bold"),
                ft.Text(money(order.total_price), size=15, weight="bold"),
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        ]

    def on_update(order):
        render(order)
        page.update()

    def poll():
        watch_order(order_id, fetch, on_update, stop_event, context.settings.tracker_poll_seconds)

    def stop():
        stop_event.set()

    def handle_back(e):
        stop()
        on_back()

    try:
        order = fetch()
    except BigBiteError as ex:
        return ft.Column([
            section_header("Track Order", on_back=handle_back),
            ft.Container(content=ft.Text(ex.message, color="red"), padding=20)
        ], expand=True), stop

    render(order)
    render_details(order)
    if not is_terminal(order.status):
        threading.Thread(target=poll, daemon=True).start()

    control = ft.Column([
        section_header(f"Order #{order.id}", on_back=handle_back),
        ft.Container(
            content=ft.Column([
                ft.Row([badge_area, updated_text], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                status_area,
                ft.Card(content=ft.Container(content=details, padding=12, bgcolor="white", border_radius=12)),
            ], spacing=10, scroll=ft.ScrollMode.AUTO),
            expand=True,
            padding=12,
            bgcolor="grey100"
        )
    ], expand=True, spacing=0)
    return control, stop
