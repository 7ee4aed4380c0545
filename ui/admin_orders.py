"""
Orders Management Tab for Admin Panel
"""
import flet as ft
from core.errors import BigBiteError
from core.order_service import list_all_orders, transition_order
from core.order_status import OrderStatus
from ui.admin_constants import ACTION_LABELS, DESKTOP_COLUMNS, GRID_SPACING, GRID_RUN_SPACING
from ui.order_widgets import status_badge
from ui.utils import money, show_message

def build_orders_tab(page: ft.Page, db, actor, is_desktop: bool):
    """
    Build the Orders management tab

    Args:
        page: Flet page object
        db: Database session
        actor: Current admin Actor
        is_desktop: True if desktop layout, False if mobile

    Returns:
        ft.Tab: orders tab with status filter and transition buttons
    """
    filter_state = {"status": None}

    # ===================== CARD BUILDER =====================

    def build_order_card(order):
        """Only the moves the state machine allows get a button"""
        username = order.user.full_name if order.user else "Unknown"
        actions = [
            ft.ElevatedButton(
                ACTION_LABELS.get(next_status, next_status),
                on_click=lambda e, oid=order.id, s=next_status: update_order_status(oid, s),
                style=ft.ButtonStyle(
                    padding=8,
                    color="red700" if next_status == OrderStatus.CANCELLED.value else "green700",
                    bgcolor="grey200"
                ),
                height=35
            )
            for next_status in order.allowed_next
        ]
        summary = ", ".join(f"{line.quantity}x {line.name}" for line in order.items)

        return ft.Card(
            content=ft.Container(
                content=ft.Column([
                    ft.Row([
                        ft.Text(f"Order #{order.id}", weight="bold", size=14, color='black'),
                        status_badge(order.status, size=12)
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    ft.Text(f"by {username} · {order.created_at.strftime('%m/%d %H:%M')}", size=12, color="grey700"),
                    ft.Text(summary, size=11, color="grey800", max_lines=2, overflow=ft.TextOverflow.ELLIPSIS),
                    ft.Text(order.delivery_address, size=11, color="grey700", max_lines=1,
                            overflow=ft.TextOverflow.ELLIPSIS),
                    ft.Row([
                        ft.Text(f"Total: {money(order.total_price)}", size=14, weight="bold", color="green"),
                        ft.Row(actions, spacing=5) if actions else ft.Text("Closed", size=12, italic=True, color="grey")
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN)
                ], spacing=3),
                padding=10,
                bgcolor='white',
                border_radius=12
            )
        )

    # ===================== GRID/LIST CONTAINERS =====================

    # Desktop: GridView with 3 columns
    orders_grid = ft.GridView(
        runs_count=DESKTOP_COLUMNS,
        max_extent=500,
        child_aspect_ratio=2.6,
        spacing=GRID_SPACING,
        run_spacing=GRID_RUN_SPACING,
        expand=True
    )

    # Mobile: single column list
    orders_list = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)

    # ===================== LOAD DATA =====================

    def load_orders():
        target = orders_grid if is_desktop else orders_list
        target.controls.clear()
        # Another admin (or the API) may have moved orders since the last load
        db.expire_all()
        for order in list_all_orders(db, actor, status=filter_state["status"]):
            target.controls.append(build_order_card(order))
        if not target.controls:
            target.controls.append(ft.Text("No orders.", size=14, color="grey700", italic=True))
        page.update()

    # ===================== UPDATE ORDER STATUS =====================

    def update_order_status(order_id, status):
        try:
            order = transition_order(db, actor, order_id, status)
        except BigBiteError as ex:
            show_message(page, ex.message, error=True)
            load_orders()
            return
        load_orders()
        show_message(page, f"Order #{order.id} → {order.order_status.label}")

    def on_filter_change(e):
        filter_state["status"] = None if status_filter.value == "all" else status_filter.value
        load_orders()

    status_filter = ft.Dropdown(
        value="all",
        width=170,
        dense=True,
        options=[ft.dropdown.Option("all", "All orders")] + [
            ft.dropdown.Option(status.value, status.label) for status in OrderStatus
        ],
        on_change=on_filter_change,
        bgcolor="white",
        color="black"
    )

    # ===================== BUILD TAB =====================

    load_orders()

    return ft.Tab(
        text="Orders",
        icon=ft.Icons.SHOPPING_BAG,
        content=ft.Column([
            ft.Container(
                content=ft.Row([
                    ft.Text("Manage Orders", size=20, weight="bold", color='black'),
                    ft.Row([
                        status_filter,
                        ft.IconButton(icon=ft.Icons.REFRESH, icon_color="black", tooltip="Refresh",
                                      on_click=lambda e: load_orders())
                    ], spacing=4)
                ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                padding=10
            ),
            ft.Container(
                content=orders_grid if is_desktop else orders_list,
                expand=True,
                padding=10
            )
        ], expand=True, spacing=0)
    )
