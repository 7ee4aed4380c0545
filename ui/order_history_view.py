import flet as ft
from core.cart_service import add_to_cart
from core.catalog_service import find_available_by_ids
from core.order_service import list_orders_by_user
from ui.admin_constants import ACCENT, PRIMARY, BACKGROUND_GRADIENT
from ui.order_widgets import status_badge
from ui.utils import current_actor, money, section_header, show_message

def order_history_widget(page, db, on_nav, update_cart_badge, on_track):
    actor = current_actor(page)
    if not actor:
        return ft.Text("Please log in first.", color="red")

    orders = list_orders_by_user(db, actor, actor.user_id)
    order_column = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO)

    def reorder_items(order):
        # Snapshot lines keep the food id; only foods still on the menu can be re-added
        available = {f.id for f in find_available_by_ids(db, {line.food_id for line in order.items})}
        added_count = 0
        for line in order.items:
            if line.food_id in available:
                add_to_cart(db, actor.user_id, line.food_id, quantity=line.quantity)
                added_count += 1
        update_cart_badge()
        skipped = len(order.items) - added_count
        text = f"Added {added_count} items to cart!"
        if skipped:
            text += f" {skipped} no longer available."
        show_message(page, text, error=added_count == 0)
        if added_count:
            on_nav("cart")

    if not orders:
        order_column.controls.append(
            ft.Container(
                content=ft.Column([
                    ft.Icon(ft.Icons.RECEIPT_LONG_OUTLINED, size=80, color="grey"),
                    ft.Text("No orders yet", size=18, color="black", weight="bold"),
                    ft.Text("Start shopping to see your order history", size=12, color="grey700"),
                    ft.Container(height=10),
                    ft.ElevatedButton(
                        "Browse Food",
                        on_click=lambda e: on_nav("food"),
                        style=ft.ButtonStyle(bgcolor=PRIMARY, color="white"),
                        width=120,
                        height=35
                    )
                ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=10),
                padding=40,
                alignment=ft.alignment.center
            )
        )
    for order in orders:
        # Snapshot name/price, not the live menu
        item_rows = [
            ft.Row([
                ft.Text(f"{line.quantity}x {line.name}", size=13, color="black", expand=True),
                ft.Text(f"{money(line.unit_price)} × {line.quantity}", size=11, color="grey700"),
                ft.Text(money(line.subtotal), size=13, weight="bold", color="green"),
            ], spacing=8)
            for line in order.items
        ]
        order_column.controls.append(
            ft.Container(
                content=ft.Card(
                    content=ft.Container(
                        content=ft.Column([
                            ft.Row([
                                ft.Text(f"Order #{order.id}", size=16, weight="bold", color="black"),
                                status_badge(order.status)
                            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                            ft.Text(f"Date: {order.created_at.strftime('%Y-%m-%d %H:%M')}", size=11, color="grey700"),
                            ft.Divider(height=1),
                            ft.Column(item_rows, spacing=4),
                            ft.Divider(height=1),
                            ft.Row([
                                ft.Text(f"Total: {money(order.total_price)}", weight="bold", size=16, color="black"),
                                ft.Row([
                                    ft.OutlinedButton("Track", on_click=lambda e, oid=order.id: on_track(oid), height=32),
                                    ft.ElevatedButton(
                                        "Reorder",
                                        on_click=lambda e, o=order: reorder_items(o),
                                        style=ft.ButtonStyle(
                                            bgcolor=ACCENT,
                                            color="black",
                                            shape=ft.RoundedRectangleBorder(radius=5)
                                        ),
                                        height=32
                                    )
                                ], spacing=6)
                            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN)
                        ], spacing=8),
                        padding=12,
                        bgcolor="white",
                        border_radius=12
                    )
                ),
                padding=ft.padding.symmetric(horizontal=10)
            )
        )

    return ft.Column([
        section_header("Order History"),
        ft.Container(
            content=order_column,
            expand=True,
            padding=ft.padding.only(top=10, bottom=10),
            gradient=ft.LinearGradient(
                begin=ft.alignment.top_center,
                end=ft.alignment.bottom_center,
                colors=BACKGROUND_GRADIENT
            )
        )
    ], expand=True, spacing=0)
