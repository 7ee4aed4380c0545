import flet as ft
from core.cart_service import get_cart_lines, get_cart_total, remove_from_cart, update_cart_quantity
from ui.admin_constants import ACCENT
from ui.food_view import food_image
from ui.utils import money, section_header

def cart_view(
    db,
    user_id,
    update_cart_badge,
    switch_tab,
    show_checkout_page,
    refresh_cart
):
    lines = get_cart_lines(db, user_id)
    cart_column = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO)
    has_unavailable = any(not line["available"] for line in lines)

    def update_quantity(cart_item_id, new_quantity):
        update_cart_quantity(db, cart_item_id, new_quantity)
        update_cart_badge()
        refresh_cart()

    def remove_item(cart_item_id):
        remove_from_cart(db, cart_item_id)
        update_cart_badge()
        refresh_cart()

    if not lines:
        cart_column.controls.append(
            ft.Container(
                content=ft.Column([
                    ft.Icon(ft.Icons.SHOPPING_CART, size=80, color="grey"),
                    ft.Text("Hungry?", size=28, weight="bold", color="black"),
                    ft.Text("You haven't added anything to your cart!", size=14, color="grey700"),
                    ft.Container(height=2),
                    ft.ElevatedButton(
                        "Browse",
                        on_click=lambda e: switch_tab("food"),
                        style=ft.ButtonStyle(bgcolor=ACCENT, color="white"),
                        width=120,
                        height=35
                    )
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=10),
                padding=40,
                alignment=ft.alignment.center
            )
        )
    else:
        for line in lines:
            food = line["food"]
            quantity = line["quantity"]
            cart_id = line["cart_id"]

            # --- BUTTONS LOGIC ---
            button_row = ft.Row([
                ft.IconButton(
                    icon=ft.Icons.DELETE if quantity == 1 else ft.Icons.REMOVE,
                    icon_color="red" if quantity == 1 else None,
                    icon_size=16,
                    tooltip="Remove" if quantity == 1 else "Decrease",
                    on_click=lambda e, cid=cart_id, q=quantity: remove_item(cid) if q == 1 else update_quantity(cid, q - 1)
                ),
                ft.Text(str(quantity), size=14, weight="bold"),
                ft.IconButton(
                    icon=ft.Icons.ADD,
                    icon_size=16,
                    tooltip="Increase",
                    on_click=lambda e, cid=cart_id, q=quantity: update_quantity(cid, q + 1)
                ),
            ], spacing=2, alignment=ft.MainAxisAlignment.CENTER)

            cart_column.controls.append(
                ft.Card(
                    content=ft.Container(
                        padding=10,
                        content=ft.Row([
                            food_image(food.image, 60),
                            ft.Column([
                                ft.Text(food.name, weight="bold", size=14),
                                ft.Text(f"{money(food.price)} each", size=11, color="grey700"),
                                ft.Text(f"Subtotal: {money(line['subtotal'])}", size=12, weight="bold", color="green")
                                if line["available"] else
                                ft.Text("No longer available - remove to check out", size=11, color="red", italic=True),
                            ], spacing=2, expand=True),
                            button_row
                        ], spacing=8, alignment=ft.MainAxisAlignment.CENTER)
                    )
                )
            )

        cart_column.controls.append(
            ft.Container(
                content=ft.Row([
                    ft.Icon(ft.Icons.ADD, color="black", size=20),
                    ft.Text("Add more items", size=14, weight="bold", color="black"),
                ], spacing=6, alignment=ft.MainAxisAlignment.START),
                padding=ft.padding.only(left=4, top=0, bottom=0),
                on_click=lambda e: switch_tab("food"),
                ink=True
            )
        )

    can_checkout = bool(lines) and not has_unavailable

    return ft.Column([
        section_header("Cart"),
        ft.Container(
            content=cart_column,
            expand=True,
            padding=10,
            bgcolor="grey100"
        ),
        ft.Container(
            content=ft.Column([
                ft.Divider(height=1, color="grey300", thickness=1),
                ft.Row([
                    ft.Text("Total", size=16, weight="bold", color="black"),
                    ft.Text(money(get_cart_total(db, user_id)), size=16, weight="bold", color="black"),
                ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN, width=350),
                ft.ElevatedButton(
                    "Review Order",
                    on_click=lambda e: show_checkout_page(),
                    disabled=not can_checkout,
                    style=ft.ButtonStyle(bgcolor=ACCENT if can_checkout else "grey", color="white"),
                    width=350,
                    height=45
                )
            ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=12),
            bgcolor="white",
            padding=ft.padding.only(left=0, right=0, top=0, bottom=12),
            shadow=ft.BoxShadow(blur_radius=10, color="grey300")
        )
    ], expand=True, spacing=0)
