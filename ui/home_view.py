import logging
import flet as ft
from core.auth_service import get_user_by_id, update_contact_details
from core.cart_service import add_to_cart, cart_order_lines, clear_user_cart, get_cart_count, get_cart_lines, get_cart_total
from core.errors import BigBiteError
from core.order_service import create_order
from ui.admin_constants import PRIMARY
from ui.cart_view import cart_view
from ui.checkout_view import checkout_view
from ui.food_view import food_view
from ui.order_history_view import order_history_widget
from ui.order_tracking_view import order_tracking_view
from ui.profile_view import profile_view
from ui.utils import current_actor, show_message

logger = logging.getLogger(__name__)

def home_view(page: ft.Page, context):
    actor = current_actor(page)
    if not actor:
        show_message(page, "Please log in first.", error=True)
        page.go("/login")
        return

    db = context.session()
    page.title = context.settings.app_name
    user_id = actor.user_id

    # State
    nav_state = {"tab": "food"}  # "food", "cart", "orders", "profile"
    show_checkout = {"value": False}
    tracker = {"order_id": None, "stop": None}
    cart_count_text = ft.Text("", color="white", size=10, weight="bold")
    cart_badge_container = ft.Container(
        content=cart_count_text,
        bgcolor=PRIMARY,
        border_radius=10,
        padding=ft.padding.symmetric(horizontal=6, vertical=3),
        right=5,
        top=5,
        visible=False
    )
    content_container = ft.Container(expand=True)

    # --- CART BADGE ---
    def update_cart_badge():
        total_items = get_cart_count(db, user_id)
        cart_count_text.value = str(total_items) if total_items > 0 else ""
        cart_badge_container.visible = total_items > 0
        page.update()

    # --- FOOTER NAVIGATION ---
    def nav_icon(icon, label, tab, on_click, active_tab):
        is_active = tab == active_tab
        return ft.Column([
            ft.IconButton(
                icon=icon,
                tooltip=label,
                icon_color=PRIMARY if is_active else "black",
                on_click=on_click
            ),
            ft.Text(label, size=8, text_align=ft.TextAlign.CENTER, color="black")
        ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=0)

    def footer_row():
        active = nav_state["tab"]
        return ft.Row([
            nav_icon(ft.Icons.RESTAURANT_MENU, "Food", "food", lambda e: switch_tab("food"), active),
            ft.Stack([
                nav_icon(ft.Icons.SHOPPING_CART, "Cart", "cart", lambda e: switch_tab("cart"), active),
                cart_badge_container
            ], width=50, height=50),
            nav_icon(ft.Icons.HISTORY, "Orders", "orders", lambda e: switch_tab("orders"), active),
            nav_icon(ft.Icons.PERSON, "Profile", "profile", lambda e: switch_tab("profile"), active),
            nav_icon(ft.Icons.LOGOUT, "Logout", "logout", lambda e: logout(), active),
        ], alignment=ft.MainAxisAlignment.SPACE_AROUND)

    footer = ft.Container(
        content=footer_row(),
        bgcolor="white",
        padding=ft.padding.symmetric(vertical=6),
        border=ft.border.only(top=ft.BorderSide(1, "grey300")),
        margin=0,
        height=60
    )

    def stop_tracker():
        if tracker["stop"]:
            tracker["stop"]()
        tracker["order_id"] = None
        tracker["stop"] = None

    def switch_tab(tab):
        stop_tracker()
        nav_state["tab"] = tab
        show_checkout["value"] = False
        render_main_content()
        footer.content = footer_row()
        page.update()

    def logout():
        stop_tracker()
        db.close()
        page.go("/logout")

    def open_tracker(order_id):
        stop_tracker()
        tracker["order_id"] = order_id
        render_main_content()

    def handle_checkout(delivery_address, phone_number, recipient_name, remember):
        try:
            order = create_order(
                db,
                actor,
                cart_order_lines(db, user_id),
                delivery_address=delivery_address,
                phone_number=phone_number,
                recipient_name=recipient_name,
            )
        except BigBiteError as ex:
            show_message(page, ex.message, error=True)
            return

        clear_user_cart(db, user_id)
        if remember:
            update_contact_details(db, user_id, phone_number, delivery_address)
        update_cart_badge()

        logger.info("Order #%s placed by %s", order.id, actor.email)
        context.mailer.queue_order_confirmation(actor.email, order)

        show_checkout["value"] = False
        nav_state["tab"] = "orders"
        footer.content = footer_row()
        show_message(page, f"Order #{order.id} placed!")
        open_tracker(order.id)

    def refresh_cart():
        render_main_content()

    # --- MAIN CONTENT RENDERERS ---
    def render_main_content():
        if tracker["order_id"] is not None:
            control, stop = order_tracking_view(
                page,
                context,
                tracker["order_id"],
                on_back=lambda: switch_tab("orders")
            )
            tracker["stop"] = stop
            content_container.content = control
        elif show_checkout["value"]:
            content_container.content = checkout_view(
                page,
                on_back=lambda e: switch_tab("cart"),
                lines=get_cart_lines(db, user_id),
                total=get_cart_total(db, user_id),
                user=get_user_by_id(db, user_id),
                on_checkout=handle_checkout
            )
        elif nav_state["tab"] == "food":
            content_container.content = food_view(
                db=db,
                user_id=user_id,
                update_cart_badge=update_cart_badge,
                add_to_cart=add_to_cart,
                page=page
            )
        elif nav_state["tab"] == "cart":
            content_container.content = cart_view(
                db=db,
                user_id=user_id,
                update_cart_badge=update_cart_badge,
                switch_tab=switch_tab,
                show_checkout_page=show_checkout_page,
                refresh_cart=refresh_cart
            )
        elif nav_state["tab"] == "orders":
            content_container.content = order_history_widget(
                page, db, switch_tab, update_cart_badge, on_track=open_tracker
            )
        elif nav_state["tab"] == "profile":
            content_container.content = profile_view(page, context, db, actor)
        page.update()

    def show_checkout_page():
        show_checkout["value"] = True
        render_main_content()

    # --- INITIAL RENDER ---
    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([
                content_container,
                footer
            ], expand=True, spacing=0),
            width=400,
            expand=True,
            padding=0,
            bgcolor="white"
        )
    )
    render_main_content()
    update_cart_badge()
