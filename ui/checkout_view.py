import flet as ft
from ui.admin_constants import ACCENT
from ui.utils import money, section_header

def checkout_view(page, on_back, lines, total, user=None, on_checkout=None):
    """
    Delivery form plus order summary.
    on_checkout(delivery_address, phone_number, recipient_name, remember) places the order.
    """
    field_style = dict(border_radius=10, filled=True, bgcolor="white", text_size=14, color="black")

    address_field = ft.TextField(
        label="Delivery address",
        value=(user.delivery_address if user else "") or "",
        multiline=True,
        min_lines=1,
        max_lines=3,
        prefix_icon=ft.Icons.LOCATION_ON_OUTLINED,
        **field_style
    )
    phone_field = ft.TextField(
        label="Phone number",
        value=(user.phone_number if user else "") or "",
        keyboard_type=ft.KeyboardType.PHONE,
        prefix_icon=ft.Icons.PHONE_OUTLINED,
        **field_style
    )
    recipient_field = ft.TextField(
        label="Recipient name (optional)",
        value=(user.full_name if user else "") or "",
        prefix_icon=ft.Icons.PERSON_OUTLINE,
        **field_style
    )
    remember_box = ft.Checkbox(label="Save these details for next time", value=True)

    def submit(e):
        # Required-field checks happen in the order service; only flag blanks inline here
        address_field.error_text = None if address_field.value.strip() else "Required"
        phone_field.error_text = None if phone_field.value.strip() else "Required"
        page.update()
        if on_checkout:
            on_checkout(address_field.value, phone_field.value, recipient_field.value, remember_box.value)

    delivery_container = ft.Container(
        content=ft.Column([
            ft.Row([
                ft.Icon(ft.Icons.DELIVERY_DINING, size=20, color="grey700"),
                ft.Text("Delivery details", size=16, weight="bold", color="black"),
            ], spacing=8),
            address_field,
            phone_field,
            recipient_field,
            remember_box,
        ], spacing=10),
        bgcolor="white",
        border_radius=12,
        padding=16,
        margin=ft.margin.symmetric(vertical=16, horizontal=16),
        shadow=ft.BoxShadow(blur_radius=8, color="grey200")
    )

    # --- Order summary container ---
    order_summary_rows = [
        ft.Row([
            ft.Text(f"{line['quantity']}x {line['food'].name}", size=15, color="black", expand=True),
            ft.Text(money(line["subtotal"]), size=15, color="black", weight="bold"),
        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN)
        for line in lines
    ]

    order_summary_container = ft.Container(
        content=ft.Column([
            ft.Row([
                ft.Icon(ft.Icons.RECEIPT_LONG_OUTLINED, size=20, color="grey700"),
                ft.Text("Order summary", size=16, weight="bold", color="black"),
            ], spacing=8),
            *order_summary_rows,
            ft.Text("Payment: cash on delivery", size=12, color="grey700", italic=True),
        ], spacing=8),
        bgcolor="white",
        border_radius=12,
        padding=16,
        margin=ft.margin.symmetric(vertical=0, horizontal=16),
        shadow=ft.BoxShadow(blur_radius=8, color="grey200")
    )

    checkout_footer = ft.Container(
        content=ft.Column([
            ft.Row([
                ft.Text("Total", size=16, weight="bold", color="black"),
                ft.Text(money(total), size=18, weight="bold", color="black"),
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
            ft.ElevatedButton(
                "Place order",
                on_click=submit,
                style=ft.ButtonStyle(bgcolor=ACCENT, color="white"),
                width=350,
                height=45
            )
        ], spacing=12, horizontal_alignment=ft.CrossAxisAlignment.CENTER),
        bgcolor="white",
        padding=ft.padding.only(left=25, right=25, top=14, bottom=12),
        shadow=ft.BoxShadow(blur_radius=10, color="grey300")
    )

    return ft.Column([
        section_header("Checkout", on_back=on_back),
        ft.Container(
            content=ft.Column([
                delivery_container,
                order_summary_container,
            ], spacing=0, scroll=ft.ScrollMode.AUTO),
            expand=True,
            bgcolor="grey100",
            padding=0,
            margin=0,
        ),
        checkout_footer
    ], expand=True, spacing=0)
