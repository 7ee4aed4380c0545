"""
Order status badge and progress tracker shared by customer and admin screens
"""
import flet as ft
from core.order_status import OrderStatus, PROGRESS_STEPS, STATUS_LABELS
from ui.admin_constants import STATUS_COLORS, ACCENT

def status_badge(status: str, size: int = 11):
    try:
        label = OrderStatus(status).label
    except ValueError:
        label = status
    return ft.Container(
        content=ft.Text(label, color="white", size=size, weight="bold"),
        bgcolor=STATUS_COLORS.get(status, "grey"),
        padding=ft.padding.symmetric(horizontal=8, vertical=4),
        border_radius=5
    )

def progress_tracker(status: str):
    """Placed -> Preparing -> Delivering -> Completed, or a single cancelled marker"""
    if status == OrderStatus.CANCELLED.value:
        return ft.Row([
            ft.Icon(ft.Icons.CANCEL, color="red", size=28),
            ft.Text("Order Cancelled", size=14, weight="bold", color="red")
        ], alignment=ft.MainAxisAlignment.CENTER)

    step_values = [s.value for s in PROGRESS_STEPS]
    current = step_values.index(status) if status in step_values else 0
    controls = []
    for index, step in enumerate(PROGRESS_STEPS):
        if index < current or (step == OrderStatus.COMPLETED and index == current):
            icon, color = ft.Icons.CHECK_CIRCLE, "green"
        elif index == current:
            icon, color = ft.Icons.RADIO_BUTTON_CHECKED, ACCENT
        else:
            icon, color = ft.Icons.RADIO_BUTTON_UNCHECKED, "grey400"
        controls.append(ft.Column([
            ft.Icon(icon, color=color, size=26),
            ft.Text(STATUS_LABELS[step], size=10, color="black" if index <= current else "grey600",
                    text_align=ft.TextAlign.CENTER)
        ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=2, width=70))
        if index < len(PROGRESS_STEPS) - 1:
            controls.append(ft.Container(
                height=3, expand=True, bgcolor="green" if index < current else "grey300",
                margin=ft.margin.only(bottom=18)
            ))
    return ft.Row(controls, alignment=ft.MainAxisAlignment.CENTER, vertical_alignment=ft.CrossAxisAlignment.CENTER, spacing=0)
