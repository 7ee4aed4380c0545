"""
Shared helpers for the flet views
"""
import flet as ft
from core.access import Actor

def current_actor(page: ft.Page):
    """Actor for the logged-in session user, or None"""
    user = page.session.get("user")
    if not user:
        return None
    return Actor(user_id=user["id"], role=user.get("role", "user"), email=user.get("email", ""))

def show_message(page: ft.Page, text: str, error: bool = False):
    """Snack bar in the app's success/error colors"""
    page.open(ft.SnackBar(
        ft.Text(text, color="white"),
        bgcolor=ft.Colors.RED_700 if error else ft.Colors.GREEN_700,
        duration=2500
    ))
    page.update()

def close_dialog(page, dialog):
    """Close a dialog and update the page"""
    page.close(dialog)
    page.update()

def money(value) -> str:
    return f"NT${float(value or 0):,.2f}"

def section_header(title: str, on_back=None):
    """White title bar with bottom divider used at the top of every screen"""
    row = [ft.Text(title, size=20, weight="bold", color="black")]
    if on_back:
        row.insert(0, ft.IconButton(icon=ft.Icons.ARROW_BACK, icon_color="black", on_click=on_back))
    return ft.Container(
        content=ft.Column([
            ft.Container(
                content=ft.Row(row, alignment=ft.MainAxisAlignment.START,
                               vertical_alignment=ft.CrossAxisAlignment.CENTER),
                padding=ft.padding.only(top=15, left=5 if on_back else 15, right=15, bottom=8)
            ),
            ft.Divider(height=1, color="grey300", thickness=1)
        ], spacing=0),
        bgcolor="white",
        padding=0
    )
