"""
Admin Panel - Main Orchestrator
Coordinates the menu and order tabs
"""
import flet as ft
from ui.admin_constants import BACKGROUND_GRADIENT, BREAKPOINT, PRIMARY
from ui.admin_food_items import build_food_items_tab
from ui.admin_orders import build_orders_tab
from ui.utils import current_actor, show_message

def admin_view(page: ft.Page, context):
    """
    Main admin panel view - orchestrates all tabs
    """
    page.title = f"{context.settings.app_name} Admin"

    actor = current_actor(page)
    if not actor or not actor.is_admin:
        show_message(page, "Access denied. Admins only.", error=True)
        page.go("/home" if actor else "/login")
        return

    db = context.session()
    is_desktop = page.window.width > BREAKPOINT

    # ===================== BUILD TABS =====================

    tabs = ft.Tabs(
        selected_index=1,
        animation_duration=300,
        tabs=[
            build_food_items_tab(page, db, actor, is_desktop),
            build_orders_tab(page, db, actor, is_desktop),
        ],
        expand=True,
        label_color=PRIMARY,
        unselected_label_color="black",
        indicator_color=PRIMARY,
        indicator_border_radius=0,
        divider_color="grey300"
    )

    # ===================== HEADER & LOGOUT =====================

    def leave(route):
        db.close()
        page.go(route)

    # ===================== BUILD UI =====================

    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([
                ft.Container(
                    content=ft.Column([
                        ft.Container(
                            content=ft.Row([
                                ft.Text("Admin Panel", size=20, weight="bold", color="black"),
                                ft.Row([
                                    ft.IconButton(
                                        icon=ft.Icons.ANALYTICS,
                                        icon_color="black",
                                        tooltip="Analytics",
                                        on_click=lambda e: leave("/analytics")
                                    ),
                                    ft.IconButton(
                                        icon=ft.Icons.LOGOUT,
                                        icon_color="black",
                                        tooltip="Logout",
                                        on_click=lambda e: leave("/logout")
                                    )
                                ], spacing=5)
                            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                            padding=ft.padding.only(top=15, left=15, right=15, bottom=8)
                        ),
                        ft.Divider(height=1, color="grey300", thickness=1)
                    ], spacing=0),
                    bgcolor="white",
                    padding=0
                ),

                ft.Container(
                    content=tabs,
                    expand=True,
                    gradient=ft.LinearGradient(
                        begin=ft.alignment.top_center,
                        end=ft.alignment.bottom_center,
                        colors=BACKGROUND_GRADIENT
                    )
                )
            ], expand=True, spacing=0),
            width=page.window.width if is_desktop else 400,
            expand=True,
            padding=0
        )
    )
    page.update()
