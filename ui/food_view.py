import os
import flet as ft
from core.catalog_service import list_foods, list_categories
from ui.admin_constants import ACCENT
from ui.utils import money, section_header, show_message

def food_image(src, size):
    if src and (src.startswith("http") or os.path.exists(src)):
        return ft.Image(src=src, width=size, height=size, fit=ft.ImageFit.COVER, border_radius=8)
    return ft.Container(width=size, height=size, bgcolor="grey300", border_radius=8,
                        content=ft.Icon(ft.Icons.FASTFOOD, color="grey500"), alignment=ft.alignment.center)

def food_view(
    db,
    user_id,
    update_cart_badge,
    add_to_cart,
    page,
):
    items_column = ft.Column(spacing=3)
    selected = {"category": "All"}

    def add_to_cart_directly(item):
        add_to_cart(db, user_id, item.id, quantity=1)
        update_cart_badge()
        show_message(page, f"{item.name} added to cart!")

    def food_card(item):
        return ft.Card(
            content=ft.Container(
                padding=10,
                content=ft.Row([
                    ft.Container(
                        content=food_image(item.image, 80),
                        border=ft.border.all(1, "grey300"),
                        border_radius=8,
                        opacity=1.0 if item.available else 0.4
                    ),
                    ft.Column([
                        ft.Text(item.name, weight="bold", size=14, color="black"),
                        ft.Text(item.display_category, size=10, color="grey700"),
                        ft.Text((item.description or "")[:40] + ("..." if len(item.description or "") > 40 else ""),
                                size=10, color="grey700"),
                        ft.Text(money(item.price), color="green", size=14, weight="bold") if item.available
                        else ft.Text("Unavailable", color="red", size=12, italic=True),
                    ], spacing=3, expand=True),
                    ft.IconButton(
                        icon=ft.Icons.ADD_CIRCLE,
                        icon_color=ACCENT,
                        icon_size=28,
                        tooltip="Add to cart",
                        disabled=not item.available,
                        on_click=lambda e, it=item: add_to_cart_directly(it)
                    )
                ], spacing=8, alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                bgcolor='white',
                border_radius=12
            )
        )

    def load_items():
        items_column.controls.clear()
        for item in list_foods(db, category=selected["category"]):
            items_column.controls.append(
                ft.Container(content=food_card(item), padding=ft.padding.symmetric(horizontal=10))
            )
        if not items_column.controls:
            items_column.controls.append(
                ft.Container(
                    content=ft.Text("No items in this category yet.", size=14, color="grey", italic=True),
                    padding=20,
                    alignment=ft.alignment.center
                )
            )
        page.update()

    def select_category(category):
        selected["category"] = category
        for chip in category_row.controls:
            chip.selected = chip.data == category
        load_items()

    category_row = ft.Row(
        [
            ft.Chip(
                label=ft.Text(name),
                data=name,
                selected=name == "All",
                on_select=lambda e, c=name: select_category(c)
            )
            for name in ["All"] + list_categories(db)
        ],
        scroll=ft.ScrollMode.AUTO,
        spacing=6
    )

    load_items()

    return ft.Column([
        section_header("Menu"),
        ft.Container(content=category_row, padding=ft.padding.symmetric(horizontal=10, vertical=6), bgcolor="white"),
        ft.Container(
            content=ft.Column([items_column], scroll=ft.ScrollMode.AUTO),
            expand=True,
            padding=ft.padding.only(top=8),
            bgcolor="grey100"
        )
    ], expand=True, spacing=0)
