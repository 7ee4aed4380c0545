"""
Food Items Management Tab for Admin Panel
"""
import os
import shutil
import flet as ft
from core.catalog_service import create_food, delete_food, list_foods, set_availability, update_food
from core.errors import BigBiteError
from ui.admin_constants import (
    ACCENT, CATEGORIES, DESKTOP_COLUMNS,
    GRID_SPACING, GRID_RUN_SPACING
)
from ui.food_view import food_image
from ui.utils import close_dialog, money, show_message

UPLOAD_DIR = "assets/uploads/foods"

def build_food_items_tab(page: ft.Page, db, actor, is_desktop: bool):
    """
    Build the Food Items management tab

    Args:
        page: Flet page object
        db: Database session
        actor: Current admin Actor
        is_desktop: True if desktop layout, False if mobile

    Returns:
        ft.Tab: menu tab with add/edit/delete and availability toggles
    """

    # ===================== CARD BUILDER =====================

    def build_food_card(item):
        """Same horizontal card on desktop and mobile, 3-dot menu for Edit/Delete"""
        return ft.Card(
            content=ft.Container(
                content=ft.Row([
                    ft.Container(
                        content=food_image(item.image, 80),
                        border=ft.border.all(1, "grey300"),
                        border_radius=8,
                        opacity=1.0 if item.available else 0.5
                    ),
                    ft.Column([
                        ft.Row([
                            ft.Text(item.name, weight="bold", size=16, color="black", expand=True),
                            ft.PopupMenuButton(
                                icon=ft.Icons.MORE_VERT,
                                icon_color="black",
                                items=[
                                    ft.PopupMenuItem(
                                        text="Edit",
                                        icon=ft.Icons.EDIT,
                                        on_click=lambda e, i=item: show_food_dialog(i)
                                    ),
                                    ft.PopupMenuItem(
                                        text="Delete",
                                        icon=ft.Icons.DELETE,
                                        on_click=lambda e, i=item: delete_food_item(i)
                                    ),
                                ],
                                icon_size=20,
                                padding=0,
                                bgcolor='white',
                                menu_position=ft.PopupMenuPosition.OVER,
                            )
                        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN, spacing=5),
                        ft.Text(f"Category: {item.display_category}", size=12, color="grey700"),
                        ft.Row([
                            ft.Text(money(item.price), color="green", weight="bold"),
                            ft.Row([
                                ft.Text("Available" if item.available else "Hidden", size=11, color="grey700"),
                                ft.Switch(
                                    value=bool(item.available),
                                    active_color="green",
                                    on_change=lambda e, i=item: toggle_availability(i, e.control.value)
                                )
                            ], spacing=2)
                        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    ], spacing=3, expand=True),
                ], spacing=10, vertical_alignment=ft.CrossAxisAlignment.CENTER),
                padding=10,
                bgcolor="white",
                border_radius=12
            )
        )

    # ===================== GRID/LIST CONTAINERS =====================

    food_grid = ft.GridView(
        runs_count=DESKTOP_COLUMNS,
        max_extent=500,
        child_aspect_ratio=3.4,
        spacing=GRID_SPACING,
        run_spacing=GRID_RUN_SPACING,
        expand=True
    )
    food_list = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)

    # ===================== LOAD DATA =====================

    def load_food_items():
        target = food_grid if is_desktop else food_list
        target.controls.clear()
        for item in list_foods(db):
            target.controls.append(build_food_card(item))
        page.update()

    def toggle_availability(item, available):
        try:
            set_availability(db, actor, item.id, available)
        except BigBiteError as ex:
            show_message(page, ex.message, error=True)
        load_food_items()

    # ===================== ADD / EDIT DIALOG =====================

    def show_food_dialog(item=None):
        editing = item is not None
        name_field = ft.TextField(label="Food Name", value=item.name if editing else "", width=300)
        description_field = ft.TextField(label="Description", value=(item.description or "") if editing else "",
                                         width=300, multiline=True)
        price_field = ft.TextField(label="Price", value=str(item.price) if editing else "", width=300,
                                   keyboard_type=ft.KeyboardType.NUMBER)
        category_options = list(CATEGORIES)
        if editing and item.display_category not in category_options:
            category_options.append(item.display_category)
        category_dropdown = ft.Dropdown(
            label="Category",
            value=item.display_category if editing else None,
            width=300,
            options=[ft.dropdown.Option(cat) for cat in category_options]
        )
        available_switch = ft.Switch(label="Available", value=bool(item.available) if editing else True)
        message = ft.Text("", color="red")

        uploaded_image_path = {"value": (item.image or "") if editing else ""}
        image_preview = ft.Container(
            content=food_image(uploaded_image_path["value"], 120) if uploaded_image_path["value"]
            else ft.Text("No image selected", size=12, color="grey"),
            width=300,
            height=120,
            bgcolor="grey200",
            border_radius=8,
            alignment=ft.alignment.center,
            border=ft.border.all(1, "grey300")
        )

        def on_file_pick(e: ft.FilePickerResultEvent):
            if not e.files:
                return
            src = e.files[0].path
            os.makedirs(UPLOAD_DIR, exist_ok=True)
            dest = os.path.join(UPLOAD_DIR, os.path.basename(src))
            try:
                shutil.copy(src, dest)
            except OSError as ex:
                message.value = f"Could not copy image: {ex}"
                page.update()
                return
            uploaded_image_path["value"] = dest
            image_preview.content = ft.Image(src=dest, width=300, height=120, fit=ft.ImageFit.COVER, border_radius=8)
            page.update()

        file_picker = ft.FilePicker(on_result=on_file_pick)
        page.overlay.append(file_picker)
        page.update()

        def save_food(e):
            if not all([name_field.value, price_field.value, category_dropdown.value]):
                message.value = "Please fill all required fields"
                page.update()
                return
            fields = dict(
                name=name_field.value,
                description=description_field.value or "",
                price=price_field.value,
                category=category_dropdown.value,
                image=uploaded_image_path["value"] or None,
                available=available_switch.value,
            )
            try:
                if editing:
                    saved = update_food(db, actor, item.id, **fields)
                else:
                    saved = create_food(db, actor, **fields)
            except BigBiteError as ex:
                message.value = ex.message
                page.update()
                return
            close_dialog(page, dialog)
            load_food_items()
            show_message(page, f"{saved.name} {'updated' if editing else 'added'}!")

        title_text = "Add New Food Item"
        if editing:
            title_text = f"Edit: {item.name[:22]}..." if len(item.name) > 22 else f"Edit: {item.name}"

        dialog = ft.AlertDialog(
            title=ft.Container(
                content=ft.Text(title_text, size=16, weight="bold", overflow=ft.TextOverflow.ELLIPSIS, max_lines=1),
                alignment=ft.alignment.center_left,
                width=320,
                padding=ft.padding.only(left=10)
            ),
            content=ft.Container(
                content=ft.Column([
                    name_field,
                    description_field,
                    price_field,
                    category_dropdown,
                    available_switch,
                    ft.Divider(),
                    ft.Text("Food Image", size=14, weight="bold"),
                    image_preview,
                    ft.ElevatedButton(
                        "Change Image" if editing else "Upload Image",
                        icon=ft.Icons.UPLOAD_FILE,
                        on_click=lambda e: file_picker.pick_files(
                            allowed_extensions=["png", "jpg", "jpeg"],
                            allow_multiple=False
                        ),
                        width=300,
                        bgcolor=ACCENT,
                        color="white"
                    ),
                    message
                ], tight=True, scroll=ft.ScrollMode.AUTO, horizontal_alignment=ft.CrossAxisAlignment.CENTER),
                width=320,
                height=560,
                alignment=ft.alignment.top_center
            ),
            actions=[
                ft.TextButton("Cancel", on_click=lambda e: close_dialog(page, dialog)),
                ft.ElevatedButton("Update" if editing else "Save", on_click=save_food)
            ]
        )
        page.open(dialog)

    # ===================== DELETE FOOD =====================

    def delete_food_item(item):
        def confirm_delete(e):
            try:
                delete_food(db, actor, item.id)
            except BigBiteError as ex:
                close_dialog(page, dialog)
                show_message(page, ex.message, error=True)
                return
            close_dialog(page, dialog)
            load_food_items()
            show_message(page, f"{item.name} deleted")

        dialog = ft.AlertDialog(
            title=ft.Text("Confirm Delete"),
            content=ft.Text(f"Are you sure you want to delete '{item.name}'? Past orders keep their copy."),
            actions=[
                ft.TextButton("Cancel", on_click=lambda e: close_dialog(page, dialog)),
                ft.ElevatedButton("Delete", on_click=confirm_delete, style=ft.ButtonStyle(bgcolor="red", color="white"))
            ]
        )
        page.open(dialog)

    # ===================== BUILD TAB =====================

    load_food_items()

    return ft.Tab(
        text="Menu",
        icon=ft.Icons.RESTAURANT_MENU,
        content=ft.Column([
            ft.Container(
                content=ft.Row([
                    ft.Text("Manage Menu", size=20, weight="bold", color='black'),
                    ft.ElevatedButton(
                        "Add New Item",
                        icon=ft.Icons.ADD,
                        on_click=lambda e: show_food_dialog(),
                        bgcolor=ACCENT,
                        color="white"
                    )
                ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                padding=10
            ),
            ft.Container(
                content=food_grid if is_desktop else food_list,
                expand=True,
                padding=10
            )
        ], expand=True, spacing=0)
    )
