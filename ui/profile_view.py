import flet as ft

from core.errors import BigBiteError
from core.profile_service import change_password, get_profile, get_profile_stats, update_profile
from ui.admin_constants import PRIMARY
from ui.utils import money, section_header, show_message

def _field(label, value="", password=False, disabled=False):
    return ft.TextField(
        label=label,
        value=value or "",
        width=300,
        password=password,
        can_reveal_password=password,
        disabled=disabled,
        color="grey700" if disabled else "black",
        label_style=ft.TextStyle(color="grey700" if disabled else "black"),
        bgcolor="white",
        filled=True
    )

def _initials(name: str) -> str:
    return "".join(part[0].upper() for part in (name or "?").split()[:2]) or "?"

def _stat_card(label, value):
    return ft.Container(
        content=ft.Column([
            ft.Text(value, size=16, weight="bold", color="black"),
            ft.Text(label, size=11, color="grey700")
        ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=2),
        width=130,
        padding=10,
        border_radius=10,
        bgcolor="grey100"
    )

def profile_view(page: ft.Page, context, db, actor):
    """Profile tab: contact details plus password change for email/password accounts."""
    container = ft.Container(expand=True)

    def build():
        try:
            user = get_profile(db, actor.user_id)
        except BigBiteError as ex:
            show_message(page, ex.message, error=True)
            return ft.Column([section_header("Profile")])
        stats = get_profile_stats(db, user.id)

        name_field = _field("Full Name", user.full_name)
        email_field = _field("Email", user.email, disabled=True)
        phone_field = _field("Phone Number", user.phone_number)
        address_field = _field("Delivery Address", user.delivery_address)

        old_pass = _field("Current Password", password=True)
        new_pass = _field("New Password", password=True)
        confirm_pass = _field("Confirm New Password", password=True)
        pass_msg = ft.Text("", color="red", size=12)

        def handle_save(e):
            try:
                updated = update_profile(db, user.id, name_field.value, phone_field.value, address_field.value)
            except BigBiteError as ex:
                show_message(page, ex.message, error=True)
                return
            session_user = page.session.get("user") or {}
            session_user["full_name"] = updated.full_name
            page.session.set("user", session_user)
            show_message(page, "Profile updated successfully!")
            refresh()

        def handle_change_password(e):
            if not all([old_pass.value, new_pass.value, confirm_pass.value]):
                pass_msg.value = "All password fields are required."
                page.update()
                return
            if new_pass.value != confirm_pass.value:
                pass_msg.value = "New passwords do not match."
                page.update()
                return
            try:
                change_password(db, user.id, old_pass.value, new_pass.value)
            except BigBiteError as ex:
                pass_msg.value = ex.message
                page.update()
                return
            old_pass.value = new_pass.value = confirm_pass.value = ""
            pass_msg.value = ""
            show_message(page, "Password changed successfully!")

        password_section = ft.Column([
            ft.Divider(height=20, color="grey300"),
            ft.Text("Change Password", size=16, weight="bold", color="black"),
            old_pass,
            new_pass,
            confirm_pass,
            pass_msg,
            ft.ElevatedButton("Change Password", bgcolor=PRIMARY, color="white",
                              width=300, on_click=handle_change_password),
        ], spacing=10, horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            visible=user.auth_provider == "local")

        return ft.Column([
            section_header("Profile"),
            ft.Container(
                content=ft.Column([
                    ft.Container(
                        content=ft.Text(_initials(user.full_name), size=28, weight="bold", color="white"),
                        width=80,
                        height=80,
                        border_radius=40,
                        bgcolor=PRIMARY,
                        alignment=ft.alignment.center
                    ),
                    ft.Text(user.full_name, size=18, weight="bold", color="black"),
                    ft.Row([
                        _stat_card("Orders", str(stats["orders"])),
                        _stat_card("Spent", money(stats["spent"])),
                    ], alignment=ft.MainAxisAlignment.CENTER),
                    ft.Divider(height=20, color="grey300"),
                    name_field,
                    email_field,
                    phone_field,
                    address_field,
                    ft.ElevatedButton("Save", bgcolor=PRIMARY, color="white", width=300, on_click=handle_save),
                    password_section,
                ], spacing=10, horizontal_alignment=ft.CrossAxisAlignment.CENTER),
                padding=15
            )
        ], spacing=0, scroll=ft.ScrollMode.AUTO, expand=True)

    def refresh():
        container.content = build()
        page.update()

    container.content = build()
    return container
