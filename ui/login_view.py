import logging
import threading
import flet as ft

from core.auth_service import authenticate_user, create_user, create_user_from_google, is_valid_email
from core.google_auth import get_google_user_info
from ui.reset_password_view import forgot_password_dialog
from ui.utils import show_message

logger = logging.getLogger(__name__)

# ===== BRAND COLORS =====
ORANGE = "#FF6B35"
LIGHT_GRAY = "#D9D9D9"
DARK_GRAY = "#cdbcbc"
WHITE = "#FFFFFF"
MOBILE_WIDTH = 350

def _field(label, icon, password=False, **kwargs):
    return ft.TextField(
        label=label,
        label_style=ft.TextStyle(color="#000000"),
        color="#000000",
        password=password,
        can_reveal_password=password,
        width=MOBILE_WIDTH,
        border_radius=12,
        filled=True,
        bgcolor=LIGHT_GRAY,
        border_color="transparent",
        focused_border_color=ORANGE,
        prefix_icon=icon,
        text_size=14,
        height=55,
        **kwargs
    )

def login_view(page: ft.Page, context):
    page.title = f"Login - {context.settings.app_name}"
    db = context.session()
    mode = {"register": False}

    # ===== INPUT FIELDS =====
    full_name = _field("Full Name", ft.Icons.PERSON_OUTLINE)
    email = _field("Email Address", ft.Icons.EMAIL_OUTLINED)
    password = _field("Password", ft.Icons.LOCK_OUTLINE, password=True)
    phone = _field("Phone Number (optional)", ft.Icons.PHONE_OUTLINED, keyboard_type=ft.KeyboardType.PHONE)

    message = ft.Text(value="", color="red", size=12, text_align=ft.TextAlign.CENTER)

    def set_message(text, color="red"):
        message.value = text
        message.color = color
        page.update()

    def complete_login(user):
        page.session.set("user", {
            "id": user.id,
            "email": user.email,
            "full_name": user.full_name,
            "role": user.role
        })
        logger.info("%s signed in", user.email)
        db.close()
        show_message(page, f"Welcome, {user.full_name}!")
        page.go("/admin" if user.is_admin else "/home")

    def handle_login(e):
        email_val = email.value.strip()
        pwd_val = password.value.strip()
        if not email_val or not pwd_val:
            set_message("Please enter email and password")
            return
        user, status = authenticate_user(db, email_val, pwd_val)
        if not user:
            set_message(status)
            return
        complete_login(user)

    def handle_register(e):
        name_val = full_name.value.strip()
        email_val = email.value.strip()
        pwd_val = password.value.strip()
        if not name_val or not email_val or not pwd_val:
            set_message("Name, email and password are required")
            return
        if not is_valid_email(email_val):
            set_message("Please enter a valid email address")
            return
        if len(pwd_val) < 6:
            set_message("Password too short (min 6 characters)")
            return
        user = create_user(db, name_val, email_val, pwd_val, phone_number=phone.value)
        if not user:
            set_message("An account with this email already exists")
            return
        complete_login(user)

    def handle_google_login(e):
        set_message("Opening Google Sign-In...", "blue")
        google_btn.disabled = True
        page.update()

        def google_auth_thread():
            user_info = get_google_user_info(context.settings, force_new_login=True)
            if not user_info or not user_info.get("email"):
                google_btn.disabled = False
                set_message("Google Sign-In failed or was cancelled")
                return
            user = create_user_from_google(
                db,
                email=user_info["email"],
                full_name=user_info.get("name", "Google User"),
                picture=user_info.get("picture"),
                google_id=user_info.get("google_id")
            )
            complete_login(user)

        threading.Thread(target=google_auth_thread, daemon=True).start()

    def toggle_mode(e):
        mode["register"] = not mode["register"]
        message.value = ""
        show_form()

    # ===== UI COMPONENTS =====
    def primary_button(text, on_click):
        return ft.Container(
            content=ft.Text(text, size=18, weight="bold", color=WHITE),
            width=MOBILE_WIDTH,
            height=50,
            bgcolor="#FEB23F",
            border_radius=12,
            alignment=ft.alignment.center,
            on_click=on_click,
            ink=True,
            animate=ft.Animation(200, "easeOut")
        )

    divider_row = ft.Row([
        ft.Container(expand=True, height=1, bgcolor="#E0E0E0"),
        ft.Text("OR", size=12, color=DARK_GRAY, weight="bold"),
        ft.Container(expand=True, height=1, bgcolor="#E0E0E0"),
    ], spacing=10, width=MOBILE_WIDTH)
    google_btn = ft.Container(
        content=ft.Row([
            ft.Image(
                src="https://www.gstatic.com/firebasejs/ui/2.0.0/images/auth/google.svg",
                width=24,
                height=24
            ),
            ft.Text("Continue with Google", size=14, color="#000000", weight="w500")
        ], spacing=10, alignment=ft.MainAxisAlignment.CENTER),
        width=MOBILE_WIDTH,
        height=50,
        bgcolor=LIGHT_GRAY,
        border=ft.border.all(1, "#E0E0E0"),
        border_radius=12,
        on_click=handle_google_login,
        ink=True,
        animate=ft.Animation(200, "easeOut")
    )

    forgot_pass_btn = ft.Container(
        content=ft.Text("Forgot Password?", size=12, color=ORANGE, weight="bold"),
        on_click=lambda e: forgot_password_dialog(page, context, email.value),
        ink=True,
        padding=ft.padding.only(top=6)
    )

    def show_form():
        registering = mode["register"]
        fields = [full_name, email, password, phone] if registering else [email, password]
        switch_row = ft.Row([
            ft.Text("Already have an account?" if registering else "Don't have an account?", size=13, color=DARK_GRAY),
            ft.Container(
                content=ft.Text("Sign In" if registering else "Sign Up", size=13, color=ORANGE, weight="bold"),
                on_click=toggle_mode,
                ink=True
            )
        ], spacing=5, alignment=ft.MainAxisAlignment.CENTER)

        page.clean()
        page.add(
            ft.Container(
                content=ft.Column([
                    ft.Container(height=8),
                    ft.Text("Create your account" if registering else "Welcome back!!!",
                            size=22, weight="bold", color="#000000"),
                    ft.Text(f"{'Join' if registering else 'Sign in to'} {context.settings.app_name}",
                            size=12, color=DARK_GRAY),
                    ft.Container(height=6),
                    ft.Icon(ft.Icons.LUNCH_DINING, size=64, color=ORANGE),
                    ft.Container(height=20),
                    ft.Column(fields, spacing=8, horizontal_alignment=ft.CrossAxisAlignment.CENTER),
                    ft.Container(height=4 if registering else 0),
                    ft.Container(
                        content=forgot_pass_btn,
                        width=MOBILE_WIDTH,
                        alignment=ft.alignment.center_right,
                        visible=not registering
                    ),
                    ft.Container(height=16),
                    primary_button("Sign Up" if registering else "Sign In",
                                   handle_register if registering else handle_login),
                    ft.Container(height=4),
                    message,
                    ft.Container(height=10),
                    divider_row,
                    ft.Container(height=20),
                    google_btn,
                    ft.Container(height=8),
                    switch_row,
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                scroll=ft.ScrollMode.AUTO,
                spacing=0
                ),
                width=400,
                expand=True,
                padding=ft.padding.symmetric(horizontal=25),
                bgcolor=WHITE,
                alignment=ft.alignment.center
            )
        )
        page.update()

    show_form()
