import threading
import flet as ft

from core.auth_service import is_valid_email, request_password_reset, reset_password, verify_reset_code
from ui.utils import close_dialog, show_message

LIGHT_GRAY = "#D9D9D9"
ORANGE = "#FF6B35"

GENERIC_SENT = "If an account with that email exists, we've sent a reset code."

def _field(label, password=False, **kwargs):
    return ft.TextField(
        label=label,
        label_style=ft.TextStyle(color="#000000"),
        color="#000000",
        password=password,
        can_reveal_password=password,
        width=300,
        border_radius=12,
        filled=True,
        bgcolor=LIGHT_GRAY,
        border_color="transparent",
        focused_border_color=ORANGE,
        text_size=14,
        **kwargs
    )

def _button(text, on_click):
    return ft.Container(
        content=ft.Text(text, size=15, weight="bold", color="white"),
        width=300,
        height=45,
        bgcolor="#FEB23F",
        border_radius=12,
        alignment=ft.alignment.center,
        on_click=on_click,
        ink=True
    )

def forgot_password_dialog(page: ft.Page, context, prefill_email: str = ""):
    """Three steps: email -> code -> new password."""
    state = {"email": ""}

    email_input = _field("Email Address", value=(prefill_email or "").strip())
    code_input = _field("6-digit code", max_length=6, keyboard_type=ft.KeyboardType.NUMBER)
    new_pass = _field("New Password", password=True)
    confirm_pass = _field("Confirm Password", password=True)

    step1_message = ft.Text("", size=12, text_align=ft.TextAlign.CENTER)
    step2_message = ft.Text("", size=12, text_align=ft.TextAlign.CENTER)
    step3_message = ft.Text("", size=12, text_align=ft.TextAlign.CENTER)

    def say(target, text, color="red"):
        target.value = text
        target.color = color
        page.update()

    def send_code_in_background(target, on_done=None):
        def worker():
            db = context.session()
            try:
                request_password_reset(db, context.mailer, state["email"])
            finally:
                db.close()
            say(target, GENERIC_SENT, "green")
            if on_done:
                on_done()
        threading.Thread(target=worker, daemon=True).start()

    def show_step(step):
        step1_container.visible = step == 1
        step2_container.visible = step == 2
        step3_container.visible = step == 3
        page.update()

    def send_code(e):
        value = (email_input.value or "").strip()
        if not value:
            say(step1_message, "Please enter your email")
            return
        if not is_valid_email(value):
            say(step1_message, "Please enter a valid email address")
            return
        state["email"] = value
        say(step1_message, "Sending code...", "blue")
        send_code_in_background(step2_message, on_done=lambda: show_step(2))

    def resend_code(e):
        say(step2_message, "Resending code...", "blue")
        send_code_in_background(step2_message)

    def verify_code(e):
        code = (code_input.value or "").strip()
        if len(code) != 6:
            say(step2_message, "Please enter the 6-digit code")
            return
        db = context.session()
        try:
            ok = verify_reset_code(db, state["email"], code)
        finally:
            db.close()
        if ok:
            show_step(3)
        else:
            say(step2_message, "Invalid or expired code")

    def submit_new_password(e):
        if not new_pass.value or not confirm_pass.value:
            say(step3_message, "All fields required")
            return
        if new_pass.value != confirm_pass.value:
            say(step3_message, "Passwords do not match")
            return
        db = context.session()
        try:
            ok, msg = reset_password(db, state["email"], code_input.value, new_pass.value)
        finally:
            db.close()
        if not ok:
            say(step3_message, msg)
            return
        close_dialog(page, dlg)
        show_message(page, "Password reset successful! Please log in.")

    step1_container = ft.Column([
        ft.Text("Forgot Password", size=18, weight="bold", color="black"),
        ft.Text("Enter your email and we'll send you a reset code.", size=12, color="grey700",
                text_align=ft.TextAlign.CENTER),
        email_input,
        _button("Send Reset Code", send_code),
        step1_message,
    ], spacing=10, horizontal_alignment=ft.CrossAxisAlignment.CENTER)

    step2_container = ft.Column([
        ft.Text("Enter Code", size=18, weight="bold", color="black"),
        code_input,
        _button("Verify", verify_code),
        ft.TextButton("Resend Code", on_click=resend_code),
        step2_message,
    ], spacing=10, horizontal_alignment=ft.CrossAxisAlignment.CENTER, visible=False)

    step3_container = ft.Column([
        ft.Text("New Password", size=18, weight="bold", color="black"),
        new_pass,
        confirm_pass,
        _button("Reset Password", submit_new_password),
        step3_message,
    ], spacing=10, horizontal_alignment=ft.CrossAxisAlignment.CENTER, visible=False)

    dlg = ft.AlertDialog(
        modal=True,
        bgcolor="white",
        content=ft.Container(
            alignment=ft.alignment.center,
            width=350,
            height=300,
            content=ft.Column([
                step1_container,
                step2_container,
                step3_container
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            padding=10
        ),
        actions=[
            ft.TextButton("Cancel", on_click=lambda e: close_dialog(page, dlg))
        ],
        actions_alignment=ft.MainAxisAlignment.END
    )
    page.open(dlg)
