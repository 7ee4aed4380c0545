import logging
import flet as ft

from core.config import load_settings
from core.context import AppContext
from core.google_auth import revoke_google_auth
from core.logger import configure_logging
from core.user_service import create_default_admin

from ui.login_view import login_view
from ui.home_view import home_view
from ui.admin_view import admin_view
from ui.analytics_view import analytics_view
from ui.utils import show_message

logger = logging.getLogger(__name__)

PUBLIC_ROUTES = ["/", "/login", "/logout"]

def build_main(context: AppContext):
    """flet target bound to one AppContext (settings, sessions, mailer)."""

    def main(page: ft.Page):
        page.window.width = 400
        page.window.height = 700
        page.padding = 0
        page.spacing = 0

        page.title = context.settings.app_name
        page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        page.vertical_alignment = ft.MainAxisAlignment.START

        if not page.session.contains_key("user"):
            page.session.set("user", None)

        def route_change(e):
            page.clean()
            current_user = page.session.get("user")

            if page.route not in PUBLIC_ROUTES and not current_user:
                show_message(page, "Please log in to continue.", error=True)
                page.go("/login")
                return

            if page.route == "/logout":
                if current_user:
                    logger.info("%s signed out", current_user.get("email"))
                revoke_google_auth(context.settings)
                page.session.set("user", None)
                show_message(page, "You have been logged out.")
                page.go("/login")
                return

            if page.route in ("/", "/login"):
                login_view(page, context)
            elif page.route == "/home":
                home_view(page, context)
            elif page.route == "/admin":
                admin_view(page, context)
            elif page.route == "/analytics":
                analytics_view(page, context)
            else:
                page.go("/login")

        page.on_route_change = route_change
        page.go("/login")

    return main

def bootstrap(settings=None) -> AppContext:
    settings = settings or load_settings()
    configure_logging(settings)
    context = AppContext.from_settings(settings)
    db = context.session()
    try:
        create_default_admin(db, settings)
    finally:
        db.close()
    return context

if __name__ == "__main__":
    ft.app(target=build_main(bootstrap()))
