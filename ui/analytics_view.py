import logging
import threading
import flet as ft
from flet.plotly_chart import PlotlyChart
import plotly.graph_objects as go
from core.analytics_service import DEFAULT_WINDOW_DAYS, get_best_selling_items, get_overview
from core.order_status import OrderStatus
from ui.admin_constants import ACCENT, ANALYTICS_REFRESH_SECONDS, BREAKPOINT, STATUS_COLORS
from ui.utils import current_actor, money, show_message

logger = logging.getLogger(__name__)

WINDOW_CHOICES = (7, 14, 30)

def analytics_view(page: ft.Page, context):
    page.title = f"Analytics Dashboard - {context.settings.app_name}"

    actor = current_actor(page)
    if not actor or not actor.is_admin:
        show_message(page, "Access denied. Admins only.", error=True)
        page.go("/home" if actor else "/login")
        return

    current_width = page.window.width or 400
    is_desktop = current_width >= BREAKPOINT
    container_width = current_width if is_desktop else 400
    container_height = page.window.height or 700

    # Background loader/refresher checks this before touching the page
    is_active = {"value": True}
    window = {"days": DEFAULT_WINDOW_DAYS}
    stop_event = threading.Event()

    def handle_back(e):
        is_active["value"] = False
        stop_event.set()
        page.go("/admin")

    def header():
        return ft.Column([
            ft.Container(
                content=ft.Row([
                    ft.IconButton(
                        icon=ft.Icons.ARROW_BACK,
                        tooltip="Back to Admin",
                        on_click=handle_back,
                        icon_color="black"
                    ),
                    ft.Text("Analytics Dashboard", size=20, weight="bold", color="black", expand=True),
                    window_dropdown,
                    ft.IconButton(icon=ft.Icons.REFRESH, icon_color="black", tooltip="Refresh",
                                  on_click=lambda e: start_load()),
                ], alignment=ft.MainAxisAlignment.START),
                padding=ft.padding.only(left=5, right=15, top=10, bottom=8)
            ),
            ft.Divider(height=1, color="grey300", thickness=1)
        ], spacing=0)

    def on_window_change(e):
        window["days"] = int(window_dropdown.value)
        start_load()

    window_dropdown = ft.Dropdown(
        value=str(DEFAULT_WINDOW_DAYS),
        width=120,
        dense=True,
        options=[ft.dropdown.Option(str(d), f"{d} days") for d in WINDOW_CHOICES],
        on_change=on_window_change,
        bgcolor="white",
        color="black"
    )

    def loading_body(text="Loading analytics..."):
        return ft.Container(
            content=ft.Column([
                ft.ProgressRing(width=50, height=50, stroke_width=4, color=ACCENT),
                ft.Text(text, size=14, color="grey700")
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            alignment=ft.MainAxisAlignment.CENTER,
            spacing=20
            ),
            expand=True,
            alignment=ft.alignment.center
        )

    body = ft.Container(content=loading_body(), expand=True, padding=0)
    main_container = ft.Container(
        content=ft.Column([header(), body], expand=True, spacing=0),
        width=container_width,
        height=container_height,
        padding=0
    )

    page.clean()
    page.add(main_container)
    page.update()

    # --- CHART BUILDERS ---
    def kpi_card(title, value, icon, color):
        return ft.Container(
            content=ft.Column([
                ft.Row([ft.Icon(icon, color=color, size=18), ft.Text(title, size=11, color="grey700")], spacing=6),
                ft.Text(value, size=18, weight="bold", color="black"),
            ], spacing=4),
            bgcolor="white",
            border=ft.border.all(1, "grey300"),
            border_radius=8,
            padding=12,
            width=170 if is_desktop else 175
        )

    def empty_chart(text):
        return ft.Container(
            content=ft.Text(text, size=14, color="grey"),
            alignment=ft.alignment.center,
            padding=30
        )

    def create_daily_chart(series):
        if not any(b["orders"] or b["revenue"] for b in series):
            return empty_chart("No orders in this window")

        labels = [f"{b['date']} {b['day'][5:]}" for b in series]
        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=labels,
            y=[b["orders"] for b in series],
            name="Orders",
            marker=dict(color=ACCENT),
            yaxis="y"
        ))
        fig.add_trace(go.Scatter(
            x=labels,
            y=[b["revenue"] for b in series],
            mode="lines+markers",
            name="Revenue",
            line=dict(color="#2196F3", width=2),
            marker=dict(size=6),
            yaxis="y2"
        ))
        fig.update_layout(
            title=dict(text=f"Orders & Revenue (last {len(series)} days)", font=dict(size=14)),
            yaxis=dict(title="Orders", rangemode="tozero"),
            yaxis2=dict(title="Revenue (NT$)", overlaying="y", side="right", rangemode="tozero"),
            hovermode="x unified",
            height=350 if is_desktop else 260,
            margin=dict(l=40, r=50, t=40, b=40),
            legend=dict(orientation="h", y=-0.2),
            font=dict(size=10)
        )
        return PlotlyChart(fig, expand=True)

    def create_status_chart(status_counts):
        statuses = [s.value for s in OrderStatus if status_counts.get(s.value)]
        if not statuses:
            return empty_chart("No orders yet")
        fig = go.Figure(go.Pie(
            labels=[OrderStatus(s).label for s in statuses],
            values=[status_counts[s] for s in statuses],
            marker=dict(colors=[STATUS_COLORS[s] for s in statuses]),
            hole=0.4
        ))
        fig.update_layout(
            title=dict(text="Orders by Status", font=dict(size=14)),
            height=320 if is_desktop else 280,
            margin=dict(l=20, r=20, t=40, b=20),
            font=dict(size=10)
        )
        return PlotlyChart(fig, expand=True)

    def create_best_sellers_chart(items):
        if not items:
            return empty_chart("No completed sales yet")
        # Largest bar on top
        items = list(reversed(items))
        quantities = [item["quantity"] for item in items]
        fig = go.Figure(go.Bar(
            x=quantities,
            y=[item["name"][:20] for item in items],
            orientation="h",
            marker=dict(color=quantities, colorscale="Viridis", showscale=False),
            text=quantities,
            textposition="auto",
        ))
        fig.update_layout(
            title=dict(text="Top Sellers", font=dict(size=14)),
            xaxis_title="Qty Sold",
            height=320 if is_desktop else 280,
            margin=dict(l=120, r=20, t=40, b=40),
            font=dict(size=10)
        )
        return PlotlyChart(fig, expand=True)

    def panel(content):
        return ft.Container(
            content=content,
            border=ft.border.all(1, "grey300"),
            border_radius=8,
            padding=12,
            bgcolor="white",
            margin=ft.margin.symmetric(horizontal=20 if is_desktop else 10, vertical=6),
            expand=1 if is_desktop else None
        )

    def render(overview, best_sellers):
        kpis = overview["kpis"]
        cards = ft.Row([
            kpi_card("Revenue (window)", money(kpis["totalRevenue"]), ft.Icons.PAYMENTS, "green"),
            kpi_card("Revenue today", money(kpis["revenueToday"]), ft.Icons.TODAY, "green"),
            kpi_card("Orders (window)", str(kpis["totalOrders"]), ft.Icons.RECEIPT_LONG, "blue"),
            kpi_card("Orders today", str(kpis["ordersToday"]), ft.Icons.SHOPPING_BAG, "blue"),
            kpi_card("Completed", str(kpis["completedOrders"]), ft.Icons.CHECK_CIRCLE, "green"),
            kpi_card("Pending", str(kpis["pendingOrders"]), ft.Icons.HOURGLASS_TOP, "orange"),
            kpi_card("Cancelled", str(kpis["cancelledOrders"]), ft.Icons.CANCEL, "red"),
        ], wrap=True, spacing=8, run_spacing=8)

        status_panel = panel(create_status_chart(overview["statusCounts"]))
        sellers_panel = panel(create_best_sellers_chart(best_sellers))
        lower = ft.Row([status_panel, sellers_panel], spacing=0) if is_desktop else ft.Column(
            [status_panel, sellers_panel], spacing=0)

        body.content = ft.Column([
            ft.Container(content=cards, padding=ft.padding.symmetric(horizontal=20 if is_desktop else 10, vertical=12)),
            panel(create_daily_chart(overview["dailySeries"])),
            lower,
            ft.Container(height=20)
        ], spacing=0, scroll=ft.ScrollMode.AUTO)

    def render_error(text):
        body.content = ft.Container(
            content=ft.Column([
                ft.Icon(ft.Icons.ERROR_OUTLINE, size=60, color="red"),
                ft.Text(f"Error loading analytics: {text}", size=14, color="red", text_align=ft.TextAlign.CENTER),
                ft.ElevatedButton("Try Again", on_click=lambda e: start_load(), bgcolor=ACCENT, color="white")
            ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=20),
            expand=True, alignment=ft.alignment.center, padding=20
        )

    # --- BACKGROUND LOADING ---
    load_lock = threading.Lock()

    def load_analytics():
        if not load_lock.acquire(blocking=False):
            return
        db = context.session()
        try:
            overview = get_overview(db, actor, days=window["days"])
            best_sellers = get_best_selling_items(db, actor, limit=8)
            if not is_active["value"]:
                return
            render(overview, best_sellers)
        except Exception as ex:
            logger.exception("Analytics loading failed")
            if not is_active["value"]:
                return
            render_error(str(ex))
        finally:
            db.close()
            load_lock.release()
        page.update()

    def start_load():
        threading.Thread(target=load_analytics, daemon=True).start()

    def auto_refresh():
        while not stop_event.wait(ANALYTICS_REFRESH_SECONDS):
            if not is_active["value"]:
                break
            load_analytics()
        logger.debug("Analytics auto-refresh stopped")

    start_load()
    threading.Thread(target=auto_refresh, daemon=True).start()
