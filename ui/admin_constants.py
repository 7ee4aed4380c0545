"""
Shared constants for admin panel and order screens
"""
from core.order_status import OrderStatus

# ===== RESPONSIVE LAYOUT CONSTANTS =====
BREAKPOINT = 800  # Mobile vs Desktop threshold (px)

# Grid settings for desktop
DESKTOP_COLUMNS = 3

# Grid spacing
GRID_SPACING = 10
GRID_RUN_SPACING = 10

# Suggested food categories (free text is still allowed)
CATEGORIES = ["Pizza", "Burgers", "Sandwiches", "Pasta", "Salads", "Desserts", "Drinks"]

# Brand colors
PRIMARY = "#E9190A"
ACCENT = "#FEB23F"
BACKGROUND_GRADIENT = ["#FFF6F6", "#F7C171", "#D49535"]

# Badge colors per order status
STATUS_COLORS = {
    OrderStatus.PENDING.value: "orange",
    OrderStatus.PREPARING.value: "blue",
    OrderStatus.DELIVERING.value: "purple",
    OrderStatus.COMPLETED.value: "green",
    OrderStatus.CANCELLED.value: "red",
}

# Button text for moving an order to each status
ACTION_LABELS = {
    OrderStatus.PREPARING.value: "Start preparing",
    OrderStatus.DELIVERING.value: "Out for delivery",
    OrderStatus.COMPLETED.value: "Delivered",
    OrderStatus.CANCELLED.value: "Cancel",
}

# Seconds between analytics auto-refreshes
ANALYTICS_REFRESH_SECONDS = 30
