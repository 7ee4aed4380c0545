# Import every model so SQLAlchemy relationships resolve and create_all sees all tables
from models.user import User
from models.food_item import FoodItem
from models.order import Order, OrderItem
from models.cart import Cart
from models.audit_log import AuditLog
from models.password_reset import PasswordReset

__all__ = ["User", "FoodItem", "Order", "OrderItem", "Cart", "AuditLog", "PasswordReset"]
