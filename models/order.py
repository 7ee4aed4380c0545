# models/order.py
from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from core.db import Base
from core.order_status import OrderStatus, allowed_next as _allowed_next


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    total_price = Column(Float, nullable=False)
    status = Column(String, default=OrderStatus.PENDING.value, nullable=False, index=True)
    delivery_address = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    recipient_name = Column(String, nullable=True)
    # Local time: analytics buckets by the server's calendar day
    created_at = Column(DateTime, default=datetime.now, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    # Relationships
    user = relationship("User", back_populates="orders", lazy="joined")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="selectin",
    )

    @property
    def order_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def allowed_next(self):
        return [s.value for s in _allowed_next(self.status)]

    def __repr__(self):
        return f"<Order #{self.id} {self.status} {self.total_price:.2f}>"


class OrderItem(Base):
    """Snapshot of a food line at checkout time; never follows later catalog edits."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    # No FK: the food may be deleted later and the order must survive it
    food_id = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    unit_price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Float, nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
