# models/food_item.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime
from datetime import datetime
from core.db import Base


def normalize_category(value) -> str:
    """Display form of a free-text category: trimmed, first letter upper, rest lower."""
    text = str(value).strip() if value is not None else ""
    if not text:
        return "Uncategorized"
    return text[:1].upper() + text[1:].lower()


class FoodItem(Base):
    __tablename__ = "food_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, default="")
    category = Column(String, default="")  # Pizza, Burgers, Drinks...
    price = Column(Float, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    image = Column(String, nullable=True)  # store path or URL of image
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def display_category(self) -> str:
        return normalize_category(self.category)

    def __repr__(self):
        return f"<FoodItem {self.id} {self.name!r} {self.price:.2f}>"
