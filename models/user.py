from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from core.db import Base
from core.access import ROLE_USER, ROLE_ADMIN

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, default=ROLE_USER)  # user | admin
    auth_provider = Column(String, default="local")  # local | google
    google_id = Column(String, unique=True, nullable=True)
    profile_picture = Column(String, nullable=True)
    # Saved checkout details
    phone_number = Column(String, default="")
    delivery_address = Column(String, default="")
    created_at = Column(DateTime, default=datetime.now)

    # Relationships
    orders = relationship("Order", back_populates="user")
    cart_items = relationship("Cart", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
