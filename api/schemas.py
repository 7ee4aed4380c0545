"""
Request/response bodies for the REST API.

Field names are snake_case in Python and camelCase on the wire
(deliveryAddress, totalPrice, allowedNext...).
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- Orders ---

class OrderItemIn(CamelModel):
    food_id: int
    quantity: Optional[int] = Field(None, description="Defaults to 1 when missing or not positive")


class OrderCreate(CamelModel):
    # Presence/blankness is checked by the order service so the messages stay in one place
    items: List[OrderItemIn] = Field(default_factory=list)
    delivery_address: Optional[str] = None
    phone_number: Optional[str] = None
    recipient_name: Optional[str] = None


class StatusUpdate(CamelModel):
    status: str = Field(..., description="pending | preparing | delivering | completed | cancelled")


class UserBrief(CamelModel):
    id: int
    full_name: str
    email: str


class OrderItemOut(CamelModel):
    food_id: int
    name: str
    unit_price: float
    quantity: int
    subtotal: float


class OrderOut(CamelModel):
    id: int
    user_id: int
    user: Optional[UserBrief] = None
    items: List[OrderItemOut]
    total_price: float
    status: str
    allowed_next: List[str]
    delivery_address: str
    phone_number: str
    recipient_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# --- Foods ---

class FoodCreate(CamelModel):
    name: str
    price: float
    category: str = ""
    description: str = ""
    image: Optional[str] = None
    available: bool = True


class FoodUpdate(CamelModel):
    name: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    available: Optional[bool] = None


class FoodOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = ""
    category: Optional[str] = ""
    display_category: str
    price: float
    available: bool
    image: Optional[str] = None


# --- Users ---

class ProfileOut(CamelModel):
    id: int
    full_name: str
    email: str
    phone_number: Optional[str] = ""
    delivery_address: Optional[str] = ""
    role: str
    auth_provider: str


class ProfileUpdate(CamelModel):
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    delivery_address: Optional[str] = None


class PasswordChange(CamelModel):
    current_password: str
    new_password: str


class ForgotPassword(CamelModel):
    email: Optional[str] = None


class ResetPasswordIn(CamelModel):
    email: str
    code: str
    password: str
