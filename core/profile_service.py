# core/profile_service.py
import logging
from sqlalchemy.orm import Session
from core.auth_service import MIN_PASSWORD_LENGTH, get_user_by_id, hash_password, verify_password
from core.errors import NotFoundError, ValidationError
from core.logger import log_action
from models.order import Order
from models.user import User

logger = logging.getLogger(__name__)


def get_profile(db: Session, user_id) -> User:
    """Fetch user record by ID."""
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_profile_stats(db: Session, user_id) -> dict:
    """Order count and amount spent; cancelled orders are not counted as spending."""
    orders = db.query(Order).filter(Order.user_id == user_id).all()
    return {
        "orders": len(orders),
        "spent": round(sum(o.total_price for o in orders if o.status != "cancelled"), 2),
    }


def update_profile(db: Session, user_id, full_name=None, phone_number=None, delivery_address=None) -> User:
    """
    Update basic profile info. A blank name keeps the current one; phone and
    address are saved trimmed (blank clears them). Email is not editable.
    """
    user = get_profile(db, user_id)

    if isinstance(full_name, str) and full_name.strip():
        user.full_name = full_name.strip()
    if isinstance(phone_number, str):
        user.phone_number = phone_number.strip()
    if isinstance(delivery_address, str):
        user.delivery_address = delivery_address.strip()

    db.commit()
    log_action(db, user.email, "Updated profile info")
    return user


def change_password(db: Session, user_id, old_password: str, new_password: str) -> User:
    """Change password after verifying the old one."""
    user = get_profile(db, user_id)
    if user.auth_provider != "local":
        raise ValidationError("Accounts that sign in with Google have no password to change")
    if not verify_password(old_password or "", user.password_hash):
        raise ValidationError("Incorrect current password")
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    user.password_hash = hash_password(new_password)
    db.commit()
    log_action(db, user.email, "Changed password")
    logger.info("Password changed for %s", user.email)
    return user
