# core/user_service.py
import logging
from sqlalchemy.orm import Session
from models.user import User
from core.access import ROLE_ADMIN
from core.auth_service import hash_password, get_user_by_email, normalize_email

logger = logging.getLogger(__name__)

def create_default_admin(db: Session, settings):
    """Make sure the admin account from Settings exists."""
    existing = get_user_by_email(db, settings.admin_email)
    if existing:
        logger.info("Admin already exists.")
        return existing
    admin = User(
        full_name="Admin User",
        email=normalize_email(settings.admin_email),
        password_hash=hash_password(settings.admin_password),
        role=ROLE_ADMIN
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Default admin created: %s", admin.email)
    return admin

def promote_to_admin(db: Session, email: str, password: str = None, default_password: str = "admin123"):
    """
    Promote an existing user to admin, or create the admin account.
    Returns (user, created: bool)
    """
    user = get_user_by_email(db, email)
    if user:
        user.role = ROLE_ADMIN
        db.commit()
        logger.info("User %s has been promoted to admin", user.email)
        return user, False

    user = User(
        full_name="Admin User",
        email=normalize_email(email),
        password_hash=hash_password(password or default_password),
        role=ROLE_ADMIN
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Admin user created with email %s", user.email)
    return user, True
