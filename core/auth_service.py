# core/auth_service.py
import bcrypt, time
import hashlib
import logging
import re
import secrets
from datetime import datetime
from sqlalchemy.orm import Session
from models.password_reset import PasswordReset
from models.user import User
from core.access import ROLE_USER
from core.logger import log_action

logger = logging.getLogger(__name__)

# in-memory failed-login counters for the desktop client
_failed_attempts = {}

LOCKOUT_THRESHOLD = 3        # attempts
LOCKOUT_TIME = 60            # seconds
RESET_CODE_MINUTES = 10
MIN_PASSWORD_LENGTH = 6

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def is_valid_email(email_str: str) -> bool:
    """Check if email format is valid"""
    return re.match(EMAIL_PATTERN, (email_str or "").strip()) is not None

def get_user_by_id(db: Session, user_id):
    """Fetch user record by ID."""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == normalize_email(email)).first()

def create_user_from_google(db: Session, email: str, full_name: str, picture: str = None, google_id: str = None):
    """
    Create or get user from Google OAuth
    If user exists, return it. If not, create new user.
    """
    existing_user = get_user_by_email(db, email)
    if existing_user:
        logger.info("Google user %s already exists - logging in", existing_user.email)
        if google_id and not existing_user.google_id:
            existing_user.google_id = google_id
            db.commit()
        return existing_user

    # Random password: they'll use Google login
    new_user = User(
        email=normalize_email(email),
        password_hash=hash_password(secrets.token_urlsafe(32)),
        full_name=full_name or email,
        role=ROLE_USER,
        auth_provider="google",
        google_id=google_id,
        profile_picture=picture,
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("Created new Google user %s", new_user.email)
    return new_user

def create_user(db: Session, full_name, email, password, phone_number="", delivery_address="", role=ROLE_USER):
    """Register a local account; returns None if the email is taken."""
    if get_user_by_email(db, email):
        return None
    user = User(full_name=full_name.strip(), email=normalize_email(email),
                phone_number=(phone_number or "").strip(),
                delivery_address=(delivery_address or "").strip(),
                password_hash=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def authenticate_user(db: Session, email, password):
    """Return (user, message). message is helpful for UI."""
    email = normalize_email(email)
    now = time.time()
    info = _failed_attempts.get(email)
    if info and now - info["last"] >= LOCKOUT_TIME:
        # Lockout window is over: start counting from zero again
        _failed_attempts.pop(email, None)
        info = None
    if info and info["count"] >= LOCKOUT_THRESHOLD:
        wait = LOCKOUT_TIME - int(now - info["last"])
        return None, f"Account locked. Try again in {wait}s."

    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        count = info["count"] + 1 if info else 1
        _failed_attempts[email] = {"count": count, "last": now}
        logger.warning("Failed login for %s (%d)", email, count)
        remaining = max(0, LOCKOUT_THRESHOLD - count)
        if remaining == 0:
            return None, "Account locked due to too many failed attempts."
        return None, f"Invalid credentials. {remaining} attempts left."
    # success
    _failed_attempts.pop(email, None)
    return user, "Login successful."

def update_contact_details(db: Session, user_id, phone_number: str, delivery_address: str):
    """Remember the phone/address last used at checkout."""
    user = get_user_by_id(db, user_id)
    if not user:
        return False
    user.phone_number = (phone_number or "").strip()
    user.delivery_address = (delivery_address or "").strip()
    db.commit()
    return True

# ===== PASSWORD RESET =====

def generate_reset_code() -> str:
    """6-digit code mailed to the user"""
    return f"{secrets.randbelow(1000000):06d}"

def _hash_code(code: str) -> str:
    return hashlib.sha256((code or "").strip().encode("utf-8")).hexdigest()

def create_reset_code(db: Session, email: str, now: datetime = None):
    """
    Store a fresh reset code for a local (email/password) account.
    Returns (user, code), or (None, None) when there is no such account;
    callers show the same message either way.
    """
    user = get_user_by_email(db, email)
    if not user or user.auth_provider != "local":
        logger.info("Password reset requested for unknown or non-local account %s", normalize_email(email))
        return None, None

    code = generate_reset_code()
    # Only the newest code is valid
    db.query(PasswordReset).filter(PasswordReset.email == user.email).delete()
    db.add(PasswordReset(
        email=user.email,
        code_hash=_hash_code(code),
        expires_at=PasswordReset.generate_expiry(RESET_CODE_MINUTES, now),
        created_at=now or datetime.now(),
    ))
    db.commit()
    logger.info("Password reset code issued for %s", user.email)
    return user, code

def request_password_reset(db: Session, mailer, email: str, now: datetime = None) -> bool:
    """Issue a code and email it. True only if an email actually went out."""
    user, code = create_reset_code(db, email, now)
    if not user:
        return False
    return mailer.send_password_reset(user.email, code, user.full_name)

def _find_reset(db: Session, email: str, code: str, now: datetime = None):
    record = (
        db.query(PasswordReset)
        .filter(PasswordReset.email == normalize_email(email), PasswordReset.code_hash == _hash_code(code))
        .first()
    )
    if not record:
        return None
    if record.is_expired(now):
        db.delete(record)
        db.commit()
        return None
    return record

def verify_reset_code(db: Session, email: str, code: str, now: datetime = None) -> bool:
    """Check a code without using it up (the dialog's verify step)."""
    return _find_reset(db, email, code, now) is not None

def reset_password(db: Session, email: str, code: str, new_password: str, now: datetime = None):
    """Return (ok, message). A used code is deleted; the login lockout is cleared."""
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    record = _find_reset(db, email, code, now)
    user = get_user_by_email(db, email) if record else None
    if not user:
        return False, "Invalid or expired reset code. Please request a new one."

    user.password_hash = hash_password(new_password)
    db.query(PasswordReset).filter(PasswordReset.email == user.email).delete()
    db.commit()
    _failed_attempts.pop(user.email, None)
    log_action(db, user.email, "Reset password with emailed code")
    logger.info("Password reset for %s", user.email)
    return True, "Password has been reset. You can now log in with your new password."
