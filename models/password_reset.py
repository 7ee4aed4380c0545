# models/password_reset.py
from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timedelta
from core.db import Base

class PasswordReset(Base):
    """One outstanding emailed reset code; only its SHA-256 digest is stored."""

    __tablename__ = "password_resets"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    code_hash = Column(String, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    @staticmethod
    def generate_expiry(minutes: int = 10, now: datetime = None):
        return (now or datetime.now()) + timedelta(minutes=minutes)

    def is_expired(self, now: datetime = None) -> bool:
        return (now or datetime.now()) >= self.expires_at
