# core/logger.py
import logging
from datetime import datetime
from sqlalchemy.orm import Session
from models.audit_log import AuditLog

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings):
    """Set up root logging once per process from Settings.log_level."""
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO), format=LOG_FORMAT)


def log_action(db: Session, user_email: str, action: str, commit: bool = True):
    """Record an admin or user action into the audit log."""
    try:
        db.add(AuditLog(user_email=user_email or "unknown", action=action, timestamp=datetime.now()))
        if commit:
            db.commit()
    except Exception:
        logger.exception("Audit log error")
        db.rollback()
