from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from core.db import Base

class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_email = Column(String, nullable=False)
    action = Column(String, nullable=False)
    timestamp = Column(DateTime, default=datetime.now, index=True)

    def __repr__(self):
        return f"<AuditLog {self.user_email}: {self.action}>"
