# core/context.py
from dataclasses import dataclass
from core.config import Settings
from core.db import create_session_factory
from core.email_service import EmailSender


@dataclass
class AppContext:
    """Everything an entry point wires up once and hands to views/routes."""

    settings: Settings
    session_factory: object
    mailer: EmailSender

    @classmethod
    def from_settings(cls, settings: Settings, session_factory=None):
        return cls(
            settings=settings,
            session_factory=session_factory or create_session_factory(settings.database_url),
            mailer=EmailSender(settings),
        )

    def session(self):
        return self.session_factory()
