# core/config.py
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from dotenv import load_dotenv


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and passed around explicitly."""

    database_url: str = "sqlite:///bigbite.db"
    app_name: str = "Big-Bite"

    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_email: Optional[str] = None
    smtp_password: Optional[str] = None
    email_from: Optional[str] = None

    admin_email: str = "admin@bigbite.com"
    admin_password: str = "admin123"

    google_client_secrets_file: str = "credentials.json"
    google_token_file: str = "token.json"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))

    tracker_poll_seconds: int = 12
    log_level: str = "INFO"

    @property
    def email_configured(self) -> bool:
        return bool(self.smtp_email and self.smtp_password)

    @property
    def sender_address(self) -> Optional[str]:
        return self.email_from or self.smtp_email


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read a .env file (if any) plus the process environment into a Settings."""
    load_dotenv(env_file)

    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///bigbite.db"),
        app_name=os.getenv("APP_NAME", "Big-Bite"),
        smtp_server=os.getenv("SMTP_SERVER", "smtp.gmail.com"),
        smtp_port=_env_int("SMTP_PORT", 587),
        smtp_email=os.getenv("SMTP_EMAIL") or None,
        smtp_password=os.getenv("SMTP_PASSWORD") or None,
        email_from=os.getenv("EMAIL_FROM") or None,
        admin_email=os.getenv("ADMIN_EMAIL", "admin@bigbite.com"),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        google_client_secrets_file=os.getenv("GOOGLE_CLIENT_SECRETS_FILE", "credentials.json"),
        google_token_file=os.getenv("GOOGLE_TOKEN_FILE", "token.json"),
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=_env_int("API_PORT", 8000),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        # Clamp so a bad value can't spin the tracker thread
        tracker_poll_seconds=max(1, _env_int("TRACKER_POLL_SECONDS", 12)),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
