import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/app.db")).resolve()
        self.app_base_url = os.getenv("APP_BASE_URL", "http://localhost:8000")
        self.login_url = os.getenv("LOGIN_URL", "/login")
        self.access_token_secret = os.getenv("ACCESS_TOKEN_SECRET", "change-me")
        self.access_token_exp_minutes = self._get_int("ACCESS_TOKEN_EXP_MINUTES", default=60 * 24)
        self.verification_token_ttl_hours = self._get_int("VERIFICATION_TOKEN_TTL_HOURS", default=0)
        self.notification_workers = self._get_int("NOTIFICATION_WORKERS", default=2)
        self.notification_max_attempts = self._get_int("NOTIFICATION_MAX_ATTEMPTS", default=3)
        self.notification_retry_delay_seconds = self._get_int(
            "NOTIFICATION_RETRY_DELAY_SECONDS", default=5
        )
        self.notification_queue_name = os.getenv("NOTIFICATION_QUEUE_NAME", "emails:verify-account")
        self.smtp_host = os.getenv("SMTP_HOST")
        self.smtp_port = self._get_int("SMTP_PORT", default=587)
        self.smtp_username = os.getenv("SMTP_USERNAME")
        self.smtp_password = os.getenv("SMTP_PASSWORD")
        self.smtp_from_email = os.getenv("SMTP_FROM_EMAIL")
        self.smtp_from_name = os.getenv("SMTP_FROM_NAME", "Account Verification")
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc
