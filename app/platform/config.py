from pathlib import Path
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Dvand Waitlist API"
    SERVICE_NAME: str = "Dvand Waitlist"
    DEBUG: bool = True

    # ── Features ────────────────────────────────
    FEATURE_EMAIL_NOTIFICATIONS: bool = True
    FEATURE_DUPLICATE_CHECKING: bool = True
    FEATURE_SPAM_PROTECTION: bool = True
    FEATURE_ANALYTICS: bool = True
    FEATURE_RATE_LIMITING: bool = True

    RATE_LIMIT_MAX_ATTEMPTS: int = 3
    RATE_LIMIT_WINDOW_SECONDS: int = 3600  # 1 hour

    # ── Google Sheets ───────────────────────────
    STORAGE_BACKEND: Literal["google_sheets", "memory"] = "google_sheets"
    SHEET_ID: str = "1oWrijV7VpsDb-4RGq-jWJIFESXYajqIJ3PjxFIPuP_0"
    SHEET_NAME: Optional[str] = None  # first worksheet when unset
    GOOGLE_SERVICE_ACCOUNT_FILE: str = "service_account.json"

    # ── Redis ───────────────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"
    FORCE_IN_MEMORY_CACHE: bool = False

    # ── Email Configuration ─────────────────────
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_USERNAME: str = "your-email-id"
    MAIL_PASSWORD: str = "your-password"
    MAIL_ENCRYPTION: str = "tls"
    MAIL_FROM_ADDRESS: str = "example@localhost"
    MAIL_FROM_NAME: str = "Dvand Waitlist"

    EMAIL_RELAY_URL: str = ""
    EMAIL_RELAY_API_KEY: str = ""
    EMAIL_RELAY_TIMEOUT: int = 30

    NOTIFICATION_EMAIL: Optional[str] = "aryan@dvand.in"

    # ── CORS ────────────────────────────────────
    PRODUCTION_MODE: bool = False
    ALLOWED_ORIGIN: str = "https://dvand.in"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def sheet_url(self) -> str:
        return f"https://docs.google.com/spreadsheets/d/{self.SHEET_ID}/edit"

    def get_allowed_origins(self) -> List[str]:
        """
        Static origin policy. Production mode pins a single origin but does
        not check who the caller actually is.
        """
        if not self.PRODUCTION_MODE:
            return ["*"]
        return [self.ALLOWED_ORIGIN]


settings = Settings()
