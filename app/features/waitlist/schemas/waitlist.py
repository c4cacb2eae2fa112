from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.platform.config import Settings
from app.platform.policy import FailurePolicy
from app.platform.schemas import APIResponse


class WaitlistIn(BaseModel):
    """Form submission. Field names follow the browser client's camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    source: Optional[str] = None
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    referrer: Optional[str] = None
    screen_resolution: Optional[str] = Field(default=None, alias="screenResolution")
    timezone: Optional[str] = None


class WaitlistOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    signup_number: int = Field(alias="signupNumber")


class LastSignup(BaseModel):
    timestamp: str
    email: str


class WaitlistStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_signups: int = Field(alias="totalSignups")
    today_signups: int = Field(alias="todaySignups")
    last_signup: Optional[LastSignup] = Field(default=None, alias="lastSignup")


class WaitlistExport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    csv: str
    total_records: int = Field(alias="totalRecords")


class WaitListResponse(APIResponse[WaitlistOut]):
    pass


class WaitlistFeatures(BaseModel):
    email_notifications: bool = True
    duplicate_checking: bool = True
    spam_protection: bool = True
    analytics: bool = True
    rate_limiting: bool = True


class CollaboratorPolicies(BaseModel):
    storage: FailurePolicy = FailurePolicy.PROPAGATE
    cache: FailurePolicy = FailurePolicy.FAIL_OPEN
    mail: FailurePolicy = FailurePolicy.LOG_AND_IGNORE
    analytics: FailurePolicy = FailurePolicy.LOG_AND_IGNORE


class WaitlistConfig(BaseModel):
    """Everything the signup pipeline needs to know, fixed at construction time"""

    service_name: str = "Dvand Waitlist"
    features: WaitlistFeatures = WaitlistFeatures()
    policies: CollaboratorPolicies = CollaboratorPolicies()
    notification_email: Optional[str] = None
    sheet_url: str = ""
    rate_limit_max_attempts: int = 3
    rate_limit_window_seconds: int = 3600

    default_source: str = "dvand-waitlist"
    default_user_agent: str = "Unknown"
    default_referrer: str = "direct"
    default_screen_resolution: str = "unknown"
    default_timezone: str = "unknown"

    @classmethod
    def from_settings(cls, settings: Settings) -> "WaitlistConfig":
        return cls(
            service_name=settings.SERVICE_NAME,
            features=WaitlistFeatures(
                email_notifications=settings.FEATURE_EMAIL_NOTIFICATIONS,
                duplicate_checking=settings.FEATURE_DUPLICATE_CHECKING,
                spam_protection=settings.FEATURE_SPAM_PROTECTION,
                analytics=settings.FEATURE_ANALYTICS,
                rate_limiting=settings.FEATURE_RATE_LIMITING,
            ),
            notification_email=settings.NOTIFICATION_EMAIL,
            sheet_url=settings.sheet_url,
            rate_limit_max_attempts=settings.RATE_LIMIT_MAX_ATTEMPTS,
            rate_limit_window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )
