import csv
import io
import json
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from app.features.waitlist.exceptions import DuplicateSignup, InvalidEmail, RateLimited, SpamRejected
from app.features.waitlist.schemas.waitlist import (
    LastSignup,
    WaitlistConfig,
    WaitlistExport,
    WaitlistIn,
    WaitlistStats,
)
from app.features.waitlist.services.duplicates import DuplicateCheck, check_duplicate
from app.features.waitlist.services.rate_limiter import is_rate_limited
from app.features.waitlist.services.validators import is_likely_spam, is_valid_email
from app.features.waitlist.utils.emailer import render_signup_notification
from app.platform.cache.redis import TTLCache
from app.platform.logger import get_logger
from app.platform.policy import run_with_policy
from app.platform.storage.sheets import WaitlistStorage, column_index
from app.platform.utils.timestamps import now_utc, parse_timestamp, start_of_today, to_date_string, to_iso_utc

logger = get_logger("waitlist")
analytics_logger = get_logger("waitlist.analytics")

SendMail = Callable[[str, str, str], None]


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class SignupResult:
    email: str
    signup_number: int


class WaitlistService:
    """
    Signup pipeline and read-side handlers for one worksheet.

    signup() runs rate limit, syntax, spam and duplicate checks in that
    order and stops at the first rejection. A row that was appended is never
    removed, even if a later step fails.
    """

    def __init__(
        self,
        config: WaitlistConfig,
        storage: WaitlistStorage,
        cache: TTLCache,
        send_mail: Optional[SendMail] = None,
    ):
        self.config = config
        self.storage = storage
        self.cache = cache
        self.send_mail = send_mail

    # ── Write path ──────────────────────────────

    def signup(self, submission: WaitlistIn) -> SignupResult:
        features = self.config.features
        email = normalize_email(submission.email)

        if features.rate_limiting and self._is_rate_limited(email):
            logger.info(f"Rate limited signup attempt for {email}")
            raise RateLimited()

        if not is_valid_email(submission.email.strip()):
            logger.info(f"Rejected malformed email: {submission.email!r}")
            raise InvalidEmail()

        if features.spam_protection and is_likely_spam(email, submission.user_agent):
            logger.info(f"Rejected likely spam signup: {email}")
            raise SpamRejected()

        if features.duplicate_checking:
            duplicate = self._storage_call(
                lambda: check_duplicate(email, self.storage),
                "Duplicate check",
                fallback=DuplicateCheck(is_duplicate=False),
            )
            if duplicate.is_duplicate:
                logger.info(f"Duplicate signup for {email}")
                raise DuplicateSignup(
                    duplicate.original_signup_date, to_date_string(duplicate.original_signup_date)
                )

        timestamp = now_utc()
        row = self._build_row(email, submission, to_iso_utc(timestamp))
        self._storage_call(lambda: self.storage.append_record(row), "Append signup")

        signup_number = self._storage_call(self.signup_count, "Signup count", fallback=0)

        if features.email_notifications and self.config.notification_email:
            self._notify(email, signup_number, timestamp)

        logger.info(f"New signup: {email} at {to_iso_utc(timestamp)}")

        if features.analytics:
            run_with_policy(
                self.config.policies.analytics,
                lambda: self.log_analytics("signup", email, submission, timestamp),
                label="Analytics logging",
            )

        return SignupResult(email=email, signup_number=signup_number)

    def _is_rate_limited(self, email: str) -> bool:
        # FAIL_OPEN: an unreachable cache must not block signups
        return run_with_policy(
            self.config.policies.cache,
            lambda: is_rate_limited(
                self.cache,
                email,
                max_attempts=self.config.rate_limit_max_attempts,
                window_seconds=self.config.rate_limit_window_seconds,
            ),
            fallback=False,
            label="Rate limiting",
        )

    def _storage_call(self, operation, label: str, fallback=None):
        return run_with_policy(self.config.policies.storage, operation, fallback=fallback, label=label)

    def _build_row(self, email: str, submission: WaitlistIn, timestamp: str) -> List[str]:
        config = self.config
        return [
            timestamp,
            email,
            submission.source or config.default_source,
            submission.user_agent or config.default_user_agent,
            submission.referrer or config.default_referrer,
            submission.screen_resolution or config.default_screen_resolution,
            submission.timezone or config.default_timezone,
        ]

    def _notify(self, email: str, signup_number: int, timestamp) -> None:
        def send():
            if self.send_mail is None:
                raise RuntimeError("No mail sender configured")
            subject, body = render_signup_notification(
                self.config.service_name, email, signup_number, timestamp, self.config.sheet_url
            )
            self.send_mail(self.config.notification_email, subject, body)

        run_with_policy(self.config.policies.mail, send, label="Notification email")

    def log_analytics(self, event: str, email: str, submission: WaitlistIn, timestamp) -> None:
        payload = {
            "email": email,
            "timestamp": to_iso_utc(timestamp),
            "userAgent": submission.user_agent,
            "referrer": submission.referrer,
            "screenResolution": submission.screen_resolution,
        }
        analytics_logger.info(f"Analytics - {event}: {json.dumps(payload)}")

    # ── Read path ───────────────────────────────

    def signup_count(self) -> int:
        """Data rows, i.e. everything below the header"""
        return max(self.storage.row_count() - 1, 0)

    def get_stats(self) -> WaitlistStats:
        rows = self.storage.read_range()
        data_rows = rows[1:]

        today_start = start_of_today()
        ts_index = column_index("Timestamp")
        today_signups = 0
        for row in data_rows:
            signed_up_at = parse_timestamp(row[ts_index]) if row else None
            if signed_up_at is not None and signed_up_at >= today_start:
                today_signups += 1

        last_signup = None
        if data_rows:
            last = data_rows[-1]
            last_at = parse_timestamp(last[ts_index])
            last_signup = LastSignup(
                timestamp=to_iso_utc(last_at) if last_at is not None else str(last[ts_index]),
                email=str(last[column_index("Email")]),
            )

        return WaitlistStats(
            total_signups=len(data_rows),
            today_signups=today_signups,
            last_signup=last_signup,
        )

    def export_csv(self) -> WaitlistExport:
        rows = self.storage.read_range()

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        for position, row in enumerate(rows):
            writer.writerow(self._export_cells(row) if position > 0 else row)

        return WaitlistExport(csv=buffer.getvalue(), total_records=max(len(rows) - 1, 0))

    @staticmethod
    def _export_cells(row: List[Any]) -> List[Any]:
        cells = list(row)
        ts_index = column_index("Timestamp")
        if cells:
            parsed = parse_timestamp(cells[ts_index])
            if parsed is not None:
                cells[ts_index] = to_iso_utc(parsed)
        return cells

    def list_emails(self) -> List[str]:
        emails = self.storage.scan_column("Email")[1:]
        return [email for email in emails if isinstance(email, str) and email.strip()]

    def setup_sheet(self) -> bool:
        return self.storage.ensure_header()
