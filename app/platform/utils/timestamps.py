from datetime import datetime, timedelta, timezone
from typing import Any, Optional

# Day zero of spreadsheet date serial numbers
SERIAL_EPOCH = datetime(1899, 12, 30)

# Text a sheet shows for Date cells in its default locale
FORMATTED_DATE_PATTERNS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def from_serial_number(value: float) -> datetime:
    """Spreadsheet serial number (days since 1899-12-30) as naive wall time"""
    return SERIAL_EPOCH + timedelta(days=value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Turn a stored Timestamp cell back into an aware datetime.

    Accepts datetimes, ISO-8601 strings, spreadsheet serial numbers and the
    sheet's default date text. Naive values are read as local time. Anything
    else gives None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = from_serial_number(value)
    elif isinstance(value, str) and value.strip():
        parsed = _parse_text(value.strip())
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def _parse_text(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass
    for pattern in FORMATTED_DATE_PATTERNS:
        try:
            return datetime.strptime(value, pattern)
        except ValueError:
            continue
    return None


def to_iso_utc(value: datetime) -> str:
    """2026-10-19T08:30:00.000Z"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_date_string(value: Any) -> str:
    """Short human date such as "Mon Oct 19 2026"; unparseable values are returned as-is"""
    parsed = parse_timestamp(value)
    if parsed is None:
        return str(value)
    return parsed.astimezone().strftime("%a %b %d %Y")


def start_of_today() -> datetime:
    """Local midnight of the current day, timezone-aware"""
    return datetime.now().astimezone().replace(hour=0, minute=0, second=0, microsecond=0)
