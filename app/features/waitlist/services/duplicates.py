from dataclasses import dataclass
from typing import Any, Optional

from app.platform.storage.sheets import WaitlistStorage


@dataclass
class DuplicateCheck:
    is_duplicate: bool
    original_signup_date: Optional[Any] = None


def check_duplicate(email: str, storage: WaitlistStorage) -> DuplicateCheck:
    """
    Look for an already normalized email in the Email column.

    Row 0 is the header and never counts as a match. This is a linear scan
    over the whole column.
    """
    emails = storage.scan_column("Email")
    try:
        index = emails.index(email)
    except ValueError:
        return DuplicateCheck(is_duplicate=False)

    if index == 0:
        return DuplicateCheck(is_duplicate=False)

    timestamp = storage.scan_column("Timestamp")[index]
    return DuplicateCheck(is_duplicate=True, original_signup_date=timestamp)
