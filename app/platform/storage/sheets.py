from typing import Any, List, Optional, Protocol, Sequence

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import DateTimeOption, ValueRenderOption

from app.platform.config import settings
from app.platform.logger import get_logger

logger = get_logger("sheets")

HEADERS = ["Timestamp", "Email", "Source", "UserAgent", "Referrer", "ScreenResolution", "Timezone"]
HEADER_RANGE = "A1:G1"

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Header styling: bold white text on the brand colour (#667eea)
HEADER_FORMAT = {
    "textFormat": {
        "bold": True,
        "foregroundColor": {"red": 1.0, "green": 1.0, "blue": 1.0},
    },
    "backgroundColor": {"red": 0.4, "green": 0.494, "blue": 0.918},
}


class WaitlistStorage(Protocol):
    def append_record(self, row: Sequence[Any]) -> None: ...

    def scan_column(self, name: str) -> List[Any]: ...

    def read_range(self) -> List[List[Any]]: ...

    def row_count(self) -> int: ...

    def ensure_header(self) -> bool: ...


def column_index(name: str) -> int:
    """Zero-based position of a header column"""
    try:
        return HEADERS.index(name)
    except ValueError:
        raise KeyError(f"Unknown column: {name}")


class GoogleSheetStorage:
    """Waitlist rows kept in a Google Sheets worksheet"""

    def __init__(self, worksheet: gspread.Worksheet):
        self.worksheet = worksheet

    def append_record(self, row: Sequence[Any]) -> None:
        self.worksheet.append_row(list(row), value_input_option="RAW")

    # Reads are unformatted: Date cells come back as serial numbers, not locale text
    def scan_column(self, name: str) -> List[Any]:
        return self.worksheet.col_values(column_index(name) + 1, value_render_option=ValueRenderOption.unformatted)

    def read_range(self) -> List[List[Any]]:
        return self.worksheet.get_all_values(
            value_render_option=ValueRenderOption.unformatted,
            date_time_render_option=DateTimeOption.serial_number,
        )

    def row_count(self) -> int:
        # Equivalent of "last non-empty row": col_values drops trailing blanks
        return len(self.worksheet.col_values(1))

    def ensure_header(self) -> bool:
        """Write and format the header row if it is missing. Returns True if written."""
        first_row = self.worksheet.row_values(1)
        if first_row and first_row[0] == HEADERS[0]:
            return False

        self.worksheet.update(range_name=HEADER_RANGE, values=[HEADERS])
        self.worksheet.format(HEADER_RANGE, HEADER_FORMAT)
        logger.info("Sheet header row written")
        return True


class InMemorySheetStorage:
    """List-backed worksheet with the same interface, for tests and local runs"""

    def __init__(self, rows: Optional[List[List[Any]]] = None):
        if rows is None:
            rows = [HEADERS]
        self.rows: List[List[Any]] = [list(row) for row in rows]

    def append_record(self, row: Sequence[Any]) -> None:
        self.rows.append(list(row))

    def scan_column(self, name: str) -> List[Any]:
        index = column_index(name)
        return [row[index] if index < len(row) else "" for row in self.rows]

    def read_range(self) -> List[List[Any]]:
        return [list(row) for row in self.rows]

    def row_count(self) -> int:
        return len(self.rows)

    def ensure_header(self) -> bool:
        if self.rows and self.rows[0] and self.rows[0][0] == HEADERS[0]:
            return False
        if self.rows:
            self.rows[0] = list(HEADERS)
        else:
            self.rows.append(list(HEADERS))
        return True


def open_worksheet() -> gspread.Worksheet:
    """Authorize with the service account and open the configured worksheet"""
    logger.info(f"Opening spreadsheet {settings.SHEET_ID}")
    creds = Credentials.from_service_account_file(settings.GOOGLE_SERVICE_ACCOUNT_FILE, scopes=SCOPES)
    client = gspread.authorize(creds)
    spreadsheet = client.open_by_key(settings.SHEET_ID)
    if settings.SHEET_NAME:
        return spreadsheet.worksheet(settings.SHEET_NAME)
    return spreadsheet.sheet1


def create_storage() -> WaitlistStorage:
    if settings.STORAGE_BACKEND == "memory":
        return InMemorySheetStorage()
    return GoogleSheetStorage(open_worksheet())
