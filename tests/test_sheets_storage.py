from unittest.mock import MagicMock

import pytest
from gspread.utils import DateTimeOption, ValueRenderOption

from app.platform.storage.sheets import (
    HEADER_RANGE,
    HEADERS,
    GoogleSheetStorage,
    InMemorySheetStorage,
    column_index,
)


@pytest.fixture
def worksheet():
    return MagicMock()


class TestGoogleSheetStorage:
    def test_append_writes_raw_values(self, worksheet):
        storage = GoogleSheetStorage(worksheet)
        row = ["2026-10-19T08:00:00.000Z", "a@b.com", "src", "UA", "direct", "unknown", "unknown"]

        storage.append_record(row)

        worksheet.append_row.assert_called_once_with(row, value_input_option="RAW")

    def test_scan_column_reads_by_header_position(self, worksheet):
        worksheet.col_values.return_value = ["Email", "a@b.com"]
        storage = GoogleSheetStorage(worksheet)

        assert storage.scan_column("Email") == ["Email", "a@b.com"]
        worksheet.col_values.assert_called_once_with(2, value_render_option=ValueRenderOption.unformatted)

    def test_row_count_uses_first_column(self, worksheet):
        worksheet.col_values.return_value = ["Timestamp", "t1", "t2"]

        assert GoogleSheetStorage(worksheet).row_count() == 3
        worksheet.col_values.assert_called_once_with(1)

    def test_read_range_returns_unformatted_values(self, worksheet):
        worksheet.get_all_values.return_value = [HEADERS, [46314.5, "a@b.com"]]

        assert GoogleSheetStorage(worksheet).read_range() == [HEADERS, [46314.5, "a@b.com"]]
        worksheet.get_all_values.assert_called_once_with(
            value_render_option=ValueRenderOption.unformatted,
            date_time_render_option=DateTimeOption.serial_number,
        )

    def test_ensure_header_writes_and_formats_when_missing(self, worksheet):
        worksheet.row_values.return_value = []

        assert GoogleSheetStorage(worksheet).ensure_header() is True
        worksheet.update.assert_called_once_with(range_name=HEADER_RANGE, values=[HEADERS])
        worksheet.format.assert_called_once()
        assert worksheet.format.call_args.args[0] == HEADER_RANGE

    def test_ensure_header_leaves_existing_header(self, worksheet):
        worksheet.row_values.return_value = list(HEADERS)

        assert GoogleSheetStorage(worksheet).ensure_header() is False
        worksheet.update.assert_not_called()
        worksheet.format.assert_not_called()


class TestInMemorySheetStorage:
    def test_starts_with_header_only(self):
        storage = InMemorySheetStorage()

        assert storage.row_count() == 1
        assert storage.read_range() == [HEADERS]

    def test_append_and_scan(self):
        storage = InMemorySheetStorage()
        storage.append_record(["t", "a@b.com", "s", "ua", "r", "sr", "tz"])

        assert storage.scan_column("Email") == ["Email", "a@b.com"]
        assert storage.row_count() == 2

    def test_read_range_is_a_copy(self):
        storage = InMemorySheetStorage()
        storage.read_range()[0][0] = "changed"

        assert storage.read_range()[0][0] == "Timestamp"

    def test_ensure_header_replaces_missing_header(self):
        storage = InMemorySheetStorage([[""]])

        assert storage.ensure_header() is True
        assert storage.read_range() == [HEADERS]
        assert storage.ensure_header() is False


def test_unknown_column_raises():
    with pytest.raises(KeyError):
        column_index("Phone")
