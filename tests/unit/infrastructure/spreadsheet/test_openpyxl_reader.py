"""Unit tests for the openpyxl spreadsheet reader."""

from datetime import datetime
from io import BytesIO

import pytest
from openpyxl import Workbook

from permitgen.domain.shared.error import ParseError
from permitgen.infrastructure.spreadsheet import (
    CsvSpreadsheetReader,
    OpenpyxlSpreadsheetReader,
    reader_for,
)


def _save(wb: Workbook) -> bytes:
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


class TestReadRows:
    def test_rows_keyed_by_header(self, xlsx_factory):
        content = xlsx_factory(header=["Name", "Age"], rows=[["Ali", 30], ["Sara", 25]])
        rows = OpenpyxlSpreadsheetReader().read_rows(content)
        assert rows == [{"Name": "Ali", "Age": 30}, {"Name": "Sara", "Age": 25}]

    def test_date_cells_are_datetimes(self, xlsx_factory):
        content = xlsx_factory(header=["Birthdate"], rows=[[datetime(1990, 5, 17)]])
        rows = OpenpyxlSpreadsheetReader().read_rows(content)
        assert rows[0]["Birthdate"] == datetime(1990, 5, 17)

    def test_empty_cells_omitted(self, xlsx_factory):
        content = xlsx_factory(header=["Name", "Age", "City"], rows=[["Ali", None, "Izmir"]])
        rows = OpenpyxlSpreadsheetReader().read_rows(content)
        assert rows == [{"Name": "Ali", "City": "Izmir"}]

    def test_blank_rows_skipped(self, xlsx_factory):
        content = xlsx_factory(header=["Name"], rows=[["Ali"], [None], ["Sara"]])
        rows = OpenpyxlSpreadsheetReader().read_rows(content)
        assert [r["Name"] for r in rows] == ["Ali", "Sara"]

    def test_header_only(self, xlsx_factory):
        assert OpenpyxlSpreadsheetReader().read_rows(xlsx_factory(header=["Name"])) == []

    def test_completely_empty_sheet(self):
        assert OpenpyxlSpreadsheetReader().read_rows(_save(Workbook())) == []

    def test_duplicate_headers_suffixed(self, xlsx_factory):
        content = xlsx_factory(header=["Name", "Name", None, "Name"], rows=[["a", "b", "x", "c"]])
        rows = OpenpyxlSpreadsheetReader().read_rows(content)
        assert rows == [{"Name": "a", "Name_1": "b", "Name_2": "c"}]

    def test_duplicate_suffix_skips_literal_header(self, xlsx_factory):
        content = xlsx_factory(header=["Name", "Name", "Name_1"], rows=[["a", "b", "literal"]])
        rows = OpenpyxlSpreadsheetReader().read_rows(content)
        assert rows == [{"Name": "a", "Name_2": "b", "Name_1": "literal"}]

    def test_reads_first_sheet_even_if_another_is_active(self):
        wb = Workbook()
        first = wb.active
        first.append(["Name"])
        first.append(["First"])
        second = wb.create_sheet("Other")
        second.append(["Name"])
        second.append(["Second"])
        wb.active = 1

        rows = OpenpyxlSpreadsheetReader().read_rows(_save(wb))
        assert rows == [{"Name": "First"}]

    @pytest.mark.parametrize("content", [b"", b"not a spreadsheet", b"PK\x03\x04garbage"])
    def test_malformed_input_raises_parse_error(self, content):
        with pytest.raises(ParseError) as exc_info:
            OpenpyxlSpreadsheetReader().read_rows(content)
        assert "valid .xlsx" in exc_info.value.message


class TestReaderFor:
    def test_csv_suffix(self):
        assert isinstance(reader_for("people.CSV"), CsvSpreadsheetReader)

    @pytest.mark.parametrize("filename", ["people.xlsx", "people", ""])
    def test_defaults_to_xlsx(self, filename):
        assert isinstance(reader_for(filename), OpenpyxlSpreadsheetReader)
