"""Openpyxl-based reader for .xlsx uploads."""

from io import BytesIO
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from permitgen.domain.identity.port.spreadsheet import RawRow, SpreadsheetReader
from permitgen.domain.shared.error import ParseError
from permitgen.infrastructure.spreadsheet.table import rows_to_mappings

# Everything openpyxl raises for truncated, non-zip or non-workbook input.
_PARSE_FAILURES = (InvalidFileException, BadZipFile, KeyError, IndexError, ValueError, OSError)


class OpenpyxlSpreadsheetReader(SpreadsheetReader):
    def read_rows(self, content: bytes) -> list[RawRow]:
        try:
            wb = load_workbook(BytesIO(content), data_only=True, read_only=True)
        except _PARSE_FAILURES as e:
            raise ParseError() from e

        try:
            # First sheet only, regardless of which one was active when saved
            ws = wb.worksheets[0]
            rows = ws.iter_rows(values_only=True)
            header = next(rows, None)
            if header is None:
                return []
            return rows_to_mappings(header, rows)
        except _PARSE_FAILURES as e:
            raise ParseError() from e
        finally:
            wb.close()
