"""CSV reader; every cell comes back as a string."""

import csv
import io

from permitgen.domain.identity.port.spreadsheet import RawRow, SpreadsheetReader
from permitgen.domain.shared.error import ParseError
from permitgen.infrastructure.spreadsheet.table import rows_to_mappings

_PARSE_MESSAGE = "Failed to parse spreadsheet. Please ensure it's a valid .csv file."


class CsvSpreadsheetReader(SpreadsheetReader):
    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def read_rows(self, content: bytes) -> list[RawRow]:
        try:
            text = content.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise ParseError(_PARSE_MESSAGE) from e
        # Binary input (e.g. an .xlsx renamed to .csv) can still decode cleanly
        if "\x00" in text:
            raise ParseError(_PARSE_MESSAGE)

        try:
            rows = csv.reader(io.StringIO(text, newline=""))
            header = next(rows, None)
            if header is None:
                return []
            return rows_to_mappings(header, rows, blank="")
        except csv.Error as e:
            raise ParseError(_PARSE_MESSAGE) from e
