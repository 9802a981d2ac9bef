from pathlib import PurePath

from permitgen.domain.identity.port.spreadsheet import SpreadsheetReader
from permitgen.infrastructure.spreadsheet.csv_reader import CsvSpreadsheetReader
from permitgen.infrastructure.spreadsheet.openpyxl_reader import OpenpyxlSpreadsheetReader


def reader_for(filename: str) -> SpreadsheetReader:
    """Pick a reader by file suffix; anything that is not .csv is read as .xlsx."""
    if PurePath(filename).suffix.lower() == ".csv":
        return CsvSpreadsheetReader()
    return OpenpyxlSpreadsheetReader()


__all__ = ["CsvSpreadsheetReader", "OpenpyxlSpreadsheetReader", "reader_for"]
