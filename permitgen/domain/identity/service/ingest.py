from collections.abc import Callable, Sequence

import logfire

from permitgen.domain.identity.model.record import REQUIRED_COLUMNS, IdentityRecord
from permitgen.domain.identity.model.store import RecordStore
from permitgen.domain.identity.port.spreadsheet import RawRow, SpreadsheetReader
from permitgen.domain.shared.error import SchemaError
from permitgen.domain.shared.service import Service


def validate_schema(
    rows: Sequence[RawRow],
    required_columns: Sequence[str] = REQUIRED_COLUMNS,
) -> None:
    """Check the columns of the first row only.

    An empty sheet is valid. Missing columns are reported in the order of
    ``required_columns``.

    Raises:
        SchemaError: If any required column is absent from row 0.
    """
    if not rows:
        return
    present = rows[0].keys()
    missing = [column for column in required_columns if column not in present]
    if missing:
        raise SchemaError(missing)


def normalize(row: RawRow) -> IdentityRecord:
    fields = {column: row.get(column) for column in REQUIRED_COLUMNS}
    extras = {key: value for key, value in row.items() if key not in REQUIRED_COLUMNS}
    return IdentityRecord.model_validate({**fields, "extras": extras})


ReaderSelector = Callable[[str], SpreadsheetReader]


class IngestService(Service):
    select_reader: ReaderSelector  # filename -> reader for that file type
    store: RecordStore

    def ingest(self, content: bytes, filename: str = "") -> list[IdentityRecord]:
        """Parse, validate and normalize ``content`` without touching the store."""
        rows = self.select_reader(filename).read_rows(content)
        validate_schema(rows)
        return [normalize(row) for row in rows]

    def load(self, content: bytes, filename: str = "") -> list[IdentityRecord]:
        """Ingest ``content`` and replace the store contents on success.

        Any ingestion error propagates and leaves the previous load in place.
        """
        with logfire.span("IngestRecords", filename=filename):
            records = self.ingest(content, filename)
            self.store.load(records)
            logfire.info("Records loaded", count=len(records), epoch=self.store.epoch)
            return records
