"""In-memory ordered collection of identity records with a navigation cursor."""

from collections.abc import Callable, Sequence

from permitgen.domain.identity.model.record import IdentityRecord
from permitgen.domain.shared.error import NotFoundError, StaleRecordError

RecordMutation = Callable[[IdentityRecord], IdentityRecord]


class RecordStore:
    """Holds the records of the current load in source row order.

    A record's identity is its index at load time. The store is never
    reordered, so an index stays valid until the next ``load``. Every load
    bumps ``epoch`` so that results computed against an older load can be
    told apart from results for the current one.
    """

    def __init__(self) -> None:
        self._records: list[IdentityRecord] = []
        self._cursor: int | None = None
        self._epoch = 0

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[IdentityRecord, ...]:
        return tuple(self._records)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    @property
    def epoch(self) -> int:
        return self._epoch

    def load(self, records: Sequence[IdentityRecord]) -> None:
        """Replace the whole collection; no merge with the previous load."""
        self._records = list(records)
        self._cursor = 0 if self._records else None
        self._epoch += 1

    def current(self) -> IdentityRecord | None:
        if self._cursor is None:
            return None
        return self._records[self._cursor]

    def get(self, index: int) -> IdentityRecord:
        if not 0 <= index < len(self._records):
            raise NotFoundError(
                f"No record at index {index} (store has {len(self._records)} records)"
            )
        return self._records[index]

    def next(self) -> int | None:
        if self._records:
            self._cursor = ((self._cursor or 0) + 1) % len(self._records)
        return self._cursor

    def prev(self) -> int | None:
        if self._records:
            self._cursor = ((self._cursor or 0) - 1) % len(self._records)
        return self._cursor

    def select(self, index: int) -> IdentityRecord:
        record = self.get(index)
        self._cursor = index
        return record

    def update_at(
        self,
        index: int,
        mutation: RecordMutation,
        *,
        epoch: int | None = None,
    ) -> IdentityRecord:
        """Apply ``mutation`` to the record at ``index``, regardless of the cursor.

        Args:
            index: Record identity (position at load time).
            mutation: Returns the replacement record.
            epoch: Load epoch the caller captured; a mismatch means the
                store was reloaded in the meantime.

        Raises:
            StaleRecordError: If ``epoch`` is given and no longer current.
            NotFoundError: If ``index`` is out of range.
        """
        if epoch is not None and epoch != self._epoch:
            raise StaleRecordError(
                f"Record {index} belongs to load {epoch}, store is at load {self._epoch}"
            )
        updated = mutation(self.get(index))
        self._records[index] = updated
        return updated
