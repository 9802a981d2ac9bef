from abc import abstractmethod
from typing import Any, Protocol

from permitgen.domain.shared.port import Port

# Column name -> raw cell value. Empty cells are left out of the mapping.
RawRow = dict[str, Any]


class SpreadsheetReader(Port, Protocol):
    @abstractmethod
    def read_rows(self, content: bytes) -> list[RawRow]:
        """Read the first sheet into ordered row mappings keyed by header.

        Raises:
            ParseError: If ``content`` is not a well-formed tabular file.
        """
        ...
