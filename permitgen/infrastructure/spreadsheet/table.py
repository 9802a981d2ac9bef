"""Header-keyed row mapping shared by the spreadsheet readers."""

from collections.abc import Iterable, Sequence
from typing import Any

from permitgen.domain.identity.port.spreadsheet import RawRow


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def header_names(header: Sequence[Any]) -> list[str | None]:
    """Normalize a header row: blanks become None, repeats get ``_1``, ``_2``... suffixes.

    A suffix that is already used as a literal header is skipped, so every
    column keeps a distinct key.
    """
    taken = {str(value).strip() for value in header if not _is_blank(value)}
    used: set[str] = set()
    counters: dict[str, int] = {}
    names: list[str | None] = []
    for value in header:
        if _is_blank(value):
            names.append(None)
            continue
        name = str(value).strip()
        if name in used:
            n = counters.get(name, 0)
            candidate = name
            while candidate in taken or candidate in used:
                n += 1
                candidate = f"{name}_{n}"
            counters[name] = n
            name = candidate
        used.add(name)
        names.append(name)
    return names


def rows_to_mappings(
    header: Sequence[Any],
    rows: Iterable[Sequence[Any]],
    *,
    blank: Any = None,
) -> list[RawRow]:
    """Zip data rows with the header.

    Cells equal to ``blank`` are left out of the mapping, and rows with no
    remaining cells are dropped.
    """
    names = header_names(header)
    mappings: list[RawRow] = []
    for values in rows:
        row = {
            name: value
            for name, value in zip(names, values)
            if name is not None and value != blank
        }
        if row:
            mappings.append(row)
    return mappings
