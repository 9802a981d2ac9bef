"""Global test fixtures."""

import os
from collections.abc import Callable, Sequence
from datetime import datetime
from io import BytesIO
from typing import Any

import logfire
import pytest
from openpyxl import Workbook

# Keep a developer's own settings out of the tests
for _key in [k for k in os.environ if k.startswith("PERMITGEN_")]:
    del os.environ[_key]

logfire.configure(send_to_logfire=False, console=False)

HEADER = [
    "Name",
    "Surname",
    "Nationality",
    "Birthdate",
    "MotherName",
    "FatherName",
    "IDNumber",
    "PermitType",
    "ValidFrom",
    "ValidUntil",
    "Gender",
    "Age",
]


def person_row(name: str = "Layla", surname: str = "Haddad") -> list[Any]:
    return [
        name,
        surname,
        "Syrian",
        datetime(1990, 5, 17),
        "Mariam",
        "Omar",
        "99123456780",
        "Short Term",
        datetime(2024, 3, 7),
        datetime(2025, 3, 6),
        "female",
        34,
    ]


@pytest.fixture
def xlsx_factory() -> Callable[..., bytes]:
    """Build .xlsx bytes from a header and data rows."""

    def make(header: Sequence[Any] = HEADER, rows: Sequence[Sequence[Any]] = ()) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = "People"
        ws.append(list(header))
        for row in rows:
            ws.append(list(row))
        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()

    return make


@pytest.fixture
def header() -> list[str]:
    return list(HEADER)


@pytest.fixture
def row_factory() -> Callable[..., list[Any]]:
    return person_row
