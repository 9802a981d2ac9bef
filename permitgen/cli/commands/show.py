"""Show command - list loaded records or one permit card."""

import asyncio
import sys
from pathlib import Path

import cyclopts

from permitgen.cli.console import Console, get_console
from permitgen.cli.session import load_file, open_session, record_index
from permitgen.domain.identity.model.store import RecordStore
from permitgen.domain.identity.util.card import PermitCard, export_filename
from permitgen.domain.shared.error import PermitGenError

app = cyclopts.App(name="show", help="List records in a spreadsheet or show one permit card")


@app.default
def show(path: Path, /, *, index: int | None = None) -> None:
    """List the records in a spreadsheet, or show the permit card for one.

    Args:
        path: Spreadsheet (.xlsx or .csv) with one person per row.
        index: Record number (1-based, as listed) to show as a permit card.
    """
    console = get_console()
    try:
        asyncio.run(_show(path, index, console))
    except OSError as e:
        console.error(f"Cannot read {path}: {e.strerror or e}")
        sys.exit(1)
    except PermitGenError as e:
        console.error(e.message)
        sys.exit(1)


async def _show(path: Path, index: int | None, console: Console) -> None:
    async with open_session() as container:
        loaded = await load_file(container, path)
        store = await container.get(RecordStore)

        if index is None:
            console.record_table(store.records, store.cursor)
            console.info(f"{loaded.count} record(s) loaded from {path.name}")
            return

        record = store.select(record_index(store, index))
        console.permit_card(PermitCard.from_record(record), record.generation.status)
        console.info(f"Exports as {export_filename(record)}")
