"""Browse command - step through permit cards and generate photos interactively."""

import asyncio
import sys
from pathlib import Path

import cyclopts
from dishka import AsyncContainer
from rich.prompt import Prompt

from permitgen.cli.console import Console, get_console
from permitgen.cli.session import load_file, open_session, record_index
from permitgen.domain.identity.model.store import RecordStore
from permitgen.domain.identity.model.value import GenerationOutcome
from permitgen.domain.identity.service.enrichment import EnrichmentOrchestrator
from permitgen.domain.identity.util.card import PermitCard
from permitgen.domain.shared.error import PermitGenError

app = cyclopts.App(name="browse", help="Browse permit cards and generate photos interactively")

_MENU = "[n]ext [p]rev [g]enerate [c]ancel [r]efresh [<number>] go to [q]uit"


@app.default
def browse(path: Path, /) -> None:
    """Browse the permit cards of a spreadsheet.

    Photo generation runs in the background, so you can keep moving between
    records while a photo is being generated.

    Args:
        path: Spreadsheet (.xlsx or .csv) with one person per row.
    """
    console = get_console()
    try:
        asyncio.run(_browse(path, console))
    except OSError as e:
        console.error(f"Cannot read {path}: {e.strerror or e}")
        sys.exit(1)
    except PermitGenError as e:
        console.error(e.message)
        sys.exit(1)


class _Browser:
    def __init__(self, container: AsyncContainer, store: RecordStore, console: Console) -> None:
        self._container = container
        self._store = store
        self._console = console
        self._orchestrator: EnrichmentOrchestrator | None = None
        self._pending: list[asyncio.Task[GenerationOutcome]] = []

    async def orchestrator(self) -> EnrichmentOrchestrator:
        # Resolved lazily so browsing works without an API key
        if self._orchestrator is None:
            self._orchestrator = await self._container.get(EnrichmentOrchestrator)
        return self._orchestrator

    def show_current(self) -> None:
        record = self._store.current()
        if record is None:
            self._console.warning("The spreadsheet has no records.")
            return
        self._console.info(f"Record {self._store.cursor + 1} of {len(self._store)}")
        self._console.permit_card(PermitCard.from_record(record), record.generation.status)

    def report_finished(self) -> None:
        for task in [t for t in self._pending if t.done()]:
            self._pending.remove(task)
            if not task.cancelled():
                self._console.outcome(task.result())

    async def handle(self, choice: str) -> bool:
        """Apply one menu choice; returns False to quit."""
        store = self._store
        if choice == "q":
            return False
        if choice == "n":
            store.next()
        elif choice == "p":
            store.prev()
        elif choice.isdigit():
            store.select(record_index(store, int(choice)))
        elif choice == "g" and store.cursor is not None:
            orchestrator = await self.orchestrator()
            self._pending.append(orchestrator.start_generation(store.cursor))
            await asyncio.sleep(0)  # let the request flip the record to in progress
        elif choice == "c" and store.cursor is not None:
            if self._orchestrator is None or not self._orchestrator.cancel(store.cursor):
                self._console.warning("No photo is being generated for this record.")
            await asyncio.sleep(0)
        return True

    async def close(self) -> None:
        if self._orchestrator is not None:
            await self._orchestrator.shutdown()
        self.report_finished()


async def _browse(path: Path, console: Console) -> None:
    async with open_session() as container:
        loaded = await load_file(container, path)
        console.success(f"Loaded {loaded.count} record(s) from {path.name}")
        store = await container.get(RecordStore)
        if not len(store):
            console.warning("The spreadsheet has no records.")
            return
        browser = _Browser(container, store, console)
        try:
            while len(store):
                browser.report_finished()
                browser.show_current()
                try:
                    choice = await asyncio.to_thread(Prompt.ask, _MENU, default="n")
                except EOFError:
                    break
                try:
                    if not await browser.handle(choice.strip().lower()):
                        break
                except PermitGenError as e:
                    console.error(e.message)
        finally:
            await browser.close()
