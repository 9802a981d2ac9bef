"""Container lifecycle shared by the CLI commands."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import logfire
from dishka import AsyncContainer

from permitgen.application.di import create_container
from permitgen.config import Config, configure_logging
from permitgen.domain.identity.command.load import LoadRecords, LoadRecordsHandler, RecordsLoaded
from permitgen.domain.identity.model.store import RecordStore
from permitgen.domain.shared.error import NotFoundError
from permitgen.util.di.scope import Scope


@asynccontextmanager
async def open_session(config: Config | None = None) -> AsyncIterator[AsyncContainer]:
    """Configure logging and yield an APP-scoped container, closing it on exit."""
    config = config or Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    logfire.configure(send_to_logfire="if-token-present", console=False)
    logfire.instrument_httpx()

    container = create_container(config)
    try:
        yield container
    finally:
        await container.close()


async def load_file(container: AsyncContainer, path: Path) -> RecordsLoaded:
    """Read ``path`` and load it into the container's record store."""
    content = path.read_bytes()
    async with container(scope=Scope.UOW) as scope:
        handler = await scope.get(LoadRecordsHandler)
        return await handler.run(LoadRecords(content=content, filename=path.name))


def record_index(store: RecordStore, number: int) -> int:
    """Convert a 1-based record number, as shown by the CLI, to a store index.

    Raises:
        NotFoundError: If ``number`` does not name a loaded record.
    """
    if not 1 <= number <= len(store):
        raise NotFoundError(f"No record {number} (spreadsheet has {len(store)} records)")
    return number - 1
