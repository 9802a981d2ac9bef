import logfire

from permitgen.domain.identity.service.ingest import IngestService
from permitgen.domain.shared.command import Command, CommandHandler, Result


class LoadRecords(Command):
    content: bytes
    filename: str = ""


class RecordsLoaded(Result):
    count: int


class LoadRecordsHandler(CommandHandler[LoadRecords, RecordsLoaded]):
    ingest_service: IngestService

    async def run(self, cmd: LoadRecords) -> RecordsLoaded:
        with logfire.span("LoadRecords", filename=cmd.filename):
            records = self.ingest_service.load(cmd.content, cmd.filename)
            return RecordsLoaded(count=len(records))
