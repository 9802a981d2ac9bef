from dishka import provide

from permitgen.config import Config
from permitgen.domain.identity.command.generate import GeneratePhotoHandler
from permitgen.domain.identity.command.load import LoadRecordsHandler
from permitgen.domain.identity.model.store import RecordStore
from permitgen.domain.identity.port.image_generator import ImageGenerator
from permitgen.domain.identity.service.enrichment import EnrichmentOrchestrator
from permitgen.domain.identity.service.ingest import IngestService
from permitgen.infrastructure.spreadsheet import reader_for
from permitgen.util.di.base import Provider
from permitgen.util.di.scope import Scope


class IdentityProvider(Provider):
    @provide(scope=Scope.APP)
    def get_record_store(self) -> RecordStore:
        return RecordStore()

    @provide(scope=Scope.APP)
    def get_orchestrator(
        self,
        store: RecordStore,
        generator: ImageGenerator,
        config: Config,
    ) -> EnrichmentOrchestrator:
        return EnrichmentOrchestrator(
            store=store,
            generator=generator,
            timeout=config.generation.timeout_seconds,
            single_flight=config.generation.single_flight,
        )

    @provide(scope=Scope.UOW)
    def get_ingest_service(self, store: RecordStore) -> IngestService:
        return IngestService(select_reader=reader_for, store=store)

    # Command Handlers
    load_handler = provide(LoadRecordsHandler, scope=Scope.UOW)
    generate_handler = provide(GeneratePhotoHandler, scope=Scope.UOW)
