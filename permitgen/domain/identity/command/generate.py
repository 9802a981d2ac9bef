import logfire

from permitgen.domain.identity.model.value import GenerationOutcome
from permitgen.domain.identity.service.enrichment import EnrichmentOrchestrator
from permitgen.domain.shared.command import Command, CommandHandler, Result


class GeneratePhoto(Command):
    index: int


class PhotoGenerated(Result):
    outcome: GenerationOutcome


class GeneratePhotoHandler(CommandHandler[GeneratePhoto, PhotoGenerated]):
    orchestrator: EnrichmentOrchestrator

    async def run(self, cmd: GeneratePhoto) -> PhotoGenerated:
        with logfire.span("GeneratePhoto command", index=cmd.index):
            outcome = await self.orchestrator.request_generation(cmd.index)
            logfire.info(
                "Generation finished",
                index=cmd.index,
                status=str(outcome.status),
                accepted=outcome.accepted,
            )
            return PhotoGenerated(outcome=outcome)
