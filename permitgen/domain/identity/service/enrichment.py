"""Asynchronous photo enrichment for identity records.

Each record moves through NOT_STARTED -> IN_PROGRESS -> COMPLETED | FAILED.
FAILED records can be requested again; COMPLETED is terminal. At most one
image-service call is outstanding per record, guarded by the IN_PROGRESS
state rather than by a lock: the state flips before the first await, so a
second request on the same record always observes it.

Results are written back by record index and load epoch, never through the
store cursor, so navigating while a photo is generating cannot redirect it.
"""

import asyncio
import base64
import binascii
import logging
from dataclasses import field

import logfire

from permitgen.domain.identity.model.record import IdentityRecord
from permitgen.domain.identity.model.store import RecordMutation, RecordStore
from permitgen.domain.identity.model.value import (
    FailureKind,
    GeneratedImage,
    GenerationFailure,
    GenerationOutcome,
    GenerationStatus,
)
from permitgen.domain.identity.port.image_generator import ImageGenerator
from permitgen.domain.identity.util.prompt import build_prompt
from permitgen.domain.shared.error import (
    ApiError,
    ExternalServiceError,
    GenerationTimeoutError,
    StaleRecordError,
    UnknownResponseError,
)
from permitgen.domain.shared.service import Service

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

_SKIP_MESSAGES = {
    GenerationStatus.IN_PROGRESS: "A photo is already being generated for this record.",
    GenerationStatus.COMPLETED: "This record already has a photo.",
}
_BUSY_MESSAGE = "Another photo is already being generated. Please wait for it to finish."
_CANCELLED_MESSAGE = "Image generation was cancelled."
_STALE_MESSAGE = "Records were reloaded while the photo was generating; result discarded."


def _photo_uri(image: GeneratedImage) -> str:
    if not image.data_base64:
        raise UnknownResponseError()
    try:
        base64.b64decode(image.data_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise UnknownResponseError("Image data in API response is not valid base64.") from e
    return image.data_uri


class EnrichmentOrchestrator(Service):
    store: RecordStore
    generator: ImageGenerator
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    single_flight: bool = False  # when set, only one record may generate at a time
    # Keyed by (load epoch, index) so calls from a replaced load never shadow new ones
    _calls: dict[tuple[int, int], asyncio.Task[GeneratedImage]] = field(
        default_factory=dict, init=False, repr=False
    )
    _background: set[asyncio.Task[GenerationOutcome]] = field(
        default_factory=set, init=False, repr=False
    )

    @property
    def in_flight(self) -> frozenset[int]:
        """Indices of current records with an outstanding image-service call."""
        epoch = self.store.epoch
        return frozenset(index for call_epoch, index in self._calls if call_epoch == epoch)

    async def request_generation(self, index: int) -> GenerationOutcome:
        """Generate a photo for the record at ``index``.

        A no-op for records that are in progress or completed. Generation
        failures never raise; they end up in the record's state and in the
        returned outcome's message.

        Raises:
            NotFoundError: If ``index`` is out of range.
        """
        record = self.store.get(index)
        status = record.generation.status

        if not record.generation.accepts_request:
            logger.debug("Skipping generation for record %d: %s", index, status)
            return GenerationOutcome(
                index=index, status=status, accepted=False, message=_SKIP_MESSAGES[status]
            )
        if self.single_flight and self._calls:
            logger.debug("Rejecting generation for record %d: single-flight busy", index)
            return GenerationOutcome(
                index=index, status=status, accepted=False, message=_BUSY_MESSAGE
            )

        epoch = self.store.epoch
        self.store.update_at(index, IdentityRecord.begin_generation, epoch=epoch)
        call = asyncio.ensure_future(self.generator.generate(build_prompt(record)))
        self._calls[(epoch, index)] = call
        logger.info("Generating photo for record %d (%s)", index, record.full_name)

        try:
            with logfire.span("GeneratePhoto", index=index, timeout=self.timeout):
                image = await asyncio.wait_for(call, timeout=self.timeout)
                photo_url = _photo_uri(image)
        except asyncio.CancelledError:
            outcome = self._fail(
                epoch,
                index,
                GenerationFailure(kind=FailureKind.CANCELLED, message=_CANCELLED_MESSAGE),
            )
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            return outcome
        except (TimeoutError, GenerationTimeoutError):
            logfire.error("Photo generation timed out", index=index, timeout=self.timeout)
            return self._fail(
                epoch,
                index,
                GenerationFailure(
                    kind=FailureKind.TIMEOUT, message=GenerationTimeoutError().message
                ),
            )
        except ApiError as e:
            return self._fail(
                epoch,
                index,
                GenerationFailure(
                    kind=FailureKind.API_ERROR,
                    message=f"Failed to generate photo: {e.message}",
                    status_code=e.status,
                ),
            )
        except UnknownResponseError as e:
            return self._fail(
                epoch,
                index,
                GenerationFailure(
                    kind=FailureKind.UNKNOWN_RESPONSE,
                    message=f"Failed to generate photo: {e.message}",
                ),
            )
        except ExternalServiceError as e:
            return self._fail(
                epoch,
                index,
                GenerationFailure(
                    kind=FailureKind.API_ERROR, message=f"Failed to generate photo: {e.message}"
                ),
            )
        except Exception as e:
            logger.exception("Unexpected error generating photo for record %d", index)
            return self._fail(
                epoch,
                index,
                GenerationFailure(
                    kind=FailureKind.UNKNOWN_RESPONSE, message=f"Failed to generate photo: {e}"
                ),
            )
        else:
            return self._write(
                epoch,
                index,
                lambda r: r.complete_generation(photo_url),
                GenerationStatus.COMPLETED,
                None,
            )
        finally:
            self._calls.pop((epoch, index), None)

    def start_generation(self, index: int) -> asyncio.Task[GenerationOutcome]:
        """Run :meth:`request_generation` in the background."""
        task = asyncio.create_task(
            self.request_generation(index), name=f"generate-photo-{index}"
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    def cancel(self, index: int) -> bool:
        """Abort the outstanding call for ``index``; the record becomes FAILED."""
        return self._cancel_call((self.store.epoch, index))

    def cancel_all(self) -> int:
        """Cancel every outstanding call, including ones from a replaced load."""
        return sum(self._cancel_call(key) for key in list(self._calls))

    def _cancel_call(self, key: tuple[int, int]) -> bool:
        call = self._calls.get(key)
        if call is None or call.done():
            return False
        call.cancel()
        epoch, index = key
        logger.info("Cancelled photo generation for record %d (load %d)", index, epoch)
        return True

    async def shutdown(self) -> None:
        """Cancel outstanding calls and wait for background requests to settle."""
        self.cancel_all()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    def _fail(self, epoch: int, index: int, failure: GenerationFailure) -> GenerationOutcome:
        logger.warning(
            "Photo generation failed for record %d (%s): %s", index, failure.kind, failure.message
        )
        return self._write(
            epoch,
            index,
            lambda r: r.fail_generation(failure),
            GenerationStatus.FAILED,
            failure.message,
        )

    def _write(
        self,
        epoch: int,
        index: int,
        mutation: RecordMutation,
        status: GenerationStatus,
        message: str | None,
    ) -> GenerationOutcome:
        try:
            self.store.update_at(index, mutation, epoch=epoch)
        except StaleRecordError:
            logger.warning("Discarding generation result for record %d from load %d", index, epoch)
            return GenerationOutcome(
                index=index, status=status, accepted=True, message=_STALE_MESSAGE
            )
        if status == GenerationStatus.COMPLETED:
            logfire.info("Photo generated", index=index)
        return GenerationOutcome(index=index, status=status, accepted=True, message=message)
