from enum import StrEnum

from permitgen.domain.shared.model.value import ValueObject


class GenerationStatus(StrEnum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class FailureKind(StrEnum):
    TIMEOUT = "timeout"
    API_ERROR = "api_error"
    UNKNOWN_RESPONSE = "unknown_response"
    CANCELLED = "cancelled"


class GenerationFailure(ValueObject):
    """Why the last generation attempt for a record failed."""

    kind: FailureKind
    message: str
    status_code: int | None = None  # HTTP status for API errors


class GenerationState(ValueObject):
    status: GenerationStatus = GenerationStatus.NOT_STARTED
    failure: GenerationFailure | None = None

    @property
    def accepts_request(self) -> bool:
        """Failed records are retry-eligible, same as never-started ones."""
        return self.status in (GenerationStatus.NOT_STARTED, GenerationStatus.FAILED)


class GeneratedImage(ValueObject):
    """Single image payload returned by the image service."""

    data_base64: str
    mime_type: str = "image/png"

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data_base64}"


class GenerationOutcome(ValueObject):
    """What a generation request did, reported back to the caller."""

    index: int
    status: GenerationStatus
    accepted: bool  # False when the request was a no-op
    message: str | None = None
