"""Error hierarchy for permitgen.

Error layers:
- PermitGenError: Base class for all permitgen errors
- DomainError: Input and state-machine violations (bad spreadsheets, illegal transitions)
- InfrastructureError: Failures talking to the image service or misconfiguration

Ingestion errors abort the load. Generation errors are scoped to one record and
are captured by the enrichment orchestrator instead of propagating.
"""


class PermitGenError(Exception):
    """Base class for all permitgen errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(PermitGenError):
    """Base class for domain errors."""


class IngestError(DomainError):
    """Spreadsheet could not be turned into identity records."""


class ParseError(IngestError):
    """Input is not a well-formed tabular file."""

    def __init__(
        self,
        message: str = "Failed to parse spreadsheet. Please ensure it's a valid .xlsx file.",
    ) -> None:
        super().__init__(message, code="ParseError")


class SchemaError(IngestError):
    """Required columns are absent from the first data row."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Spreadsheet is missing columns: {', '.join(missing)}",
            code="SchemaError",
        )
        self.missing = missing


class NotFoundError(DomainError):
    """Record not found."""


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class StaleRecordError(DomainError):
    """A write-back targeted a record from a replaced load."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(PermitGenError):
    """Base class for infrastructure/system errors."""


class ExternalServiceError(InfrastructureError):
    """The image service is unavailable or failed."""


class ApiError(ExternalServiceError):
    """The image service rejected the request."""

    def __init__(self, status: int | None, message: str | None = None) -> None:
        self.status = status
        self.detail = message or "Unknown error"
        status_text = status if status is not None else "no response"
        super().__init__(
            f"API request failed: {status_text} - {self.detail}",
            code="ApiError",
        )


class UnknownResponseError(ExternalServiceError):
    """The image service answered successfully but without usable image data."""

    def __init__(self, message: str = "No image data found in API response.") -> None:
        super().__init__(message, code="UnknownResponseError")


class GenerationTimeoutError(InfrastructureError):
    """Photo generation exceeded its time bound."""

    def __init__(self, message: str = "Image generation timed out. Please try again.") -> None:
        super().__init__(message, code="TimeoutError")


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
