from abc import abstractmethod
from typing import Protocol

from permitgen.domain.identity.model.value import GeneratedImage
from permitgen.domain.shared.port import Port


class ImageGenerator(Port, Protocol):
    """Stateless text-to-image endpoint.

    Implementations must be safe to cancel: cancelling the awaiting task
    aborts the outstanding request.
    """

    @abstractmethod
    async def generate(self, prompt: str) -> GeneratedImage:
        """Generate a single image for ``prompt``.

        Raises:
            ApiError: The service rejected the request or was unreachable.
            UnknownResponseError: Success status without a usable image payload.
            GenerationTimeoutError: The client gave up waiting.
        """
        ...
