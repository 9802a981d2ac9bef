"""HTTP adapter for the ImageGenerator port (Imagen-style ``:predict`` endpoint)."""

import logging
from typing import Any

import httpx

from permitgen.domain.identity.model.value import GeneratedImage
from permitgen.domain.identity.port.image_generator import ImageGenerator
from permitgen.domain.shared.error import (
    ApiError,
    GenerationTimeoutError,
    UnknownResponseError,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str | None:
    """Best-effort ``error.message`` from a failure body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def _first_image(body: Any) -> GeneratedImage:
    predictions = body.get("predictions") if isinstance(body, dict) else None
    if not isinstance(predictions, list) or not predictions:
        raise UnknownResponseError()
    first = predictions[0]
    data = first.get("bytesBase64Encoded") if isinstance(first, dict) else None
    if not isinstance(data, str) or not data:
        raise UnknownResponseError()
    mime_type = first.get("mimeType") or "image/png"
    return GeneratedImage(data_base64=data, mime_type=mime_type)


class HttpImageGenerator(ImageGenerator):
    """Posts a single-prompt predict request using httpx."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        api_key: str,
        sample_count: int = 1,
    ) -> None:
        self._client = client
        self._url = url
        self._api_key = api_key
        self._sample_count = sample_count

    async def generate(self, prompt: str) -> GeneratedImage:
        payload = {
            "instances": [{"prompt": prompt}],
            "parameters": {"sampleCount": self._sample_count},
        }
        try:
            response = await self._client.post(
                self._url,
                json=payload,
                params={"key": self._api_key},
            )
        except httpx.TimeoutException as e:
            raise GenerationTimeoutError() from e
        except httpx.TransportError as e:
            logger.warning("Image service unreachable: %s", e)
            raise ApiError(None, str(e) or type(e).__name__) from e

        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))

        try:
            body = response.json()
        except ValueError as e:
            raise UnknownResponseError() from e
        return _first_image(body)
