"""DI provider for HTTP infrastructure."""

from collections.abc import AsyncIterator
from typing import NewType

import httpx
from dishka import provide

from permitgen.config import Config
from permitgen.domain.identity.port.image_generator import ImageGenerator
from permitgen.domain.shared.error import ConfigurationError
from permitgen.infrastructure.http.image_generator import HttpImageGenerator
from permitgen.util.di.base import Provider
from permitgen.util.di.scope import Scope

ImageHttpClient = NewType("ImageHttpClient", httpx.AsyncClient)


class HttpProvider(Provider):
    """DI provider for the image-service HTTP adapter."""

    @provide(scope=Scope.APP)
    async def get_image_http_client(self, config: Config) -> AsyncIterator[ImageHttpClient]:
        """Dedicated HTTP client for the image service.

        The read timeout matches the generation bound; the orchestrator's own
        timeout is what normally fires first.
        """
        timeout = httpx.Timeout(
            connect=config.image_service.connect_timeout,
            read=config.generation.timeout_seconds,
            write=config.image_service.connect_timeout,
            pool=config.image_service.connect_timeout,
        )
        async with httpx.AsyncClient(timeout=timeout) as client:
            yield ImageHttpClient(client)

    @provide(scope=Scope.APP, provides=ImageGenerator)
    def get_image_generator(self, client: ImageHttpClient, config: Config) -> HttpImageGenerator:
        if not config.image_service.api_key:
            raise ConfigurationError(
                "Image service API key is not set (PERMITGEN_IMAGE_SERVICE__API_KEY)"
            )
        return HttpImageGenerator(
            client=client,
            url=config.image_service.predict_url,
            api_key=config.image_service.api_key,
            sample_count=config.image_service.sample_count,
        )
