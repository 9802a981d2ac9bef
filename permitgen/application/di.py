from dishka import AsyncContainer, from_context, make_async_container

from permitgen.config import Config
from permitgen.domain.identity.util.di import IdentityProvider
from permitgen.infrastructure.http.di import HttpProvider
from permitgen.util.di.base import Provider
from permitgen.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        HttpProvider(),
        IdentityProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
