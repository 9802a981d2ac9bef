"""Custom Dishka scopes for permitgen."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """permitgen dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Process lifetime (config, HTTP client, record store, orchestrator)
    - UOW: Unit of Work (one CLI command or interactive action)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
