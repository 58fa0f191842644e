from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

import httpx

from cinefind.config import Config
from cinefind.core.modules.movie.client import OmdbClient
from cinefind.core.storage import Storage, create_storage

if TYPE_CHECKING:
    from cinefind.core.modules.account.service import AccountService
    from cinefind.core.modules.favorite.service import FavoriteService
    from cinefind.core.modules.movie.service import MovieService
    from cinefind.core.modules.session.service import SessionService


class Service:
    """Base class for services with direct storage access."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    account: AccountService
    session: SessionService
    movie: MovieService
    favorite: FavoriteService

    def __init__(self, storage: Storage) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - accounts must be loaded before the session rehydrates
        service_configs = [
            ("account", "cinefind.core.modules.account.service", "AccountService"),
            ("session", "cinefind.core.modules.session.service", "SessionService"),
            ("movie", "cinefind.core.modules.movie.service", "MovieService"),
            ("favorite", "cinefind.core.modules.favorite.service", "FavoriteService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(storage)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, storage, the OMDB client and all service instances.

    Replaces a global store: whoever owns the UI lifecycle creates one Core,
    enters ``lifespan()`` to rehydrate persisted state, and drops it on exit.
    """

    config: Config
    storage: Storage
    omdb_client: OmdbClient
    services: Services

    def __init__(
        self, config: Config, storage: Storage | None = None, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        """Initialize core with config, storage, HTTP client, and auto-register services."""
        self.config = config
        self.storage = storage if storage is not None else create_storage(config.storage_path)
        self.omdb_client = OmdbClient(
            api_key=config.omdb_api_key,
            base_url=config.omdb_base_url,
            timeout=config.omdb_timeout_seconds,
            transport=transport,
        )
        self.services = Services(self.storage)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services, rehydrating persisted state."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the HTTP client."""
        await self.services.stop_all()
        await self.omdb_client.aclose()
