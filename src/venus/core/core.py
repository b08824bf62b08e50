from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

from venus.config import Config
from venus.core.storage import Storage
from venus.utils import Clock, now


class Service:
    """Base class for services backed by the shared storage."""

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

    from venus.core.modules.access.service import AccessService  # noqa: PLC0415
    from venus.core.modules.savings.service import SavingsService  # noqa: PLC0415
    from venus.core.modules.session.service import SessionService  # noqa: PLC0415
    from venus.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService
    savings: SavingsService

    def __init__(self, storage: Storage) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("user", "venus.core.modules.user.service", "UserService"),
            ("session", "venus.core.modules.session.service", "SessionService"),
            ("access", "venus.core.modules.access.service", "AccessService"),
            ("savings", "venus.core.modules.savings.service", "SavingsService"),
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
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, storage, clock, and all service instances."""

    config: Config
    storage: Storage
    services: Services

    def __init__(self, config: Config, storage: Storage | None = None, clock: Clock = now) -> None:
        """Initialize core with config and storage, and auto-register services.

        Storage defaults to the one described by ``config.database_url``. The clock
        is the single source of "now" for session expiry and goal unlocking.
        """
        self.config = config
        self.storage = storage if storage is not None else Storage.from_url(config.database_url)
        self.clock = clock
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
        """Open storage, then start all services."""
        await self.storage.open()
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the storage connection on shutdown."""
        await self.services.stop_all()
        await self.storage.close()
