from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from chatroom.config import Config


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
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

    from chatroom.core.modules.access.service import AccessService  # noqa: PLC0415
    from chatroom.core.modules.counter.service import CounterService  # noqa: PLC0415
    from chatroom.core.modules.mail.service import MailService  # noqa: PLC0415
    from chatroom.core.modules.message.service import MessageService  # noqa: PLC0415
    from chatroom.core.modules.session.service import SessionService  # noqa: PLC0415
    from chatroom.core.modules.user.service import UserService  # noqa: PLC0415
    from chatroom.core.modules.verification.service import VerificationService  # noqa: PLC0415

    user: UserService
    verification: VerificationService
    session: SessionService
    access: AccessService
    counter: CounterService
    message: MessageService
    mail: MailService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - user must be first
        service_configs = [
            ("user", "chatroom.core.modules.user.service", "UserService"),
            ("verification", "chatroom.core.modules.verification.service", "VerificationService"),
            ("session", "chatroom.core.modules.session.service", "SessionService"),
            ("access", "chatroom.core.modules.access.service", "AccessService"),
            ("counter", "chatroom.core.modules.counter.service", "CounterService"),
            ("message", "chatroom.core.modules.message.service", "MessageService"),
            ("mail", "chatroom.core.modules.mail.service", "MailService"),
        ]

        # Dynamically import and instantiate services
        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            if hasattr(service, "on_start"):
                await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            if hasattr(service, "on_stop"):
                await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        """Initialize core with config, MongoDB, and auto-register services.

        A ready database handle may be passed in; otherwise a client is created from config.database_url
        and owned (closed on shutdown) by this Core.
        """
        self.config = config
        if database is None:
            self.mongo_client = AsyncMongoClient(config.database_url)
            self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        else:
            self.mongo_client = None
            self.database = database
        self.services = Services(self.database)
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
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
