"""Dependency injection and service factory."""

from datetime import timedelta
from typing import AsyncGenerator, TYPE_CHECKING
from contextlib import asynccontextmanager

from src.vehicle_registry.infrastructure.database.connection import DatabaseManager
from src.vehicle_registry.infrastructure.repositories.sql_repositories import (
    SQLAlchemyVehicleRepository,
    SQLAlchemyAdministratorRepository
)
from src.vehicle_registry.application.services.administrator_service import AdministratorService
from src.vehicle_registry.application.services.auth_service import AuthenticationService
from src.vehicle_registry.application.services.token_service import TokenService
from src.vehicle_registry.application.services.vehicle_service import VehicleService

if TYPE_CHECKING:
    from src.vehicle_registry.presentation.api.config import Settings


class ServiceFactory:
    """Factory for creating application services with proper dependencies.

    Services are scoped to one database session: the session commits when
    the ``async with`` block exits normally and rolls back otherwise.
    """

    def __init__(self, database_manager: DatabaseManager, token_service: TokenService):
        self.database_manager = database_manager
        self._token_service = token_service
        self._connected = False

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ServiceFactory":
        """Build a factory from application settings."""
        database_manager = DatabaseManager(
            settings.database_url,
            echo=settings.database_echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping
        )
        token_service = TokenService(
            secret_key=settings.jwt_secret_key,
            issuer=settings.jwt_issuer,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(minutes=settings.access_token_expire_minutes)
        )
        return cls(database_manager, token_service)

    @property
    def token_service(self) -> TokenService:
        return self._token_service

    async def initialize(self):
        """Initialize the service factory."""
        if not self._connected:
            await self.database_manager.connect()
            self._connected = True

    async def shutdown(self):
        """Shutdown the service factory."""
        if self._connected:
            await self.database_manager.disconnect()
            self._connected = False

    @asynccontextmanager
    async def get_vehicle_service(self) -> AsyncGenerator[VehicleService, None]:
        """Get vehicle service with database repository."""
        async with self.database_manager.get_session() as session:
            yield VehicleService(SQLAlchemyVehicleRepository(session))

    @asynccontextmanager
    async def get_administrator_service(self) -> AsyncGenerator[AdministratorService, None]:
        """Get administrator service with database repository."""
        async with self.database_manager.get_session() as session:
            yield AdministratorService(SQLAlchemyAdministratorRepository(session))

    @asynccontextmanager
    async def get_auth_service(self) -> AsyncGenerator[AuthenticationService, None]:
        """Get authentication service with database repository."""
        async with self.database_manager.get_session() as session:
            yield AuthenticationService(
                administrator_repository=SQLAlchemyAdministratorRepository(session),
                token_service=self._token_service
            )
