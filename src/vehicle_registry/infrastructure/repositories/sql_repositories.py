"""SQLAlchemy repository implementations."""

from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.vehicle_registry.infrastructure.logging import (
    get_logger,
    log_database_operation
)
from src.vehicle_registry.application.ports.repositories import VehicleRepository, AdministratorRepository
from src.vehicle_registry.domain.entities.vehicle import Vehicle
from src.vehicle_registry.domain.entities.administrator import Administrator
from src.vehicle_registry.domain.value_objects.pagination import PageRequest
from src.vehicle_registry.infrastructure.database.models import VehicleModel, AdministratorModel


def _paginate(stmt, page: PageRequest):
    """Apply offset/limit for a paginated request."""
    if page.is_paginated:
        stmt = stmt.offset(page.offset).limit(page.limit)
    return stmt


class SQLAlchemyVehicleRepository(VehicleRepository):
    """SQLAlchemy implementation of vehicle repository."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._logger = get_logger(__name__)

    async def add(self, vehicle: Vehicle) -> Vehicle:
        """Insert a vehicle; the database assigns the id."""
        log_database_operation(
            self._logger,
            "INSERT",
            "VehicleModel",
            make=vehicle.make,
            model=vehicle.model
        )

        vehicle_model = VehicleModel(
            make=vehicle.make,
            model=vehicle.model,
            year=vehicle.year
        )
        self._session.add(vehicle_model)
        await self._session.flush()

        vehicle.assign_id(vehicle_model.id)
        return vehicle

    async def find_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """Find vehicle by ID."""
        log_database_operation(self._logger, "SELECT", "VehicleModel", vehicle_id=vehicle_id)

        vehicle_model = await self._get_model(vehicle_id)
        if not vehicle_model:
            return None

        return self._model_to_entity(vehicle_model)

    async def find_all(
        self,
        page: PageRequest,
        model: Optional[str] = None,
        make: Optional[str] = None
    ) -> List[Vehicle]:
        """Find vehicles ordered by id with optional substring filters."""
        log_database_operation(
            self._logger,
            "SELECT",
            "VehicleModel",
            page=page.page,
            model_filter=model,
            make_filter=make
        )

        stmt = select(VehicleModel)
        if model:
            stmt = stmt.where(VehicleModel.model.icontains(model, autoescape=True))
        if make:
            stmt = stmt.where(VehicleModel.make.icontains(make, autoescape=True))
        stmt = _paginate(stmt.order_by(VehicleModel.id), page)

        result = await self._session.execute(stmt)
        vehicle_models = result.scalars().all()

        return [self._model_to_entity(model) for model in vehicle_models]

    async def update(self, vehicle: Vehicle) -> bool:
        """Replace make, model and year of a stored vehicle."""
        log_database_operation(self._logger, "UPDATE", "VehicleModel", vehicle_id=vehicle.id)

        vehicle_model = await self._get_model(vehicle.id)
        if not vehicle_model:
            return False

        vehicle_model.make = vehicle.make
        vehicle_model.model = vehicle.model
        vehicle_model.year = vehicle.year
        await self._session.flush()

        return True

    async def delete(self, vehicle_id: int) -> bool:
        """Delete a vehicle."""
        log_database_operation(self._logger, "DELETE", "VehicleModel", vehicle_id=vehicle_id)

        stmt = delete(VehicleModel).where(VehicleModel.id == vehicle_id)
        result = await self._session.execute(stmt)

        success = result.rowcount > 0
        if not success:
            self._logger.warning(
                "Vehicle deletion failed - not found",
                extra={"vehicle_id": vehicle_id}
            )
        return success

    async def _get_model(self, vehicle_id: int) -> Optional[VehicleModel]:
        stmt = select(VehicleModel).where(VehicleModel.id == vehicle_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _model_to_entity(self, model: VehicleModel) -> Vehicle:
        """Convert database model to domain entity."""
        return Vehicle(
            vehicle_id=model.id,
            make=model.make,
            model=model.model,
            year=model.year
        )


class SQLAlchemyAdministratorRepository(AdministratorRepository):
    """SQLAlchemy implementation of administrator repository."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._logger = get_logger(__name__)

    async def add(self, administrator: Administrator, password_hash: str) -> Administrator:
        """Insert an administrator; the database assigns the id."""
        log_database_operation(
            self._logger,
            "INSERT",
            "AdministratorModel",
            email=administrator.email
        )

        administrator_model = AdministratorModel(
            email=administrator.email,
            name=administrator.name,
            password_hash=password_hash
        )
        self._session.add(administrator_model)
        await self._session.flush()

        administrator.assign_id(administrator_model.id)
        return administrator

    async def find_by_id(self, administrator_id: int) -> Optional[Administrator]:
        """Find administrator by ID."""
        log_database_operation(
            self._logger,
            "SELECT",
            "AdministratorModel",
            administrator_id=administrator_id,
            lookup_field="id"
        )

        stmt = select(AdministratorModel).where(AdministratorModel.id == administrator_id)
        result = await self._session.execute(stmt)
        administrator_model = result.scalar_one_or_none()

        if not administrator_model:
            return None

        return self._model_to_entity(administrator_model)

    async def find_by_email(self, email: str) -> Optional[Administrator]:
        """Find administrator by exact email."""
        log_database_operation(
            self._logger,
            "SELECT",
            "AdministratorModel",
            email=email,
            lookup_field="email"
        )

        stmt = (
            select(AdministratorModel)
            .where(AdministratorModel.email == email)
            .order_by(AdministratorModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        administrator_model = result.scalar_one_or_none()

        if not administrator_model:
            self._logger.debug("Administrator not found by email", extra={"email": email})
            return None

        return self._model_to_entity(administrator_model)

    async def find_all(self, page: PageRequest) -> List[Administrator]:
        """Find administrators ordered by id."""
        log_database_operation(self._logger, "SELECT", "AdministratorModel", page=page.page)

        stmt = _paginate(select(AdministratorModel).order_by(AdministratorModel.id), page)
        result = await self._session.execute(stmt)

        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def get_password_hash(self, administrator_id: int) -> Optional[str]:
        """Get password hash for administrator."""
        stmt = select(AdministratorModel.password_hash).where(AdministratorModel.id == administrator_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _model_to_entity(self, model: AdministratorModel) -> Administrator:
        """Convert database model to domain entity."""
        return Administrator(
            administrator_id=model.id,
            email=model.email,
            name=model.name
        )
