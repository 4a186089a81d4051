"""Vehicle service implementing the protected CRUD use cases."""

from typing import List, Optional, TYPE_CHECKING

from src.vehicle_registry.domain.entities.vehicle import Vehicle
from src.vehicle_registry.domain.exceptions import NotFoundError
from src.vehicle_registry.domain.value_objects.pagination import PageRequest
from src.vehicle_registry.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from src.vehicle_registry.application.ports.repositories import VehicleRepository


def _normalize_filter(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class VehicleService:
    """Application service for vehicle management.

    Holds no state of its own; every call goes straight to the repository.
    """

    RESOURCE = "Vehicle"

    def __init__(self, vehicle_repository: "VehicleRepository"):
        self._vehicle_repository = vehicle_repository
        self._logger = get_logger(__name__)

    async def list_vehicles(
        self,
        page: Optional[int] = None,
        model: Optional[str] = None,
        make: Optional[str] = None
    ) -> List[Vehicle]:
        """List vehicles ordered by id.

        Args:
            page: 1-indexed page of 10 records, or None for every match
            model: case-insensitive substring the model must contain
            make: case-insensitive substring the make must contain

        Raises:
            ValidationError: if page is lower than 1
        """
        page_request = PageRequest(page=page)
        return await self._vehicle_repository.find_all(
            page_request,
            model=_normalize_filter(model),
            make=_normalize_filter(make)
        )

    async def get_vehicle(self, vehicle_id: int) -> Vehicle:
        """Get a vehicle by id or raise NotFoundError."""
        vehicle = await self._vehicle_repository.find_by_id(vehicle_id)
        if not vehicle:
            raise NotFoundError(self.RESOURCE, vehicle_id)
        return vehicle

    async def create_vehicle(self, make: str, model: str, year: int) -> Vehicle:
        """Validate and store a new vehicle."""
        vehicle = Vehicle(make=make, model=model, year=year)
        vehicle = await self._vehicle_repository.add(vehicle)
        self._logger.info(f"Created vehicle {vehicle.id}")
        return vehicle

    async def update_vehicle(self, vehicle_id: int, make: str, model: str, year: int) -> Vehicle:
        """Replace make, model and year of an existing vehicle."""
        vehicle = await self.get_vehicle(vehicle_id)
        vehicle.replace_details(make=make, model=model, year=year)

        if not await self._vehicle_repository.update(vehicle):
            # Deleted between lookup and update
            raise NotFoundError(self.RESOURCE, vehicle_id)

        self._logger.info(f"Updated vehicle {vehicle_id}")
        return vehicle

    async def delete_vehicle(self, vehicle_id: int) -> None:
        """Delete a vehicle or raise NotFoundError."""
        if not await self._vehicle_repository.delete(vehicle_id):
            raise NotFoundError(self.RESOURCE, vehicle_id)
        self._logger.info(f"Deleted vehicle {vehicle_id}")
