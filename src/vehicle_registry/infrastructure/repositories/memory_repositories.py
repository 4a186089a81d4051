"""In-memory repository implementations for testing and development."""

from itertools import count
from typing import Dict, List, Optional

from src.vehicle_registry.application.ports.repositories import VehicleRepository, AdministratorRepository
from src.vehicle_registry.domain.entities.vehicle import Vehicle
from src.vehicle_registry.domain.entities.administrator import Administrator
from src.vehicle_registry.domain.value_objects.pagination import PageRequest


def _page(items: list, page: PageRequest) -> list:
    if not page.is_paginated:
        return items
    return items[page.offset:page.offset + page.limit]


class InMemoryVehicleRepository(VehicleRepository):
    """In-memory implementation of vehicle repository.

    Rows are kept as plain dicts so callers never share entity instances with
    the store.
    """

    def __init__(self):
        self._rows: Dict[int, dict] = {}
        self._ids = count(1)

    async def add(self, vehicle: Vehicle) -> Vehicle:
        """Insert a vehicle and assign the next id."""
        vehicle_id = next(self._ids)
        self._rows[vehicle_id] = {"make": vehicle.make, "model": vehicle.model, "year": vehicle.year}
        vehicle.assign_id(vehicle_id)
        return vehicle

    async def find_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """Find vehicle by ID."""
        row = self._rows.get(vehicle_id)
        return self._to_entity(vehicle_id, row) if row else None

    async def find_all(
        self,
        page: PageRequest,
        model: Optional[str] = None,
        make: Optional[str] = None
    ) -> List[Vehicle]:
        """Find vehicles ordered by id with optional substring filters."""
        matches = [
            self._to_entity(vehicle_id, row)
            for vehicle_id, row in sorted(self._rows.items())
            if (not model or model.lower() in row["model"].lower())
            and (not make or make.lower() in row["make"].lower())
        ]
        return _page(matches, page)

    async def update(self, vehicle: Vehicle) -> bool:
        """Replace the stored fields of a vehicle."""
        if vehicle.id not in self._rows:
            return False
        self._rows[vehicle.id] = {"make": vehicle.make, "model": vehicle.model, "year": vehicle.year}
        return True

    async def delete(self, vehicle_id: int) -> bool:
        """Delete a vehicle."""
        return self._rows.pop(vehicle_id, None) is not None

    @staticmethod
    def _to_entity(vehicle_id: int, row: dict) -> Vehicle:
        return Vehicle(vehicle_id=vehicle_id, **row)


class InMemoryAdministratorRepository(AdministratorRepository):
    """In-memory implementation of administrator repository."""

    def __init__(self):
        self._rows: Dict[int, dict] = {}
        self._ids = count(1)

    async def add(self, administrator: Administrator, password_hash: str) -> Administrator:
        """Insert an administrator and assign the next id."""
        administrator_id = next(self._ids)
        self._rows[administrator_id] = {
            "email": administrator.email,
            "name": administrator.name,
            "password_hash": password_hash,
        }
        administrator.assign_id(administrator_id)
        return administrator

    async def find_by_id(self, administrator_id: int) -> Optional[Administrator]:
        """Find administrator by ID."""
        row = self._rows.get(administrator_id)
        return self._to_entity(administrator_id, row) if row else None

    async def find_by_email(self, email: str) -> Optional[Administrator]:
        """Find the first administrator with exactly this email."""
        for administrator_id, row in sorted(self._rows.items()):
            if row["email"] == email:
                return self._to_entity(administrator_id, row)
        return None

    async def find_all(self, page: PageRequest) -> List[Administrator]:
        """Find administrators ordered by id."""
        administrators = [
            self._to_entity(administrator_id, row)
            for administrator_id, row in sorted(self._rows.items())
        ]
        return _page(administrators, page)

    async def get_password_hash(self, administrator_id: int) -> Optional[str]:
        """Get password hash for administrator."""
        row = self._rows.get(administrator_id)
        return row["password_hash"] if row else None

    @staticmethod
    def _to_entity(administrator_id: int, row: dict) -> Administrator:
        return Administrator(administrator_id=administrator_id, email=row["email"], name=row["name"])
