"""Port interfaces for repositories (Dependency Inversion Principle)."""

from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from src.vehicle_registry.domain.entities.vehicle import Vehicle
    from src.vehicle_registry.domain.entities.administrator import Administrator
    from src.vehicle_registry.domain.value_objects.pagination import PageRequest


class VehicleRepository(ABC):
    """Port interface for vehicle repository."""

    @abstractmethod
    async def add(self, vehicle: "Vehicle") -> "Vehicle":
        """Insert a new vehicle and assign its id."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, vehicle_id: int) -> Optional["Vehicle"]:
        """Find vehicle by ID."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(
        self,
        page: "PageRequest",
        model: Optional[str] = None,
        make: Optional[str] = None
    ) -> List["Vehicle"]:
        """Find vehicles ordered by id, filtered by case-insensitive substrings."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, vehicle: "Vehicle") -> bool:
        """Replace the stored fields of an existing vehicle."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, vehicle_id: int) -> bool:
        """Delete a vehicle."""
        raise NotImplementedError


class AdministratorRepository(ABC):
    """Port interface for administrator repository."""

    @abstractmethod
    async def add(self, administrator: "Administrator", password_hash: str) -> "Administrator":
        """Insert a new administrator and assign its id."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, administrator_id: int) -> Optional["Administrator"]:
        """Find administrator by ID."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional["Administrator"]:
        """Find the first administrator (lowest id) with exactly this email."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(self, page: "PageRequest") -> List["Administrator"]:
        """Find administrators ordered by id."""
        raise NotImplementedError

    @abstractmethod
    async def get_password_hash(self, administrator_id: int) -> Optional[str]:
        """Get password hash for administrator."""
        raise NotImplementedError
