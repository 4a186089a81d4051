"""Administrator listing, lookup and creation."""

from typing import List, Optional, TYPE_CHECKING

from src.vehicle_registry.domain.entities.administrator import Administrator
from src.vehicle_registry.domain.exceptions import NotFoundError, ValidationError
from src.vehicle_registry.domain.value_objects.auth import PasswordHasher
from src.vehicle_registry.domain.value_objects.pagination import PageRequest
from src.vehicle_registry.infrastructure.logging import (
    get_logger,
    log_business_rule_violation
)

if TYPE_CHECKING:
    from src.vehicle_registry.application.ports.repositories import AdministratorRepository


class AdministratorService:
    """Application service for administrator records."""

    RESOURCE = "Administrator"

    def __init__(self, administrator_repository: "AdministratorRepository"):
        self._administrator_repository = administrator_repository
        self._logger = get_logger(__name__)

    async def list_administrators(self, page: Optional[int] = None) -> List[Administrator]:
        """List administrators ordered by id, 10 per page when paginated."""
        return await self._administrator_repository.find_all(PageRequest(page=page))

    async def get_administrator(self, administrator_id: int) -> Administrator:
        """Get an administrator by id or raise NotFoundError."""
        administrator = await self._administrator_repository.find_by_id(administrator_id)
        if not administrator:
            raise NotFoundError(self.RESOURCE, administrator_id)
        return administrator

    async def create_administrator(
        self,
        email: str,
        password: str,
        name: Optional[str] = None
    ) -> Administrator:
        """Create an administrator with a hashed password.

        Raises:
            ValidationError: empty email or password, or email already taken
        """
        if not email or not email.strip():
            raise ValidationError("Email cannot be empty")
        if not password:
            raise ValidationError("Password cannot be empty")

        if await self._administrator_repository.find_by_email(email):
            log_business_rule_violation(
                self._logger,
                "duplicate_administrator_email",
                f"Administrator with email {email} already exists",
                email=email
            )
            raise ValidationError(f"Administrator with email {email} already exists")

        administrator = Administrator(email=email, name=name)
        password_hash = PasswordHasher.create_password_hash(password)
        administrator = await self._administrator_repository.add(administrator, password_hash)

        self._logger.info(f"Created administrator {administrator.id}")
        return administrator
