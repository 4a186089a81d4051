"""Authentication service for administrator login."""

from typing import TYPE_CHECKING

from src.vehicle_registry.domain.value_objects.auth import (
    LoginCredentials,
    LoginResult,
    PasswordHasher
)
from src.vehicle_registry.infrastructure.logging import (
    get_logger,
    log_authentication_attempt
)

if TYPE_CHECKING:
    from src.vehicle_registry.application.ports.repositories import AdministratorRepository
    from src.vehicle_registry.application.services.token_service import TokenService


INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AuthenticationService:
    """Service for administrator authentication."""

    def __init__(
        self,
        administrator_repository: "AdministratorRepository",
        token_service: "TokenService"
    ):
        self._administrator_repository = administrator_repository
        self._token_service = token_service
        self._logger = get_logger(__name__)

    async def login(self, credentials: LoginCredentials) -> LoginResult:
        """Authenticate an administrator and issue an access token.

        Every failure produces the same error message so callers cannot tell
        an unknown email from a wrong password. Store errors propagate.
        """
        email = credentials.email or ""

        administrator = await self._administrator_repository.find_by_email(email) if email else None
        if not administrator:
            log_authentication_attempt(self._logger, email, False, failure_reason="administrator_not_found")
            return LoginResult(success=False, error_message=INVALID_CREDENTIALS_MESSAGE)

        password_hash = await self._administrator_repository.get_password_hash(administrator.id)
        if not password_hash:
            self._logger.error(f"No password hash found for administrator {administrator.id}")
            log_authentication_attempt(self._logger, email, False,
                                      failure_reason="no_password_hash",
                                      administrator_id=administrator.id)
            return LoginResult(success=False, error_message=INVALID_CREDENTIALS_MESSAGE)

        if not PasswordHasher.verify_password_hash(credentials.password or "", password_hash):
            log_authentication_attempt(self._logger, email, False,
                                      failure_reason="invalid_password",
                                      administrator_id=administrator.id)
            return LoginResult(success=False, error_message=INVALID_CREDENTIALS_MESSAGE)

        auth_token = self._token_service.issue(administrator)

        log_authentication_attempt(self._logger, email, True,
                                  administrator_id=administrator.id,
                                  token_expires_at=auth_token.expires_at.isoformat())

        return LoginResult(
            success=True,
            administrator_id=administrator.id,
            token=auth_token
        )
