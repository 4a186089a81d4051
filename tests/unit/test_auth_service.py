"""Unit tests for authentication service."""

import pytest
from unittest.mock import AsyncMock

from src.vehicle_registry.application.services.auth_service import AuthenticationService
from src.vehicle_registry.domain.entities.administrator import Administrator
from src.vehicle_registry.domain.exceptions import AuthenticationError
from src.vehicle_registry.domain.value_objects.auth import LoginCredentials, PasswordHasher
from src.vehicle_registry.infrastructure.repositories.memory_repositories import InMemoryAdministratorRepository

# Mark all async tests in this module
pytestmark = pytest.mark.asyncio


@pytest.fixture
def administrator_repo():
    """Create in-memory administrator repository."""
    return InMemoryAdministratorRepository()


@pytest.fixture
def auth_service(administrator_repo, token_service):
    """Create authentication service with in-memory store."""
    return AuthenticationService(administrator_repo, token_service)


async def seed(repo, email="admin@admin", password="123456", name="Admin"):
    """Store an administrator with a hashed password."""
    return await repo.add(
        Administrator(email=email, name=name),
        PasswordHasher.create_password_hash(password)
    )


class TestAuthenticationService:
    """Test cases for AuthenticationService."""

    async def test_successful_login(self, auth_service, administrator_repo, token_service):
        """Test successful login with the seeded credentials."""
        administrator = await seed(administrator_repo)

        result = await auth_service.login(LoginCredentials(email="admin@admin", password="123456"))

        assert result.success is True
        assert result.administrator_id == administrator.id
        assert result.error_message is None
        assert result.token is not None
        assert token_service.validate(result.token.token).email == "admin@admin"

    async def test_login_with_wrong_password(self, auth_service, administrator_repo):
        """Test login with incorrect password."""
        await seed(administrator_repo)

        result = await auth_service.login(LoginCredentials(email="admin@admin", password="wrong"))

        assert result.success is False
        assert result.token is None
        assert result.administrator_id is None
        assert result.error_message == "Invalid email or password"

    async def test_unknown_email_and_wrong_password_look_the_same(self, auth_service, administrator_repo):
        """Test failures do not reveal which field was wrong."""
        await seed(administrator_repo)

        unknown = await auth_service.login(LoginCredentials(email="nobody@admin", password="123456"))
        wrong = await auth_service.login(LoginCredentials(email="admin@admin", password="654321"))

        assert unknown == wrong

    @pytest.mark.parametrize("email,password", [("", "123456"), ("admin@admin", ""), ("", "")])
    async def test_empty_credentials_fail(self, auth_service, administrator_repo, email, password):
        """Test empty input simply fails authentication."""
        await seed(administrator_repo)

        result = await auth_service.login(LoginCredentials(email=email, password=password))

        assert result.success is False

    async def test_email_match_is_case_sensitive(self, auth_service, administrator_repo):
        """Test email must match exactly."""
        await seed(administrator_repo)

        result = await auth_service.login(LoginCredentials(email="ADMIN@ADMIN", password="123456"))

        assert result.success is False

    async def test_first_administrator_wins_on_shared_email(self, auth_service, administrator_repo):
        """Test duplicate emails resolve to the lowest id."""
        first = await seed(administrator_repo, password="first-secret", name="First")
        await seed(administrator_repo, password="second-secret", name="Second")

        ok = await auth_service.login(LoginCredentials(email="admin@admin", password="first-secret"))
        shadowed = await auth_service.login(LoginCredentials(email="admin@admin", password="second-secret"))

        assert ok.success is True
        assert ok.administrator_id == first.id
        assert shadowed.success is False

    async def test_missing_password_hash_fails(self, token_service):
        """Test an administrator without a stored hash cannot log in."""
        repo = AsyncMock()
        repo.find_by_email.return_value = Administrator(email="admin@admin", administrator_id=1)
        repo.get_password_hash.return_value = None
        service = AuthenticationService(repo, token_service)

        result = await service.login(LoginCredentials(email="admin@admin", password="123456"))

        assert result.success is False
        repo.get_password_hash.assert_awaited_once_with(1)

    async def test_store_errors_propagate(self, token_service):
        """Test repository failures are not swallowed."""
        repo = AsyncMock()
        repo.find_by_email.side_effect = RuntimeError("database unavailable")
        service = AuthenticationService(repo, token_service)

        with pytest.raises(RuntimeError, match="database unavailable"):
            await service.login(LoginCredentials(email="admin@admin", password="123456"))

    async def test_issued_token_expires_after_one_hour(self, auth_service, administrator_repo, token_service, clock):
        """Test the login token is honoured for exactly one hour."""
        await seed(administrator_repo)
        result = await auth_service.login(LoginCredentials(email="admin@admin", password="123456"))

        assert result.token.expires_at - result.token.issued_at == token_service.lifetime

        clock.now = result.token.expires_at
        with pytest.raises(AuthenticationError):
            token_service.validate(result.token.token)
