"""Authentication endpoint for administrator login."""

from fastapi import APIRouter, Depends

from ....domain.exceptions import AuthenticationError
from ....domain.value_objects.auth import LoginCredentials
from ....infrastructure.services import ServiceFactory
from ..dependencies import get_service_factory
from ..schemas.auth_schemas import LoginRequest, LoginResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> LoginResponse:
    """Authenticate an administrator and return a bearer token valid for one hour."""
    credentials = LoginCredentials(email=request.email, password=request.password)

    async with service_factory.get_auth_service() as auth_service:
        result = await auth_service.login(credentials)

    if not result.success or not result.token:
        raise AuthenticationError(result.error_message or "Invalid email or password")

    return LoginResponse(
        token=result.token.token,
        token_type=result.token.token_type,
        expires_at=result.token.expires_at
    )
