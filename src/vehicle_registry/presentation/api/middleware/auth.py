"""
Authentication gate for the vehicle registry API.

Every protected route depends on ``get_current_administrator``, which
verifies the bearer token's signature, issuer and expiry. Missing and
rejected tokens both produce the same 401 response.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ....domain.exceptions import AuthenticationError
from ....domain.value_objects.auth import TokenClaims
from ....infrastructure.logging import get_logger, log_token_rejected
from ....infrastructure.services import ServiceFactory
from ..dependencies import get_service_factory


# auto_error is off so a missing header is reported like a bad token
security = HTTPBearer(auto_error=False)

logger = get_logger(__name__)


async def get_current_administrator(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> TokenClaims:
    """
    FastAPI dependency returning the claims of a valid bearer token.

    Args:
        credentials: HTTP authorization credentials containing the bearer token
        service_factory: Factory holding the configured token service

    Returns:
        TokenClaims: Claims of the verified token

    Raises:
        AuthenticationError: if the token is missing, forged, expired or
            issued by someone else
    """
    if credentials is None or not credentials.credentials:
        log_token_rejected(logger, "missing")
        raise AuthenticationError("Not authenticated")

    try:
        return service_factory.token_service.validate(credentials.credentials)
    except AuthenticationError as e:
        log_token_rejected(logger, str(e))
        raise AuthenticationError("Not authenticated") from e

