"""Issuing and validating signed access tokens."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, TYPE_CHECKING

from jose import JWTError, jwt

from src.vehicle_registry.domain.exceptions import AuthenticationError, ConfigurationError
from src.vehicle_registry.domain.value_objects.auth import AuthToken, TokenClaims
from src.vehicle_registry.domain.entities.administrator import ADMINISTRATOR_ROLE
from src.vehicle_registry.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from src.vehicle_registry.domain.entities.administrator import Administrator


DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)
FALLBACK_SUBJECT = "NoName"
FALLBACK_EMAIL = "NoEmail"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _from_timestamp(value) -> datetime:
    return datetime.fromtimestamp(float(value), timezone.utc)


class TokenService:
    """Stateless JWT issuer and validator.

    A token is valid while its signature matches the configured key, its
    ``iss`` claim equals the configured issuer and the clock reads strictly
    before ``exp``. Audience is written but never checked. ``iat`` and
    ``exp`` keep sub-second precision so every token lives exactly its lifetime.
    """

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Optional[Callable[[], datetime]] = None
    ):
        if not secret_key or not secret_key.strip():
            raise ConfigurationError("JWT secret key is not configured")
        if not issuer or not issuer.strip():
            raise ConfigurationError("JWT issuer is not configured")
        if lifetime <= timedelta(0):
            raise ConfigurationError("Token lifetime must be positive")

        self._secret_key = secret_key
        self._issuer = issuer
        self._algorithm = algorithm
        self._lifetime = lifetime
        self._clock = clock or utc_now
        self._logger = get_logger(__name__)

    @property
    def issuer(self) -> str:
        return self._issuer

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, administrator: "Administrator") -> AuthToken:
        """Create a signed token for an authenticated administrator."""
        issued_at = self._clock()
        expires_at = issued_at + self._lifetime

        # NumericDate allows fractions; keeping them makes the lifetime exact
        claims = {
            "sub": administrator.name or FALLBACK_SUBJECT,
            "email": administrator.email or FALLBACK_EMAIL,
            "role": ADMINISTRATOR_ROLE,
            "iss": self._issuer,
            "aud": self._issuer,
            "iat": issued_at.timestamp(),
            "exp": expires_at.timestamp(),
        }
        encoded = jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

        return AuthToken(token=encoded, issued_at=issued_at, expires_at=expires_at)

    def validate(self, token: str) -> TokenClaims:
        """Verify a token and return its claims.

        Raises:
            AuthenticationError: bad signature, wrong issuer, expired,
                malformed or missing claims
        """
        if not token:
            raise AuthenticationError("Missing authentication token")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={
                    "verify_aud": False,
                    # expiry is checked below against the injected clock;
                    # require_exp would turn jose's wall-clock check back on
                    "verify_exp": False,
                    "require_iss": True,
                },
            )
        except JWTError as e:
            self._logger.debug(f"Token rejected: {e}")
            raise AuthenticationError("Invalid authentication token") from e

        if "exp" not in payload:
            raise AuthenticationError("Token has no expiry")

        try:
            claims = TokenClaims(
                subject=payload.get("sub") or FALLBACK_SUBJECT,
                email=payload.get("email") or FALLBACK_EMAIL,
                role=payload.get("role", ""),
                issuer=payload["iss"],
                expires_at=_from_timestamp(payload["exp"]),
                issued_at=_from_timestamp(payload["iat"]) if payload.get("iat") is not None else None
            )
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
            raise AuthenticationError("Invalid authentication token") from e

        if claims.is_expired(self._clock()):
            self._logger.debug(f"Token expired at {claims.expires_at.isoformat()}")
            raise AuthenticationError("Token has expired")

        return claims
