"""Authentication-related value objects and services."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import hashlib
import secrets


@dataclass(frozen=True)
class LoginCredentials:
    """Value object for login credentials.

    No format rules are enforced here: empty or malformed values simply fail
    the lookup and are reported like any other bad login.
    """
    email: str
    password: str


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a signed access token."""
    subject: str
    email: str
    role: str
    issuer: str
    expires_at: datetime
    issued_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Claims stop being valid at the exact ``exp`` instant."""
        return now >= self.expires_at


@dataclass(frozen=True)
class AuthToken:
    """Value object for an issued access token."""
    token: str
    expires_at: datetime
    issued_at: datetime
    token_type: str = "bearer"


@dataclass(frozen=True)
class LoginResult:
    """Value object for login operation result."""
    success: bool
    administrator_id: Optional[int] = None
    token: Optional[AuthToken] = None
    error_message: Optional[str] = None


class PasswordHasher:
    """Salted PBKDF2-SHA256 password hashes.

    Stored form is ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``; the
    iteration count travels with the hash so it can be raised later without
    invalidating existing administrators.
    """

    SCHEME = "pbkdf2_sha256"
    ITERATIONS = 100000
    SALT_BYTES = 16

    @staticmethod
    def _derive(password: str, salt: str, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            bytes.fromhex(salt),
            iterations
        ).hex()

    @classmethod
    def create_password_hash(cls, password: str) -> str:
        """Hash a password with a fresh random salt."""
        salt = secrets.token_hex(cls.SALT_BYTES)
        hashed = cls._derive(password, salt, cls.ITERATIONS)
        return f"{cls.SCHEME}${cls.ITERATIONS}${salt}${hashed}"

    @classmethod
    def verify_password_hash(cls, password: str, password_hash: str) -> bool:
        """Check a password in constant time; malformed hashes never match."""
        try:
            scheme, iterations, salt, expected = password_hash.split('$')
            if scheme != cls.SCHEME:
                return False
            actual = cls._derive(password, salt, int(iterations))
            return secrets.compare_digest(actual, expected)
        except (ValueError, TypeError, AttributeError, OverflowError):
            return False
