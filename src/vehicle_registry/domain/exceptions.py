"""Domain exceptions for the vehicle registry."""


class AuthenticationError(Exception):
    """Raised when credentials or a bearer token are rejected."""
    pass


class NotFoundError(Exception):
    """Raised when an operation targets a record that does not exist."""

    def __init__(self, resource: str, record_id: int):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} {record_id} not found")


class ValidationError(ValueError):
    """Raised when a payload or query parameter breaks a business rule."""
    pass


class ConfigurationError(RuntimeError):
    """Raised when signing key or issuer are missing."""
    pass
