"""Administrator entity."""

from typing import Optional


ADMINISTRATOR_ROLE = "Administrator"


class Administrator:
    """Administrator allowed to manage vehicle records.

    The password hash is deliberately not part of the entity; repositories
    expose it separately so it never leaks into API responses.
    """

    def __init__(
        self,
        email: str,
        name: Optional[str] = None,
        administrator_id: Optional[int] = None
    ):
        if not email or not email.strip():
            raise ValueError("Email cannot be empty")
        self._id = administrator_id
        self._email = email
        self._name = name.strip() if name and name.strip() else None

    @property
    def id(self) -> Optional[int]:
        """Get administrator ID."""
        return self._id

    @property
    def email(self) -> str:
        """Get administrator email."""
        return self._email

    @property
    def name(self) -> Optional[str]:
        """Get administrator display name."""
        return self._name

    @property
    def role(self) -> str:
        return ADMINISTRATOR_ROLE

    def assign_id(self, administrator_id: int) -> None:
        """Record the id assigned by the store."""
        if self._id is not None and self._id != administrator_id:
            raise ValueError(f"Administrator already has id {self._id}")
        self._id = administrator_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Administrator):
            return False
        return self.id == other.id and self.email == other.email

    def __hash__(self) -> int:
        return hash((self.id, self.email))

    def __str__(self) -> str:
        return f"Administrator({self.id}, {self.email})"
