"""Pydantic schemas for authentication and administrator endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ....domain.entities.administrator import Administrator


class LoginRequest(BaseModel):
    """Login request model."""
    email: str
    password: str


class LoginResponse(BaseModel):
    """Login response model."""
    token: str
    token_type: str = "bearer"
    expires_at: datetime


class AdministratorResponse(BaseModel):
    """Administrator profile; the password hash is never exposed."""
    id: int
    email: str
    name: Optional[str] = None
    role: str

    @classmethod
    def from_entity(cls, administrator: Administrator) -> "AdministratorResponse":
        return cls(
            id=administrator.id,
            email=administrator.email,
            name=administrator.name,
            role=administrator.role
        )
