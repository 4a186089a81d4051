"""Pydantic schemas for vehicle API requests and responses."""

from pydantic import BaseModel, Field

from ....domain.constants import MAX_INTEGER, MAX_TEXT_LENGTH, MIN_INTEGER
from ....domain.entities.vehicle import Vehicle


class VehicleRequest(BaseModel):
    """Request model for creating or replacing a vehicle.

    Text is stripped before the length checks, matching what gets stored.
    """
    make: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, description="Vehicle make, e.g. Honda")
    model: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, description="Vehicle model, e.g. Civic")
    year: int = Field(..., ge=MIN_INTEGER, le=MAX_INTEGER, description="Model year")

    class Config:
        str_strip_whitespace = True


class VehicleResponse(BaseModel):
    """Response model for a stored vehicle."""
    id: int
    make: str
    model: str
    year: int

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> "VehicleResponse":
        return cls(id=vehicle.id, make=vehicle.make, model=vehicle.model, year=vehicle.year)
