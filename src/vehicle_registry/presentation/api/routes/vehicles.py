"""Vehicle endpoints. Every route requires a valid bearer token."""

from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from ....domain.constants import MAX_INTEGER, MIN_INTEGER
from ....infrastructure.services import ServiceFactory
from ..dependencies import get_service_factory
from ..middleware.auth import get_current_administrator
from ..schemas.vehicle_schemas import VehicleRequest, VehicleResponse

router = APIRouter(dependencies=[Depends(get_current_administrator)])

# Ids outside the Integer column range can never match a record
RecordId = Annotated[int, Path(ge=MIN_INTEGER, le=MAX_INTEGER)]


@router.get("", response_model=List[VehicleResponse])
async def list_vehicles(
    page: Optional[int] = Query(None, le=MAX_INTEGER, description="1-indexed page of 10 vehicles; omit for all"),
    model: Optional[str] = Query(None, description="Case-insensitive substring of the model"),
    make: Optional[str] = Query(None, description="Case-insensitive substring of the make"),
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> List[VehicleResponse]:
    """List vehicles ordered by id, optionally filtered and paginated."""
    async with service_factory.get_vehicle_service() as vehicle_service:
        vehicles = await vehicle_service.list_vehicles(page=page, model=model, make=make)

    return [VehicleResponse.from_entity(vehicle) for vehicle in vehicles]


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: RecordId,
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> VehicleResponse:
    """Get a vehicle by id."""
    async with service_factory.get_vehicle_service() as vehicle_service:
        vehicle = await vehicle_service.get_vehicle(vehicle_id)

    return VehicleResponse.from_entity(vehicle)


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    payload: VehicleRequest,
    request: Request,
    response: Response,
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> VehicleResponse:
    """
    Create a new vehicle.

    The vehicle is committed before the response is sent; the Location
    header points at the new record.
    """
    async with service_factory.get_vehicle_service() as vehicle_service:
        vehicle = await vehicle_service.create_vehicle(
            make=payload.make,
            model=payload.model,
            year=payload.year
        )

    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{vehicle.id}"
    return VehicleResponse.from_entity(vehicle)


@router.put("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_vehicle(
    vehicle_id: RecordId,
    payload: VehicleRequest,
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> Response:
    """Replace make, model and year of an existing vehicle."""
    async with service_factory.get_vehicle_service() as vehicle_service:
        await vehicle_service.update_vehicle(
            vehicle_id,
            make=payload.make,
            model=payload.model,
            year=payload.year
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: RecordId,
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> Response:
    """Delete a vehicle."""
    async with service_factory.get_vehicle_service() as vehicle_service:
        await vehicle_service.delete_vehicle(vehicle_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
