"""Administrator listing endpoints. Every route requires a valid bearer token."""

from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, Path, Query

from ....domain.constants import MAX_INTEGER, MIN_INTEGER
from ....infrastructure.services import ServiceFactory
from ..dependencies import get_service_factory
from ..middleware.auth import get_current_administrator
from ..schemas.auth_schemas import AdministratorResponse

router = APIRouter(dependencies=[Depends(get_current_administrator)])

# Ids outside the Integer column range can never match a record
RecordId = Annotated[int, Path(ge=MIN_INTEGER, le=MAX_INTEGER)]


@router.get("", response_model=List[AdministratorResponse])
async def list_administrators(
    page: Optional[int] = Query(None, le=MAX_INTEGER, description="1-indexed page of 10 administrators; omit for all"),
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> List[AdministratorResponse]:
    """List administrators ordered by id."""
    async with service_factory.get_administrator_service() as administrator_service:
        administrators = await administrator_service.list_administrators(page=page)

    return [AdministratorResponse.from_entity(administrator) for administrator in administrators]


@router.get("/{administrator_id}", response_model=AdministratorResponse)
async def get_administrator(
    administrator_id: RecordId,
    service_factory: ServiceFactory = Depends(get_service_factory)
) -> AdministratorResponse:
    """Get an administrator by id."""
    async with service_factory.get_administrator_service() as administrator_service:
        administrator = await administrator_service.get_administrator(administrator_id)

    return AdministratorResponse.from_entity(administrator)
