"""Service type router - FastAPI endpoints for service types"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...cache_control import medium_cache, no_cache
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import GenerateServicesRequest, ServiceTypeCreate, ServiceTypeResponse, ServiceTypeUpdate
from .service import ServiceTypeService

router = APIRouter(prefix="/serviceTypes", tags=["Service Types"])


def get_service_type_service(db: Session = Depends(get_db)) -> ServiceTypeService:
    """Dependency injection for ServiceTypeService"""
    return ServiceTypeService(db)


@router.get("", dependencies=[Depends(medium_cache)])
async def list_service_types(
    _: User = Depends(get_current_user),
    service: ServiceTypeService = Depends(get_service_type_service),
):
    return {"data": [ServiceTypeResponse.model_validate(t) for t in service.list_service_types()]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id")), Depends(medium_cache)])
async def get_service_type(
    id: str,
    _: User = Depends(get_current_user),
    service: ServiceTypeService = Depends(get_service_type_service),
):
    return {"data": ServiceTypeResponse.model_validate(service.get_service_type(id))}


@router.post("", status_code=201, dependencies=[Depends(no_cache)])
async def create_service_type(
    data: ServiceTypeCreate,
    _: User = Depends(require_role(Role.admin)),
    service: ServiceTypeService = Depends(get_service_type_service),
):
    return {"data": ServiceTypeResponse.model_validate(service.create_service_type(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def update_service_type(
    id: str,
    data: ServiceTypeUpdate,
    _: User = Depends(require_role(Role.admin)),
    service: ServiceTypeService = Depends(get_service_type_service),
):
    return {"data": ServiceTypeResponse.model_validate(service.update_service_type(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def delete_service_type(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: ServiceTypeService = Depends(get_service_type_service),
):
    service.delete_service_type(id)


@router.post("/{id}/generate-services", dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def generate_services(
    id: str,
    response: Response,
    data: Optional[GenerateServicesRequest] = Body(None),
    _: User = Depends(require_role(Role.admin)),
    service: ServiceTypeService = Depends(get_service_type_service),
):
    """Create a year of services from the type's RRULE, 201 if any were created"""
    payload, created_any = service.generate_services(id, data.year if data else None)
    response.status_code = 201 if created_any else 200
    return {"data": payload}
