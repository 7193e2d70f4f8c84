"""Default assignment router - FastAPI endpoints for default musicians per service type"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import DefaultAssignmentCreate, DefaultAssignmentResponse, DefaultAssignmentUpdate
from .service import DefaultAssignmentService

router = APIRouter(prefix="/default-assignments", tags=["Default Assignments"])


def get_default_assignment_service(db: Session = Depends(get_db)) -> DefaultAssignmentService:
    """Dependency injection for DefaultAssignmentService"""
    return DefaultAssignmentService(db)


@router.get("")
async def list_default_assignments(
    service_type_id: Optional[str] = Query(None, alias="serviceTypeId"),
    _: User = Depends(get_current_user),
    service: DefaultAssignmentService = Depends(get_default_assignment_service),
):
    defaults = service.list_defaults(service_type_id)
    return {"data": [DefaultAssignmentResponse.model_validate(d) for d in defaults]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_default_assignment(
    id: str,
    _: User = Depends(get_current_user),
    service: DefaultAssignmentService = Depends(get_default_assignment_service),
):
    return {"data": DefaultAssignmentResponse.model_validate(service.get_default(id))}


@router.post("", status_code=201)
async def create_default_assignment(
    data: DefaultAssignmentCreate,
    _: User = Depends(require_role(Role.admin)),
    service: DefaultAssignmentService = Depends(get_default_assignment_service),
):
    return {"data": DefaultAssignmentResponse.model_validate(service.create_default(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_default_assignment(
    id: str,
    data: DefaultAssignmentUpdate,
    _: User = Depends(require_role(Role.admin)),
    service: DefaultAssignmentService = Depends(get_default_assignment_service),
):
    return {"data": DefaultAssignmentResponse.model_validate(service.update_default(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_default_assignment(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: DefaultAssignmentService = Depends(get_default_assignment_service),
):
    service.delete_default(id)
