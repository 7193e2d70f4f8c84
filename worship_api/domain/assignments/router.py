"""Assignment router - FastAPI endpoints for musician assignments"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_assignment_worship_set_leader
from ...database import get_db
from ...models import User
from ...shared.validators import valid_uuid
from .schemas import AssignmentCreate, AssignmentResponse, AssignmentUpdate
from .service import AssignmentService

router = APIRouter(prefix="/assignments", tags=["Assignments"])


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    """Dependency injection for AssignmentService"""
    return AssignmentService(db)


def _serialize(assignments):
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.get("")
async def list_assignments(
    current_user: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service),
):
    return {"data": _serialize(service.list_assignments(current_user))}


@router.get("/set/{set_id}", dependencies=[Depends(valid_uuid("set_id"))])
async def list_set_assignments(
    set_id: str,
    _: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service),
):
    return {"data": _serialize(service.list_by_set(set_id))}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_assignment(
    id: str,
    _: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service),
):
    return {"data": AssignmentResponse.model_validate(service.get_assignment(id))}


@router.post("", status_code=201)
async def create_assignment(
    data: AssignmentCreate,
    current_user: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service),
):
    return {"data": AssignmentResponse.model_validate(service.create_assignment(data, current_user))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_assignment(
    id: str,
    data: AssignmentUpdate,
    current_user: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Accept or decline an invitation"""
    return {"data": AssignmentResponse.model_validate(service.update_assignment(id, data, current_user))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_assignment(
    id: str,
    _: User = Depends(require_assignment_worship_set_leader),
    service: AssignmentService = Depends(get_assignment_service),
):
    service.delete_assignment(id)
