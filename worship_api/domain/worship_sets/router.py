"""Worship set router - FastAPI endpoints for worship sets"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role, require_worship_set_leader
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from ..leader_rotations.schemas import RotationResponse
from .schemas import (
    AssignLeaderRequest,
    WorshipSetCreate,
    WorshipSetDetail,
    WorshipSetListItem,
    WorshipSetResponse,
    WorshipSetUpdate,
    WorshipSetWithAssignments,
)
from .service import WorshipSetService

router = APIRouter(prefix="/worshipSets", tags=["Worship Sets"])


def get_worship_set_service(db: Session = Depends(get_db)) -> WorshipSetService:
    """Dependency injection for WorshipSetService"""
    return WorshipSetService(db)


@router.get("")
async def list_worship_sets(
    _: User = Depends(get_current_user),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    return {"data": [WorshipSetListItem.model_validate(s) for s in service.list_sets()]}


@router.get("/{service_id}", dependencies=[Depends(valid_uuid("service_id"))])
async def get_worship_set(
    service_id: str,
    _: User = Depends(get_current_user),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    """The set of a service, looked up by the service id"""
    return {"data": WorshipSetDetail.model_validate(service.get_for_service(service_id))}


@router.post("", status_code=201)
async def create_worship_set(
    data: WorshipSetCreate,
    _: User = Depends(require_role(Role.admin)),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    return {"data": WorshipSetWithAssignments.model_validate(service.create_set(data))}


@router.put("/{id}/assign-leader", dependencies=[Depends(valid_uuid("id"))])
async def assign_leader(
    id: str,
    data: AssignLeaderRequest,
    _: User = Depends(require_role(Role.admin)),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    return {"data": WorshipSetResponse.model_validate(service.assign_leader(id, data))}


@router.get("/{id}/suggested-leader", dependencies=[Depends(valid_uuid("id"))])
async def get_suggested_leader(
    id: str,
    _: User = Depends(get_current_user),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    return {"data": RotationResponse.model_validate(service.suggested_leader(id))}


@router.post("/{id}/publish", dependencies=[Depends(valid_uuid("id"))])
async def publish_worship_set(
    id: str,
    _: User = Depends(require_worship_set_leader),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    return {"data": WorshipSetResponse.model_validate(service.publish(id))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_worship_set(
    id: str,
    data: WorshipSetUpdate,
    _: User = Depends(require_worship_set_leader),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    return {"data": WorshipSetResponse.model_validate(service.update_set(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_worship_set(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: WorshipSetService = Depends(get_worship_set_service),
):
    service.delete_set(id)
