"""Leader rotation router - FastAPI endpoints for the worship leader rotation"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import RotationCreate, RotationReorder, RotationResponse, RotationUpdate
from .service import LeaderRotationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leader-rotations", tags=["Leader Rotations"])


def get_rotation_service(db: Session = Depends(get_db)) -> LeaderRotationService:
    """Dependency injection for LeaderRotationService"""
    return LeaderRotationService(db)


def _serialize(rotations):
    return [RotationResponse.model_validate(r) for r in rotations]


@router.get("")
async def list_rotations(
    _: User = Depends(get_current_user),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    """Active rotations grouped by service type, in rotation order"""
    return {"data": _serialize(service.list_rotations())}


@router.get("/next/{service_type_id}", dependencies=[Depends(valid_uuid("service_type_id"))])
async def get_next_leader(
    service_type_id: str,
    _: User = Depends(get_current_user),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    """Who leads after the most recently led service"""
    return {"data": RotationResponse.model_validate(service.get_next_leader(service_type_id))}


@router.get("/by-service-type/{service_type_id}", dependencies=[Depends(valid_uuid("service_type_id"))])
async def list_rotations_for_service_type(
    service_type_id: str,
    _: User = Depends(get_current_user),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    return {"data": _serialize(service.list_for_service_type(service_type_id))}


@router.put("/reorder")
async def reorder_rotations(
    data: RotationReorder,
    _: User = Depends(require_role(Role.admin)),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    """Rewrite rotation orders to follow the given id list"""
    return {"data": _serialize(service.reorder(data))}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_rotation(
    id: str,
    _: User = Depends(get_current_user),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    return {"data": RotationResponse.model_validate(service.get_rotation(id))}


@router.post("", status_code=201)
async def create_rotation(
    data: RotationCreate,
    _: User = Depends(require_role(Role.admin)),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    return {"data": RotationResponse.model_validate(service.create_rotation(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_rotation(
    id: str,
    data: RotationUpdate,
    _: User = Depends(require_role(Role.admin)),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    return {"data": RotationResponse.model_validate(service.update_rotation(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_rotation(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: LeaderRotationService = Depends(get_rotation_service),
):
    """Soft delete and recalculate upcoming leaders"""
    service.delete_rotation(id)
