"""Service router - FastAPI endpoints for scheduled worship services"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.time_utils import to_naive_utc
from ...shared.validators import valid_uuid
from ..assignments.schemas import AssignmentResponse
from .schemas import ServiceAssignmentsUpdate, ServiceCreate, ServiceDetail, ServiceResponse, ServiceUpdate
from .service import ServiceService

router = APIRouter(prefix="/services", tags=["Services"])

require_planner = require_role(Role.admin, Role.leader)


def get_service_service(db: Session = Depends(get_db)) -> ServiceService:
    """Dependency injection for ServiceService"""
    return ServiceService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("")
async def list_services(
    upcoming: bool = Query(False),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    limit: Optional[int] = Query(None, ge=1),
    _: User = Depends(get_current_user),
    service: ServiceService = Depends(get_service_service),
):
    services = service.list_services(upcoming, to_naive_utc(start_date), to_naive_utc(end_date), limit)
    return {"data": [ServiceResponse.model_validate(s) for s in services]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_service(
    id: str,
    _: User = Depends(get_current_user),
    service: ServiceService = Depends(get_service_service),
):
    return {"data": ServiceDetail.model_validate(service.get_service(id))}


@router.post("", status_code=201)
async def create_service(
    data: ServiceCreate,
    _: User = Depends(require_planner),
    service: ServiceService = Depends(get_service_service),
):
    return {"data": ServiceDetail.model_validate(service.create_service(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_service(
    id: str,
    data: ServiceUpdate,
    _: User = Depends(require_planner),
    service: ServiceService = Depends(get_service_service),
):
    return {"data": ServiceDetail.model_validate(service.update_service(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_service(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: ServiceService = Depends(get_service_service),
):
    service.delete_service(id)


# ============================================================================
# INSTRUMENT ASSIGNMENTS
# ============================================================================


@router.get("/{id}/assignments", dependencies=[Depends(valid_uuid("id"))])
async def get_service_assignments(
    id: str,
    _: User = Depends(get_current_user),
    service: ServiceService = Depends(get_service_service),
):
    return {"data": [AssignmentResponse.model_validate(a) for a in service.list_assignments(id)]}


@router.put("/{id}/assignments", dependencies=[Depends(valid_uuid("id"))])
async def update_service_assignments(
    id: str,
    data: ServiceAssignmentsUpdate,
    _: User = Depends(require_planner),
    service: ServiceService = Depends(get_service_service),
):
    """Replace who plays each listed instrument"""
    assignments = service.replace_assignments(id, data)
    return {"data": [AssignmentResponse.model_validate(a) for a in assignments]}
