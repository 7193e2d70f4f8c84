"""Availability router - FastAPI endpoints for team member availability"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.validators import valid_uuid
from .schemas import AvailabilityCreate, AvailabilityResponse, AvailabilityUpdate
from .service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["Availability"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


@router.get("/user/{user_id}", dependencies=[Depends(valid_uuid("user_id"))])
async def list_availability_for_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service),
):
    records = service.list_for_user(user_id, current_user)
    return {"data": [AvailabilityResponse.model_validate(r) for r in records]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_availability(
    id: str,
    current_user: User = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service),
):
    return {"data": AvailabilityResponse.model_validate(service.get_record(id, current_user))}


@router.post("", status_code=201)
async def create_availability(
    data: AvailabilityCreate,
    current_user: User = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service),
):
    return {"data": AvailabilityResponse.model_validate(service.create_record(data, current_user))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_availability(
    id: str,
    data: AvailabilityUpdate,
    current_user: User = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service),
):
    return {"data": AvailabilityResponse.model_validate(service.update_record(id, data, current_user))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_availability(
    id: str,
    current_user: User = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service),
):
    service.delete_record(id, current_user)
