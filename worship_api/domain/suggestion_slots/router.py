"""Suggestion slot router - FastAPI endpoints for song suggestion slots"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import SlotAssignUser, SlotCreate, SlotResponse, SlotUpdate, SlotWithSuggestions
from .service import SuggestionSlotService

router = APIRouter(prefix="/suggestionSlots", tags=["Suggestion Slots"])

require_planner = require_role(Role.admin, Role.leader)


def get_slot_service(db: Session = Depends(get_db)) -> SuggestionSlotService:
    """Dependency injection for SuggestionSlotService"""
    return SuggestionSlotService(db)


@router.get("/my-assignments")
async def my_assignments(
    current_user: User = Depends(get_current_user),
    service: SuggestionSlotService = Depends(get_slot_service),
):
    """Slots the caller has been asked to fill"""
    return {"data": service.my_assignments(current_user)}


@router.get("/set/{set_id}", dependencies=[Depends(valid_uuid("set_id"))])
async def list_slots_for_set(
    set_id: str,
    _: User = Depends(get_current_user),
    service: SuggestionSlotService = Depends(get_slot_service),
):
    return {"data": [SlotWithSuggestions.model_validate(s) for s in service.list_by_set(set_id)]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_slot(
    id: str,
    _: User = Depends(get_current_user),
    service: SuggestionSlotService = Depends(get_slot_service),
):
    return {"data": SlotWithSuggestions.model_validate(service.get_slot(id))}


@router.post("", status_code=201)
async def create_slot(
    data: SlotCreate,
    _: User = Depends(require_planner),
    service: SuggestionSlotService = Depends(get_slot_service),
):
    return {"data": SlotResponse.model_validate(service.create_slot(data))}


@router.put("/{id}/assign-user", dependencies=[Depends(valid_uuid("id"))])
async def assign_user(
    id: str,
    data: SlotAssignUser,
    _: User = Depends(require_planner),
    service: SuggestionSlotService = Depends(get_slot_service),
):
    return {"data": SlotResponse.model_validate(service.assign_user(id, data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_slot(
    id: str,
    data: SlotUpdate,
    _: User = Depends(require_planner),
    service: SuggestionSlotService = Depends(get_slot_service),
):
    return {"data": SlotResponse.model_validate(service.update_slot(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_slot(
    id: str,
    _: User = Depends(require_planner),
    service: SuggestionSlotService = Depends(get_slot_service),
):
    service.delete_slot(id)
