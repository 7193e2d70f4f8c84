"""Suggestion router - FastAPI endpoints for song suggestions"""

from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.validators import valid_uuid
from .schemas import (
    SuggestionApprove,
    SuggestionCreate,
    SuggestionDecision,
    SuggestionResponse,
    SuggestionUpdate,
    SuggestionWithSong,
)
from .service import SuggestionService

router = APIRouter(prefix="/suggestions", tags=["Suggestions"])


def get_suggestion_service(db: Session = Depends(get_db)) -> SuggestionService:
    """Dependency injection for SuggestionService"""
    return SuggestionService(db)


def _decision(result: dict) -> SuggestionDecision:
    return SuggestionDecision(
        message=result["message"],
        suggestion=SuggestionResponse.model_validate(result["suggestion"]),
    )


@router.get("/slot/{slot_id}", dependencies=[Depends(valid_uuid("slot_id"))])
async def list_suggestions_for_slot(
    slot_id: str,
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    suggestions = service.list_by_slot(slot_id, current_user)
    return {"data": [SuggestionWithSong.model_validate(s) for s in suggestions]}


@router.get("/by-worship-set/{worship_set_id}", dependencies=[Depends(valid_uuid("worship_set_id"))])
async def list_suggestions_for_worship_set(
    worship_set_id: str,
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    """All suggestions for a set with who made them, for the set builder"""
    return {"data": service.list_by_worship_set(worship_set_id, current_user)}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_suggestion(
    id: str,
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    return {"data": SuggestionWithSong.model_validate(service.get_for_user(id, current_user))}


@router.post("", status_code=201)
async def create_suggestion(
    data: SuggestionCreate,
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    return {"data": SuggestionWithSong.model_validate(service.create_suggestion(data, current_user))}


@router.put("/{id}/approve", dependencies=[Depends(valid_uuid("id"))])
async def approve_suggestion(
    id: str,
    data: Optional[SuggestionApprove] = Body(None),
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    return {"data": _decision(service.approve(id, data or SuggestionApprove(), current_user))}


@router.put("/{id}/reject", dependencies=[Depends(valid_uuid("id"))])
async def reject_suggestion(
    id: str,
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    return {"data": _decision(service.reject(id, current_user))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_suggestion(
    id: str,
    data: SuggestionUpdate,
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    return {"data": SuggestionResponse.model_validate(service.update_suggestion(id, data, current_user))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_suggestion(
    id: str,
    current_user: User = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
):
    service.delete_suggestion(id, current_user)
