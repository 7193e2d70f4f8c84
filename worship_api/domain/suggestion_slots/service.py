"""Suggestion slot service - Business logic for asking team members to suggest songs"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import SlotStatus, SuggestionSlot, User, WorshipSet
from ...shared.time_utils import utcnow
from .repository import SuggestionSlotRepository
from .schemas import MySlotResponse, SlotAssignUser, SlotCreate, SlotUpdate

logger = logging.getLogger(__name__)


class SuggestionSlotService:
    """Service layer for suggestion slot business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SuggestionSlotRepository()

    def my_assignments(self, current_user: User) -> list[MySlotResponse]:
        """
        The caller's slots, earliest due first.

        A slot still pending after its due date is flagged overdue and
        reported as missed. The stored status is left alone.
        """
        now = utcnow()
        views = []
        for slot in self.repo.list_for_user(self.db, current_user.id):
            view = MySlotResponse.model_validate(slot)
            view.is_overdue = now > slot.due_at and slot.status == SlotStatus.pending.value
            view.suggestion_count = len(slot.suggestions)
            if view.is_overdue:
                view.status = SlotStatus.missed.value
            views.append(view)
        return views

    def list_by_set(self, set_id: str) -> list[SuggestionSlot]:
        return self.repo.list_by_set(self.db, set_id)

    def get_slot(self, slot_id: str) -> SuggestionSlot:
        slot = self.repo.get_by_id(self.db, slot_id)
        if not slot:
            raise HTTPException(status_code=404, detail="Slot not found")
        return slot

    def create_slot(self, data: SlotCreate) -> SuggestionSlot:
        if not self.db.query(WorshipSet).filter(WorshipSet.id == data.set_id).first():
            raise HTTPException(status_code=404, detail="Worship set not found")
        if not self.db.query(User).filter(User.id == data.assigned_user_id).first():
            raise HTTPException(status_code=400, detail="User not found")

        slot = self.repo.create(self.db, **data.model_dump())
        logger.info(f"✅ Opened suggestion slot {slot.id} for user {slot.assigned_user_id} in set {slot.set_id}")
        return slot

    def update_slot(self, slot_id: str, data: SlotUpdate) -> SuggestionSlot:
        slot = self.get_slot(slot_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(slot, key, value)
        if slot.min_songs > slot.max_songs:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="minSongs must be less than or equal to maxSongs")

        self.db.commit()
        self.db.refresh(slot)
        return slot

    def assign_user(self, slot_id: str, data: SlotAssignUser) -> SuggestionSlot:
        """Hand a slot over to someone else"""
        if not self.db.query(User).filter(User.id == data.assigned_user_id).first():
            raise HTTPException(status_code=400, detail="User not found")
        slot = self.repo.get_by_id(self.db, slot_id)
        if not slot:
            raise HTTPException(status_code=404, detail="Suggestion slot not found")

        slot.assigned_user_id = data.assigned_user_id
        self.db.commit()
        self.db.refresh(slot)
        logger.info(f"🔄 Reassigned suggestion slot {slot_id} to user {data.assigned_user_id}")
        return slot

    def delete_slot(self, slot_id: str) -> None:
        self.repo.delete(self.db, self.get_slot(slot_id))
