"""Suggestion slot repository - Database operations for song suggestion slots"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Service, Song, Suggestion, SuggestionSlot, WorshipSet


class SuggestionSlotRepository:
    """Repository for suggestion slot database operations"""

    @staticmethod
    def _with_suggestions(db: Session):
        return db.query(SuggestionSlot).options(
            joinedload(SuggestionSlot.assigned_user),
            selectinload(SuggestionSlot.suggestions).joinedload(Suggestion.song).selectinload(Song.versions),
        )

    @classmethod
    def list_for_user(cls, db: Session, user_id: str) -> list[SuggestionSlot]:
        """A user's slots with their set and service, earliest due first"""
        return (
            cls._with_suggestions(db)
            .options(
                joinedload(SuggestionSlot.worship_set)
                .joinedload(WorshipSet.service)
                .joinedload(Service.service_type)
            )
            .filter(SuggestionSlot.assigned_user_id == user_id)
            .order_by(SuggestionSlot.due_at.asc())
            .all()
        )

    @classmethod
    def list_by_set(cls, db: Session, set_id: str) -> list[SuggestionSlot]:
        return cls._with_suggestions(db).filter(SuggestionSlot.set_id == set_id).order_by(SuggestionSlot.due_at.asc()).all()

    @staticmethod
    def get_by_id(db: Session, slot_id: str) -> Optional[SuggestionSlot]:
        return db.query(SuggestionSlot).filter(SuggestionSlot.id == slot_id).first()

    @staticmethod
    def create(db: Session, **data) -> SuggestionSlot:
        slot = SuggestionSlot(**data)
        db.add(slot)
        db.commit()
        db.refresh(slot)
        return slot

    @staticmethod
    def delete(db: Session, slot: SuggestionSlot) -> None:
        db.delete(slot)
        db.commit()
