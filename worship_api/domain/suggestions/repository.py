"""Suggestion repository - Database operations for song suggestions"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Assignment, Song, Suggestion, SuggestionSlot


class SuggestionRepository:
    """Repository for suggestion database operations"""

    @staticmethod
    def list_by_slot(db: Session, slot_id: str) -> list[Suggestion]:
        return (
            db.query(Suggestion)
            .options(joinedload(Suggestion.song).selectinload(Song.versions))
            .filter(Suggestion.slot_id == slot_id)
            .order_by(Suggestion.created_at.asc())
            .all()
        )

    @staticmethod
    def slots_for_set(db: Session, set_id: str) -> list[SuggestionSlot]:
        """Slots of a set with their assignee and suggestions (song and versions)"""
        return (
            db.query(SuggestionSlot)
            .options(
                joinedload(SuggestionSlot.assigned_user),
                selectinload(SuggestionSlot.suggestions).joinedload(Suggestion.song).selectinload(Song.versions),
            )
            .filter(SuggestionSlot.set_id == set_id)
            .order_by(SuggestionSlot.due_at.asc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, suggestion_id: str) -> Optional[Suggestion]:
        return db.query(Suggestion).filter(Suggestion.id == suggestion_id).first()

    @staticmethod
    def find_in_slot(db: Session, slot_id: str, song_id: str) -> Optional[Suggestion]:
        return db.query(Suggestion).filter(Suggestion.slot_id == slot_id, Suggestion.song_id == song_id).first()

    @staticmethod
    def count_in_slot(db: Session, slot_id: str) -> int:
        return db.query(Suggestion).filter(Suggestion.slot_id == slot_id).count()

    @staticmethod
    def user_takes_part_in_set(db: Session, set_id: str, user_id: str) -> bool:
        """True when the user plays in the set or holds one of its suggestion slots"""
        has_assignment = (
            db.query(Assignment.id).filter(Assignment.set_id == set_id, Assignment.user_id == user_id).first()
        )
        if has_assignment:
            return True
        has_slot = (
            db.query(SuggestionSlot.id)
            .filter(SuggestionSlot.set_id == set_id, SuggestionSlot.assigned_user_id == user_id)
            .first()
        )
        return has_slot is not None
