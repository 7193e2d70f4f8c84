"""Worship set repository - Database operations for worship sets"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import DefaultAssignment, Service, SetSong, Song, SongVersion, Suggestion, SuggestionSlot, WorshipSet


class WorshipSetRepository:
    """Repository for worship set database operations"""

    @staticmethod
    def list_sets(db: Session) -> list[WorshipSet]:
        """All sets, the latest service first"""
        return (
            db.query(WorshipSet)
            .join(WorshipSet.service)
            .options(
                joinedload(WorshipSet.service).joinedload(Service.service_type),
                joinedload(WorshipSet.leader_user),
                selectinload(WorshipSet.set_songs),
            )
            .order_by(Service.service_date.desc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, set_id: str) -> Optional[WorshipSet]:
        return db.query(WorshipSet).filter(WorshipSet.id == set_id).first()

    @staticmethod
    def get_by_service_id(db: Session, service_id: str) -> Optional[WorshipSet]:
        """A service's set with its running order and suggestion slots"""
        return (
            db.query(WorshipSet)
            .options(
                joinedload(WorshipSet.service).joinedload(Service.service_type),
                joinedload(WorshipSet.leader_user),
                selectinload(WorshipSet.set_songs).joinedload(SetSong.song_version).joinedload(SongVersion.song),
                selectinload(WorshipSet.suggestion_slots)
                .selectinload(SuggestionSlot.suggestions)
                .joinedload(Suggestion.song)
                .selectinload(Song.versions),
            )
            .filter(WorshipSet.service_id == service_id)
            .first()
        )

    @staticmethod
    def default_assignments_for_type(db: Session, service_type_id: str) -> list[DefaultAssignment]:
        return db.query(DefaultAssignment).filter(DefaultAssignment.service_type_id == service_type_id).all()

    @staticmethod
    def delete(db: Session, worship_set: WorshipSet) -> None:
        db.delete(worship_set)
        db.commit()
