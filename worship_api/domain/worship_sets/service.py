"""Worship set service - Business logic for planning the music of a service"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Assignment, AssignmentStatus, LeaderRotation, Role, Service, SetStatus, User, WorshipSet
from ...shared.time_utils import utcnow
from ..leader_rotations.scheduler import LeaderScheduler
from ..set_songs.service import NEW_SONG_FAMILIARITY_THRESHOLD
from .repository import WorshipSetRepository
from .schemas import AssignLeaderRequest, WorshipSetCreate, WorshipSetUpdate

logger = logging.getLogger(__name__)

MAX_PUBLISHED_SONGS = 6
MAX_PUBLISHED_NEW_SONGS = 1


class WorshipSetService:
    """Service layer for worship set business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorshipSetRepository()

    def list_sets(self) -> list[WorshipSet]:
        return self.repo.list_sets(self.db)

    def get_set(self, set_id: str) -> WorshipSet:
        worship_set = self.repo.get_by_id(self.db, set_id)
        if not worship_set:
            raise HTTPException(status_code=404, detail="Worship set not found")
        return worship_set

    def get_for_service(self, service_id: str) -> WorshipSet:
        worship_set = self.repo.get_by_service_id(self.db, service_id)
        if not worship_set:
            raise HTTPException(status_code=404, detail="Worship set not found")
        return worship_set

    def create_set(self, data: WorshipSetCreate) -> WorshipSet:
        """Create a set and invite the service type's default players"""
        service = self.db.query(Service).filter(Service.id == data.service_id).first()
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        if service.worship_set is not None:
            raise HTTPException(status_code=400, detail="This service already has a worship set")

        worship_set = WorshipSet(
            service_id=service.id,
            status=SetStatus.draft.value,
            suggest_due_at=data.suggest_due_at,
            notes=data.notes,
        )
        now = utcnow()
        defaults = self.repo.default_assignments_for_type(self.db, service.service_type_id)
        worship_set.assignments = [
            Assignment(
                instrument_id=default.instrument_id,
                user_id=default.user_id,
                status=AssignmentStatus.invited.value,
                invited_at=now,
            )
            for default in defaults
        ]
        self.db.add(worship_set)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="This service already has a worship set") from e

        self.db.refresh(worship_set)
        logger.info(f"✅ Created worship set {worship_set.id} with {len(defaults)} default assignments")
        return worship_set

    def _check_publishable(self, worship_set: WorshipSet) -> None:
        set_songs = worship_set.set_songs
        if len(set_songs) > MAX_PUBLISHED_SONGS:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot publish worship set with more than {MAX_PUBLISHED_SONGS} songs",
            )
        new_songs = [
            s for s in set_songs if s.song_version.song.familiarity_score < NEW_SONG_FAMILIARITY_THRESHOLD
        ]
        if len(new_songs) > MAX_PUBLISHED_NEW_SONGS:
            raise HTTPException(
                status_code=400,
                detail=(
                    f"Cannot publish worship set with more than {MAX_PUBLISHED_NEW_SONGS} new song "
                    f"(familiarity score < {NEW_SONG_FAMILIARITY_THRESHOLD})"
                ),
            )

    def update_set(self, set_id: str, data: WorshipSetUpdate) -> WorshipSet:
        """
        Update status, suggestion due date or notes.

        Publishing a draft requires at most six songs of which at most one
        is new to the congregation.
        """
        worship_set = self.get_set(set_id)
        updates = data.model_dump(exclude_unset=True)

        status = updates.get("status")
        if status == SetStatus.published.value and worship_set.status == SetStatus.draft.value:
            self._check_publishable(worship_set)

        if status:
            worship_set.status = status
        if updates.get("suggest_due_at"):
            worship_set.suggest_due_at = updates["suggest_due_at"]
        if "notes" in updates:
            worship_set.notes = updates["notes"]

        self.db.commit()
        self.db.refresh(worship_set)
        if status:
            logger.info(f"🔄 Worship set {set_id} is now {worship_set.status}")
        return worship_set

    def publish(self, set_id: str) -> WorshipSet:
        return self.update_set(set_id, WorshipSetUpdate(status=SetStatus.published))

    def delete_set(self, set_id: str) -> None:
        self.repo.delete(self.db, self.get_set(set_id))
        logger.info(f"🗑️ Deleted worship set {set_id}")

    def assign_leader(self, set_id: str, data: AssignLeaderRequest) -> WorshipSet:
        """Override the rotation for one set"""
        leader_id: Optional[str] = data.leader_user_id
        if leader_id:
            user = self.db.query(User).filter(User.id == leader_id).first()
            if not user or not user.has_role(Role.leader):
                raise HTTPException(status_code=400, detail="User must have leader role to be assigned")

        worship_set = self.get_set(set_id)
        worship_set.leader_user_id = leader_id
        self.db.commit()
        self.db.refresh(worship_set)
        logger.info(f"👤 Worship set {set_id} leader set to {leader_id or 'nobody'}")
        return worship_set

    def suggested_leader(self, set_id: str) -> LeaderRotation:
        """Who the rotation would pick next for this set's service type"""
        worship_set = self.get_set(set_id)
        return LeaderScheduler(self.db).next_leader(worship_set.service.service_type_id)
