"""Assignment service - Business logic for inviting musicians to play in a worship set"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import ensure_self_or_roles
from ...models import Assignment, AssignmentStatus, Instrument, Role, User, WorshipSet
from ...shared.time_utils import utcnow
from .repository import AssignmentRepository
from .schemas import AssignmentCreate, AssignmentUpdate

logger = logging.getLogger(__name__)

DUPLICATE_ASSIGNMENT = "This user is already assigned to this instrument for this worship set"


class AssignmentService:
    """Service layer for assignment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AssignmentRepository()

    def list_assignments(self, current_user: User) -> list[Assignment]:
        """Planners see every assignment, musicians only their own"""
        if current_user.has_role(Role.admin, Role.leader):
            return self.repo.list_assignments(self.db)
        return self.repo.list_assignments(self.db, user_id=current_user.id)

    def list_by_set(self, set_id: str) -> list[Assignment]:
        return self.repo.list_by_set(self.db, set_id)

    def get_assignment(self, assignment_id: str) -> Assignment:
        assignment = self.repo.get_by_id(self.db, assignment_id)
        if not assignment:
            raise HTTPException(status_code=404, detail="Assignment not found")
        return assignment

    def create_assignment(self, data: AssignmentCreate, current_user: User) -> Assignment:
        worship_set = self.db.query(WorshipSet).filter(WorshipSet.id == data.set_id).first()
        if not worship_set:
            raise HTTPException(status_code=404, detail="Worship set not found")
        if not current_user.is_admin and worship_set.leader_user_id != current_user.id:
            raise HTTPException(
                status_code=403,
                detail="Only the worship set leader or an admin can create assignments",
            )

        instrument = self.db.query(Instrument).filter(Instrument.id == data.instrument_id).first()
        if not instrument:
            raise HTTPException(status_code=404, detail="Instrument not found")
        if not self.db.query(User).filter(User.id == data.user_id).first():
            raise HTTPException(status_code=404, detail="User not found")

        if self.repo.count_for_instrument(self.db, data.set_id, data.instrument_id) >= instrument.max_per_set:
            raise HTTPException(
                status_code=400,
                detail=f"Maximum {instrument.max_per_set} {instrument.display_name}(s) allowed per worship set",
            )
        if self.repo.find(self.db, data.set_id, data.instrument_id, data.user_id):
            raise HTTPException(status_code=400, detail=DUPLICATE_ASSIGNMENT)

        assignment = self.repo.add(
            self.db,
            set_id=data.set_id,
            instrument_id=data.instrument_id,
            user_id=data.user_id,
            status=data.status or AssignmentStatus.invited.value,
            invited_at=utcnow(),
        )
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_ASSIGNMENT) from e

        self.db.refresh(assignment)
        logger.info(f"✅ Invited user {data.user_id} to play {instrument.code} in set {data.set_id}")
        return assignment

    def update_assignment(self, assignment_id: str, data: AssignmentUpdate, current_user: User) -> Assignment:
        """The assignee responds; planners may also change the status"""
        assignment = self.get_assignment(assignment_id)
        ensure_self_or_roles(current_user, assignment.user_id, Role.admin, Role.leader)

        assignment.status = data.status
        assignment.responded_at = utcnow()
        self.db.commit()
        self.db.refresh(assignment)
        return assignment

    def delete_assignment(self, assignment_id: str) -> None:
        assignment = self.get_assignment(assignment_id)
        self.db.delete(assignment)
        self.db.commit()
