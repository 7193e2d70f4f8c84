"""Availability service - Business logic for when team members can serve"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import ensure_self_or_roles
from ...models import Availability, Role, User
from .schemas import AvailabilityCreate, AvailabilityUpdate

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service layer for availability business logic"""

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str, current_user: User) -> list[Availability]:
        ensure_self_or_roles(current_user, user_id, Role.admin, Role.leader)
        return (
            self.db.query(Availability)
            .filter(Availability.user_id == user_id)
            .order_by(Availability.start.asc())
            .all()
        )

    def _get_record(self, record_id: str) -> Availability:
        record = self.db.query(Availability).filter(Availability.id == record_id).first()
        if not record:
            raise HTTPException(status_code=404, detail="Availability not found")
        return record

    def get_record(self, record_id: str, current_user: User) -> Availability:
        record = self._get_record(record_id)
        ensure_self_or_roles(current_user, record.user_id, Role.admin, Role.leader)
        return record

    def create_record(self, data: AvailabilityCreate, current_user: User) -> Availability:
        """Always recorded for the caller"""
        record = Availability(user_id=current_user.id, **data.model_dump())
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update_record(self, record_id: str, data: AvailabilityUpdate, current_user: User) -> Availability:
        record = self._get_record(record_id)
        ensure_self_or_roles(current_user, record.user_id)

        updates = data.model_dump(exclude_unset=True)
        for key in ("start", "end"):
            if updates.get(key):
                setattr(record, key, updates[key])
        if "notes" in updates:
            record.notes = updates["notes"]
        if record.end < record.start:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="end must not be before start")

        self.db.commit()
        self.db.refresh(record)
        return record

    def delete_record(self, record_id: str, current_user: User) -> None:
        record = self._get_record(record_id)
        ensure_self_or_roles(current_user, record.user_id)
        self.db.delete(record)
        self.db.commit()
