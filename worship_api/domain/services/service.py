"""Service service - Business logic for scheduled worship services"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Assignment, AssignmentStatus, Service, ServiceStatus, ServiceType, SetStatus, User, WorshipSet
from ...shared.time_utils import start_of_today, utcnow
from ..assignments.repository import AssignmentRepository
from .repository import ServiceRepository
from .schemas import ServiceAssignmentsUpdate, ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)

DUPLICATE_SERVICE = "A service of this type already exists for the specified date"
SERVICE_STATUSES = {s.value for s in ServiceStatus}


class ServiceService:
    """Service layer for scheduled service business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()
        self.assignment_repo = AssignmentRepository()

    def list_services(
        self,
        upcoming: bool = False,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Service]:
        """`upcoming` wins over an explicit date range"""
        if upcoming:
            return self.repo.list_services(self.db, since=start_of_today(), limit=limit)
        return self.repo.list_services(self.db, since=start_date, until=end_date, limit=limit)

    def get_service(self, service_id: str) -> Service:
        service = self.repo.get_by_id(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def _ensure_service_type(self, service_type_id: str) -> None:
        if not self.db.query(ServiceType).filter(ServiceType.id == service_type_id).first():
            raise HTTPException(status_code=404, detail="Service type not found")

    def _ensure_user(self, user_id: str) -> None:
        if not self.db.query(User).filter(User.id == user_id).first():
            raise HTTPException(status_code=400, detail="User not found")

    def create_service(self, data: ServiceCreate) -> Service:
        """Create a service together with its draft worship set"""
        if not data.date:
            raise HTTPException(status_code=400, detail="Date is required")
        if not data.service_type_id:
            raise HTTPException(status_code=400, detail="Service type ID is required")
        self._ensure_service_type(data.service_type_id)
        if self.repo.find_by_type_and_date(self.db, data.service_type_id, data.date):
            raise HTTPException(status_code=400, detail=DUPLICATE_SERVICE)

        service = Service(
            service_type_id=data.service_type_id,
            service_date=data.date,
            status=ServiceStatus.planned.value,
        )
        service.worship_set = WorshipSet(status=SetStatus.draft.value, notes=data.notes)
        self.db.add(service)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_SERVICE) from e

        self.db.refresh(service)
        logger.info(f"✅ Created service {service.id} on {service.service_date:%Y-%m-%d}")
        return service

    def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)
        payload = data.model_dump(exclude_unset=True)

        if payload.get("date"):
            service.service_date = payload["date"]
        if payload.get("service_type_id"):
            self._ensure_service_type(payload["service_type_id"])
            service.service_type_id = payload["service_type_id"]
        if payload.get("status") in SERVICE_STATUSES:
            service.status = payload["status"]
        if "leader_id" in payload:
            leader_id = payload["leader_id"] or None
            if leader_id:
                self._ensure_user(leader_id)
            service.leader_id = leader_id
        if "worship_set_leader_id" in payload and service.worship_set is not None:
            # Manual override of the rotation for this one set
            set_leader_id = payload["worship_set_leader_id"] or None
            if set_leader_id:
                self._ensure_user(set_leader_id)
            service.worship_set.leader_user_id = set_leader_id

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_SERVICE) from e
        self.db.refresh(service)
        return service

    def delete_service(self, service_id: str) -> None:
        """Deletes the worship set and everything planned in it as well"""
        self.repo.delete(self.db, self.get_service(service_id))
        logger.info(f"🗑️ Deleted service {service_id}")

    def list_assignments(self, service_id: str) -> list[Assignment]:
        service = self.get_service(service_id)
        if service.worship_set is None:
            return []
        return self.assignment_repo.list_by_set(self.db, service.worship_set.id)

    def replace_assignments(self, service_id: str, data: ServiceAssignmentsUpdate) -> list[Assignment]:
        """
        Set who plays each listed instrument.

        Each instrument's existing assignments are replaced by one `invited`
        assignment, or none when the user id is blank. Instruments not listed
        are untouched. All changes commit together.
        """
        service = self.get_service(service_id)
        worship_set = service.worship_set
        if worship_set is None:
            raise HTTPException(status_code=400, detail="Service does not have a worship set")

        now = utcnow()
        try:
            for instrument_id, user_id in data.assignments.items():
                self.assignment_repo.delete_for_instrument(self.db, worship_set.id, instrument_id)
                if user_id and user_id.strip():
                    self.assignment_repo.add(
                        self.db,
                        set_id=worship_set.id,
                        instrument_id=instrument_id,
                        user_id=user_id.strip(),
                        status=AssignmentStatus.invited.value,
                        invited_at=now,
                    )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="Invalid instrument or user in assignments") from e

        logger.info(f"🔄 Updated {len(data.assignments)} instrument assignments for service {service_id}")
        return self.assignment_repo.list_by_set(self.db, worship_set.id)
