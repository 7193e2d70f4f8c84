"""Service type service - Business logic for service types and yearly service generation"""

import logging
from datetime import datetime, time
from typing import Optional

from dateutil.rrule import rrulestr
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Service, ServiceStatus, ServiceType, SetStatus, WorshipSet
from ...shared.time_utils import utcnow
from ..leader_rotations.scheduler import LeaderScheduler, leader_at
from .repository import ServiceTypeRepository
from .schemas import GeneratedService, ServiceTypeCreate, ServiceTypeUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A service type with this name already exists"


def occurrences_in_year(rule_text: str, year: int) -> list[datetime]:
    """
    Expand an RRULE over one calendar year.

    DTSTART defaults to January 1st of the year when the rule carries none.
    Raises ValueError for rules dateutil cannot parse.
    """
    start = datetime(year, 1, 1)
    end = datetime(year, 12, 31, 23, 59, 59)
    try:
        rule = rrulestr(rule_text.strip(), dtstart=start, ignoretz=True)
    except Exception as e:
        raise ValueError(str(e)) from e
    return list(rule.between(start, end, inc=True))


class ServiceTypeService:
    """Service layer for service type business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceTypeRepository()

    def list_service_types(self) -> list[ServiceType]:
        return self.repo.list_service_types(self.db)

    def get_service_type(self, service_type_id: str) -> ServiceType:
        service_type = self.repo.get_by_id(self.db, service_type_id)
        if not service_type:
            raise HTTPException(status_code=404, detail="Service type not found")
        return service_type

    def create_service_type(self, data: ServiceTypeCreate) -> ServiceType:
        if self.repo.get_by_name(self.db, data.name):
            raise HTTPException(status_code=400, detail=DUPLICATE_NAME)
        try:
            return self.repo.create(self.db, **data.model_dump())
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_NAME) from e

    def update_service_type(self, service_type_id: str, data: ServiceTypeUpdate) -> ServiceType:
        service_type = self.get_service_type(service_type_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("name") and updates["name"] != service_type.name:
            if self.repo.get_by_name(self.db, updates["name"]):
                raise HTTPException(status_code=400, detail=DUPLICATE_NAME)

        for key, value in updates.items():
            # rrule may be cleared, the rest are required columns
            if value is not None or key == "rrule":
                setattr(service_type, key, value)
        self.db.commit()
        self.db.refresh(service_type)
        return service_type

    def delete_service_type(self, service_type_id: str) -> None:
        service_type = self.get_service_type(service_type_id)
        try:
            self.repo.delete(self.db, service_type)
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(
                status_code=400,
                detail="Cannot delete service type that has services or leader rotations",
            ) from e

    def generate_services(self, service_type_id: str, year: Optional[int] = None) -> tuple[dict, bool]:
        """
        Create every service the type's RRULE yields in `year`.

        Dates already holding a service of this type are skipped. New services get
        a draft worship set whose leader continues the rotation after the last
        led service. Returns (payload, created_any).
        """
        service_type = self.get_service_type(service_type_id)
        if not service_type.rrule:
            raise HTTPException(
                status_code=400, detail="Service type does not have a recurrence rule (RRULE)"
            )

        year = year or utcnow().year
        try:
            dates = occurrences_in_year(service_type.rrule, year)
        except ValueError as e:
            logger.warning(f"⚠️ Invalid RRULE on service type {service_type_id}: {e}")
            raise HTTPException(status_code=400, detail="Invalid RRULE format") from e
        if not dates:
            raise HTTPException(
                status_code=400, detail="No dates generated from RRULE for the specified year"
            )

        existing_days = {
            s.service_date.date()
            for s in self.repo.services_between(
                self.db,
                service_type_id,
                datetime.combine(dates[0].date(), time.min),
                datetime.combine(dates[-1].date(), time.max),
            )
        }
        new_dates = [d for d in dates if d.date() not in existing_days]
        skipped = len(dates) - len(new_dates)

        if not new_dates:
            return {
                "created": 0,
                "skipped": skipped,
                "message": "All services for this year already exist",
            }, False

        scheduler = LeaderScheduler(self.db)
        rotations = scheduler.active_rotations(service_type_id)
        start_index = scheduler.next_start_index(service_type_id, rotations)

        services = []
        for offset, service_date in enumerate(new_dates):
            service = Service(
                service_type_id=service_type_id,
                service_date=service_date,
                status=ServiceStatus.planned.value,
            )
            service.worship_set = WorshipSet(
                status=SetStatus.draft.value,
                leader_user_id=leader_at(rotations, start_index + offset),
            )
            self.db.add(service)
            services.append(service)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(
                status_code=400, detail="A service of this type already exists for the specified date"
            ) from e

        leaders_assigned = sum(1 for s in services if s.worship_set.leader_user_id)
        logger.info(
            f"✅ Generated {len(services)} services for {service_type.name} in {year} "
            f"({skipped} skipped, {leaders_assigned} with leaders)"
        )
        return {
            "created": len(services),
            "skipped": skipped,
            "year": year,
            "leadersAssigned": leaders_assigned,
            "services": [
                GeneratedService(
                    id=s.id,
                    service_date=s.service_date,
                    status=s.status,
                    worship_set_id=s.worship_set.id,
                    leader_user_id=s.worship_set.leader_user_id,
                )
                for s in services
            ],
        }, True
