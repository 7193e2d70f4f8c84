"""Service repository - Database operations for scheduled services"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Assignment, Service, WorshipSet


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def list_services(
        db: Session,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Service]:
        """Services in date order, optionally bounded (inclusive) and capped"""
        query = db.query(Service).options(
            joinedload(Service.service_type),
            joinedload(Service.leader),
            joinedload(Service.worship_set).joinedload(WorshipSet.leader_user),
            joinedload(Service.worship_set).selectinload(WorshipSet.assignments).joinedload(Assignment.user),
            joinedload(Service.worship_set).selectinload(WorshipSet.set_songs),
        )
        if since:
            query = query.filter(Service.service_date >= since)
        if until:
            query = query.filter(Service.service_date <= until)
        query = query.order_by(Service.service_date.asc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_by_id(db: Session, service_id: str) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def find_by_type_and_date(db: Session, service_type_id: str, service_date: datetime) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.service_type_id == service_type_id, Service.service_date == service_date)
            .first()
        )

    @staticmethod
    def delete(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()

