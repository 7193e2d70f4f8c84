"""Service type repository - Database operations for service types"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service, ServiceType


class ServiceTypeRepository:
    """Repository for service type database operations"""

    @staticmethod
    def list_service_types(db: Session) -> list[ServiceType]:
        return db.query(ServiceType).order_by(ServiceType.name.asc()).all()

    @staticmethod
    def get_by_id(db: Session, service_type_id: str) -> Optional[ServiceType]:
        return db.query(ServiceType).filter(ServiceType.id == service_type_id).first()

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[ServiceType]:
        return db.query(ServiceType).filter(ServiceType.name == name).first()

    @staticmethod
    def create(db: Session, **data) -> ServiceType:
        service_type = ServiceType(**data)
        db.add(service_type)
        db.commit()
        db.refresh(service_type)
        return service_type

    @staticmethod
    def delete(db: Session, service_type: ServiceType) -> None:
        db.delete(service_type)
        db.commit()

    @staticmethod
    def services_between(db: Session, service_type_id: str, start: datetime, end: datetime) -> list[Service]:
        """Services of the type with start <= service_date <= end"""
        return (
            db.query(Service)
            .filter(
                Service.service_type_id == service_type_id,
                Service.service_date >= start,
                Service.service_date <= end,
            )
            .all()
        )
