"""Default assignment repository - Database operations for per-service-type default musicians"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import DefaultAssignment, Instrument


class DefaultAssignmentRepository:
    """Repository for default assignment database operations"""

    @staticmethod
    def list_defaults(db: Session, service_type_id: Optional[str] = None) -> list[DefaultAssignment]:
        """All defaults, optionally for one service type, ordered by type then instrument"""
        query = (
            db.query(DefaultAssignment)
            .join(Instrument, Instrument.id == DefaultAssignment.instrument_id)
            .options(
                joinedload(DefaultAssignment.instrument),
                joinedload(DefaultAssignment.user),
                joinedload(DefaultAssignment.service_type),
            )
        )
        if service_type_id:
            query = query.filter(DefaultAssignment.service_type_id == service_type_id)
        return query.order_by(DefaultAssignment.service_type_id.asc(), Instrument.display_name.asc()).all()

    @staticmethod
    def list_for_service_type(db: Session, service_type_id: str) -> list[DefaultAssignment]:
        return db.query(DefaultAssignment).filter(DefaultAssignment.service_type_id == service_type_id).all()

    @staticmethod
    def get_by_id(db: Session, default_id: str) -> Optional[DefaultAssignment]:
        return db.query(DefaultAssignment).filter(DefaultAssignment.id == default_id).first()

    @staticmethod
    def get_by_type_and_instrument(
        db: Session, service_type_id: str, instrument_id: str
    ) -> Optional[DefaultAssignment]:
        return (
            db.query(DefaultAssignment)
            .filter(
                DefaultAssignment.service_type_id == service_type_id,
                DefaultAssignment.instrument_id == instrument_id,
            )
            .first()
        )

    @staticmethod
    def create(db: Session, **data) -> DefaultAssignment:
        default = DefaultAssignment(**data)
        db.add(default)
        db.commit()
        db.refresh(default)
        return default

    @staticmethod
    def delete(db: Session, default: DefaultAssignment) -> None:
        db.delete(default)
        db.commit()
