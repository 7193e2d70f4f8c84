"""Leader rotation repository - Database operations for rotations and the services they staff"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import LeaderRotation, Service, WorshipSet


class LeaderRotationRepository:
    """Repository for leader rotation database operations"""

    @staticmethod
    def list_active(db: Session) -> list[LeaderRotation]:
        """Active rotations across all service types"""
        return (
            db.query(LeaderRotation)
            .options(joinedload(LeaderRotation.user), joinedload(LeaderRotation.service_type))
            .filter(LeaderRotation.is_active.is_(True))
            .order_by(LeaderRotation.service_type_id.asc(), LeaderRotation.rotation_order.asc())
            .all()
        )

    @staticmethod
    def list_active_for_type(db: Session, service_type_id: str) -> list[LeaderRotation]:
        """Active rotations of one service type in rotation order"""
        return (
            db.query(LeaderRotation)
            .options(joinedload(LeaderRotation.user))
            .filter(
                LeaderRotation.service_type_id == service_type_id,
                LeaderRotation.is_active.is_(True),
            )
            .order_by(LeaderRotation.rotation_order.asc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, rotation_id: str) -> Optional[LeaderRotation]:
        return db.query(LeaderRotation).filter(LeaderRotation.id == rotation_id).first()

    @staticmethod
    def get_by_ids(db: Session, service_type_id: str, rotation_ids: list[str]) -> list[LeaderRotation]:
        return (
            db.query(LeaderRotation)
            .filter(
                LeaderRotation.service_type_id == service_type_id,
                LeaderRotation.id.in_(rotation_ids),
            )
            .all()
        )

    @staticmethod
    def get_by_order(db: Session, service_type_id: str, rotation_order: int) -> Optional[LeaderRotation]:
        return (
            db.query(LeaderRotation)
            .filter(
                LeaderRotation.service_type_id == service_type_id,
                LeaderRotation.rotation_order == rotation_order,
            )
            .first()
        )

    @staticmethod
    def order_bounds(db: Session, service_type_id: str) -> tuple[int, int]:
        """(lowest, highest) rotation_order of the type, active or not; (0, 0) when empty"""
        lowest, highest = (
            db.query(func.min(LeaderRotation.rotation_order), func.max(LeaderRotation.rotation_order))
            .filter(LeaderRotation.service_type_id == service_type_id)
            .one()
        )
        return lowest or 0, highest or 0

    @staticmethod
    def create(db: Session, **rotation_data) -> LeaderRotation:
        rotation = LeaderRotation(**rotation_data)
        db.add(rotation)
        db.commit()
        db.refresh(rotation)
        return rotation

    @staticmethod
    def future_services(db: Session, service_type_id: str, since: datetime) -> list[Service]:
        """Services of the type on or after `since`, earliest first"""
        return (
            db.query(Service)
            .options(joinedload(Service.worship_set))
            .filter(Service.service_type_id == service_type_id, Service.service_date >= since)
            .order_by(Service.service_date.asc())
            .all()
        )

    @staticmethod
    def last_led_service(db: Session, service_type_id: str) -> Optional[Service]:
        """Latest-dated service of the type whose worship set has a leader"""
        return (
            db.query(Service)
            .join(WorshipSet, WorshipSet.service_id == Service.id)
            .options(joinedload(Service.worship_set))
            .filter(
                Service.service_type_id == service_type_id,
                WorshipSet.leader_user_id.isnot(None),
            )
            .order_by(Service.service_date.desc())
            .first()
        )
