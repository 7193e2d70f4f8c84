"""Leader rotation service - Business logic for managing who leads worship, and in what order"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import LeaderRotation, Role, ServiceType, User
from .repository import LeaderRotationRepository
from .scheduler import LeaderScheduler
from .schemas import RotationCreate, RotationReorder, RotationUpdate

logger = logging.getLogger(__name__)

DUPLICATE_ORDER = "Rotation order already exists for this service type"


class LeaderRotationService:
    """Service layer for leader rotation business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LeaderRotationRepository()
        self.scheduler = LeaderScheduler(db)

    def list_rotations(self) -> list[LeaderRotation]:
        return self.repo.list_active(self.db)

    def list_for_service_type(self, service_type_id: str) -> list[LeaderRotation]:
        return self.repo.list_active_for_type(self.db, service_type_id)

    def get_rotation(self, rotation_id: str) -> LeaderRotation:
        rotation = self.repo.get_by_id(self.db, rotation_id)
        if not rotation:
            raise HTTPException(status_code=404, detail="Leader rotation not found")
        return rotation

    def get_next_leader(self, service_type_id: str) -> LeaderRotation:
        return self.scheduler.next_leader(service_type_id)

    def create_rotation(self, data: RotationCreate) -> LeaderRotation:
        user = self.db.query(User).filter(User.id == data.user_id).first()
        if not user or not user.has_role(Role.leader):
            raise HTTPException(
                status_code=400, detail="User must have leader role to be added to rotation"
            )
        if not self.db.query(ServiceType).filter(ServiceType.id == data.service_type_id).first():
            raise HTTPException(status_code=404, detail="Service type not found")
        if self.repo.get_by_order(self.db, data.service_type_id, data.rotation_order):
            raise HTTPException(status_code=400, detail=DUPLICATE_ORDER)

        try:
            rotation = self.repo.create(
                self.db,
                user_id=data.user_id,
                service_type_id=data.service_type_id,
                rotation_order=data.rotation_order,
                is_active=True,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_ORDER) from e

        logger.info(f"✅ Added user {user.id} to rotation of {data.service_type_id} at {data.rotation_order}")
        self.scheduler.recalculate(rotation.service_type_id)
        return self.get_rotation(rotation.id)

    def update_rotation(self, rotation_id: str, data: RotationUpdate) -> LeaderRotation:
        rotation = self.get_rotation(rotation_id)
        deactivating = data.is_active is False and rotation.is_active
        reactivating = data.is_active is True and not rotation.is_active

        if deactivating:
            self._park(rotation)
        elif data.rotation_order is not None and data.rotation_order != rotation.rotation_order:
            if self.repo.get_by_order(self.db, rotation.service_type_id, data.rotation_order):
                raise HTTPException(status_code=400, detail=DUPLICATE_ORDER)
            rotation.rotation_order = data.rotation_order
        elif reactivating:
            _, highest = self.repo.order_bounds(self.db, rotation.service_type_id)
            rotation.rotation_order = max(highest, 0) + 1
        if data.is_active is not None:
            rotation.is_active = data.is_active

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_ORDER) from e

        self.scheduler.recalculate(rotation.service_type_id)
        return self.get_rotation(rotation_id)

    def _park(self, rotation: LeaderRotation):
        """Move an inactive rotation below every order in use so its slot can be reused"""
        lowest, _ = self.repo.order_bounds(self.db, rotation.service_type_id)
        rotation.rotation_order = min(lowest, 0) - 1

    def delete_rotation(self, rotation_id: str) -> None:
        """Soft delete: the row stays but gives up its order slot"""
        rotation = self.get_rotation(rotation_id)
        if rotation.is_active:
            self._park(rotation)
        rotation.is_active = False
        self.db.commit()
        logger.info(f"🗑️ Deactivated leader rotation {rotation_id}")
        self.scheduler.recalculate(rotation.service_type_id)

    def reorder(self, data: RotationReorder) -> list[LeaderRotation]:
        """
        Renumber rotations to follow `rotation_ids`.

        Orders are first moved below every stored order (parked rows included)
        then to 1..n, so no intermediate state collides on
        (service_type_id, rotation_order).
        """
        if not data.service_type_id or not isinstance(data.rotation_ids, list):
            raise HTTPException(status_code=400, detail="serviceTypeId and rotationIds array are required")

        rotation_ids = [str(rid) for rid in data.rotation_ids]
        rotations = {r.id: r for r in self.repo.get_by_ids(self.db, data.service_type_id, rotation_ids)}
        missing = [rid for rid in rotation_ids if rid not in rotations]
        if missing or len(set(rotation_ids)) != len(rotation_ids):
            raise HTTPException(
                status_code=400,
                detail={
                    "message": "All rotationIds must be unique rotations of this service type",
                    "invalidIds": missing,
                },
            )

        lowest, _ = self.repo.order_bounds(self.db, data.service_type_id)
        base = min(lowest, 0)
        try:
            for index, rotation_id in enumerate(rotation_ids):
                rotations[rotation_id].rotation_order = base - (index + 1)
            self.db.flush()
            for index, rotation_id in enumerate(rotation_ids):
                rotations[rotation_id].rotation_order = index + 1
            self.db.flush()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_ORDER) from e

        logger.info(f"🔄 Reordered {len(rotation_ids)} rotations for service type {data.service_type_id}")
        self.scheduler.recalculate(data.service_type_id)
        return self.list_for_service_type(data.service_type_id)
