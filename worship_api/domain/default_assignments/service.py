"""Default assignment service - Business logic for default musicians per service type"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import DefaultAssignment, Instrument, ServiceType, User
from .repository import DefaultAssignmentRepository
from .schemas import DefaultAssignmentCreate, DefaultAssignmentUpdate

logger = logging.getLogger(__name__)

DUPLICATE_DEFAULT = "A default assignment already exists for this service type and instrument"


class DefaultAssignmentService:
    """Service layer for default assignment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DefaultAssignmentRepository()

    def list_defaults(self, service_type_id: Optional[str] = None) -> list[DefaultAssignment]:
        return self.repo.list_defaults(self.db, service_type_id)

    def get_default(self, default_id: str) -> DefaultAssignment:
        default = self.repo.get_by_id(self.db, default_id)
        if not default:
            raise HTTPException(status_code=404, detail="Default assignment not found")
        return default

    def _ensure_user(self, user_id: str) -> None:
        if not self.db.query(User).filter(User.id == user_id).first():
            raise HTTPException(status_code=404, detail="User not found")

    def create_default(self, data: DefaultAssignmentCreate) -> DefaultAssignment:
        if not self.db.query(ServiceType).filter(ServiceType.id == data.service_type_id).first():
            raise HTTPException(status_code=404, detail="Service type not found")
        if not self.db.query(Instrument).filter(Instrument.id == data.instrument_id).first():
            raise HTTPException(status_code=404, detail="Instrument not found")
        self._ensure_user(data.user_id)
        if self.repo.get_by_type_and_instrument(self.db, data.service_type_id, data.instrument_id):
            raise HTTPException(status_code=400, detail=DUPLICATE_DEFAULT)

        try:
            return self.repo.create(self.db, **data.model_dump())
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_DEFAULT) from e

    def update_default(self, default_id: str, data: DefaultAssignmentUpdate) -> DefaultAssignment:
        """Only the musician can change; type and instrument identify the default"""
        default = self.get_default(default_id)
        self._ensure_user(data.user_id)
        default.user_id = data.user_id
        self.db.commit()
        self.db.refresh(default)
        return default

    def delete_default(self, default_id: str) -> None:
        self.repo.delete(self.db, self.get_default(default_id))
