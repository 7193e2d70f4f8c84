"""Instrument service - Business logic for the instrument catalogue"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Instrument
from .repository import InstrumentRepository
from .schemas import InstrumentCreate, InstrumentUpdate

logger = logging.getLogger(__name__)

DUPLICATE_CODE = "An instrument with this code already exists"


class InstrumentService:
    """Service layer for instrument business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InstrumentRepository()

    def list_instruments(self) -> list[Instrument]:
        return self.repo.list_instruments(self.db)

    def get_instrument(self, instrument_id: str) -> Instrument:
        instrument = self.repo.get_by_id(self.db, instrument_id)
        if not instrument:
            raise HTTPException(status_code=404, detail="Instrument not found")
        return instrument

    def create_instrument(self, data: InstrumentCreate) -> Instrument:
        if self.repo.get_by_code(self.db, data.code):
            raise HTTPException(status_code=400, detail=DUPLICATE_CODE)
        try:
            return self.repo.create(self.db, **data.model_dump())
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_CODE) from e

    def update_instrument(self, instrument_id: str, data: InstrumentUpdate) -> Instrument:
        instrument = self.get_instrument(instrument_id)
        if data.code and data.code != instrument.code and self.repo.get_by_code(self.db, data.code):
            raise HTTPException(status_code=400, detail=DUPLICATE_CODE)
        try:
            return self.repo.update(self.db, instrument, **data.model_dump(exclude_unset=True))
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=DUPLICATE_CODE) from e

    def delete_instrument(self, instrument_id: str) -> None:
        instrument = self.get_instrument(instrument_id)
        try:
            self.repo.delete(self.db, instrument)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Instrument {instrument_id} still referenced, not deleted")
            raise HTTPException(
                status_code=400,
                detail="Cannot delete instrument that has assignments or default assignments",
            ) from e
        logger.info(f"🗑️ Deleted instrument {instrument_id}")
