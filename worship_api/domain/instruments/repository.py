"""Instrument repository - Database operations for instruments"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Instrument


class InstrumentRepository:
    """Repository for instrument database operations"""

    @staticmethod
    def list_instruments(db: Session) -> list[Instrument]:
        return db.query(Instrument).order_by(Instrument.display_name.asc()).all()

    @staticmethod
    def get_by_id(db: Session, instrument_id: str) -> Optional[Instrument]:
        return db.query(Instrument).filter(Instrument.id == instrument_id).first()

    @staticmethod
    def get_by_code(db: Session, code: str) -> Optional[Instrument]:
        return db.query(Instrument).filter(Instrument.code == code).first()

    @staticmethod
    def create(db: Session, **instrument_data) -> Instrument:
        instrument = Instrument(**instrument_data)
        db.add(instrument)
        db.commit()
        db.refresh(instrument)
        return instrument

    @staticmethod
    def update(db: Session, instrument: Instrument, **updates) -> Instrument:
        for key, value in updates.items():
            if value is not None:
                setattr(instrument, key, value)
        db.commit()
        db.refresh(instrument)
        return instrument

    @staticmethod
    def delete(db: Session, instrument: Instrument) -> None:
        db.delete(instrument)
        db.commit()
