"""User instrument service - Which instruments each team member plays"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from ...auth import ensure_self_or_roles
from ...models import Instrument, Role, User, UserInstrument
from .schemas import UserInstrumentResponse, UserInstrumentsUpdate

logger = logging.getLogger(__name__)


class UserInstrumentService:
    """Service layer for user instrument business logic"""

    def __init__(self, db: Session):
        self.db = db

    def _instruments_of(self, user_id: str) -> list[UserInstrumentResponse]:
        links = (
            self.db.query(UserInstrument)
            .join(UserInstrument.instrument)
            .options(joinedload(UserInstrument.instrument))
            .filter(UserInstrument.user_id == user_id)
            .order_by(Instrument.display_name.asc())
            .all()
        )
        return [
            UserInstrumentResponse(
                id=link.instrument.id,
                code=link.instrument.code,
                display_name=link.instrument.display_name,
                is_primary=link.is_primary,
                proficiency_level=link.proficiency_level,
            )
            for link in links
        ]

    def list_instruments(self, user_id: str, current_user: User) -> list[UserInstrumentResponse]:
        ensure_self_or_roles(
            current_user, user_id, Role.admin, detail="You can only view your own instruments"
        )
        return self._instruments_of(user_id)

    def replace_instruments(
        self, user_id: str, data: UserInstrumentsUpdate, current_user: User
    ) -> list[UserInstrumentResponse]:
        """Replace the full set of instruments a user plays"""
        ensure_self_or_roles(
            current_user, user_id, Role.admin, detail="You can only update your own instruments"
        )
        instrument_ids = data.instrument_ids
        if not isinstance(instrument_ids, list):
            raise HTTPException(status_code=400, detail="instrumentIds must be an array")
        instrument_ids = list(dict.fromkeys(str(i) for i in instrument_ids))

        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        if instrument_ids:
            found = self.db.query(Instrument.id).filter(Instrument.id.in_(instrument_ids)).count()
            if found != len(instrument_ids):
                raise HTTPException(status_code=400, detail="One or more instrument IDs are invalid")

        self.db.query(UserInstrument).filter(UserInstrument.user_id == user_id).delete(
            synchronize_session="fetch"
        )
        for instrument_id in instrument_ids:
            self.db.add(UserInstrument(user_id=user_id, instrument_id=instrument_id))
        self.db.commit()

        logger.info(f"🔄 User {user_id} now plays {len(instrument_ids)} instruments")
        return self._instruments_of(user_id)
