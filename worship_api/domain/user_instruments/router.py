"""User instrument router - FastAPI endpoints for the instruments a user plays"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.validators import valid_uuid
from .schemas import UserInstrumentsUpdate
from .service import UserInstrumentService

router = APIRouter(prefix="/users", tags=["User Instruments"])


def get_user_instrument_service(db: Session = Depends(get_db)) -> UserInstrumentService:
    """Dependency injection for UserInstrumentService"""
    return UserInstrumentService(db)


@router.get("/{id}/instruments", dependencies=[Depends(valid_uuid("id"))])
async def get_user_instruments(
    id: str,
    current_user: User = Depends(get_current_user),
    service: UserInstrumentService = Depends(get_user_instrument_service),
):
    return {"data": service.list_instruments(id, current_user)}


@router.put("/{id}/instruments", dependencies=[Depends(valid_uuid("id"))])
async def update_user_instruments(
    id: str,
    data: UserInstrumentsUpdate,
    current_user: User = Depends(get_current_user),
    service: UserInstrumentService = Depends(get_user_instrument_service),
):
    return {"data": service.replace_instruments(id, data, current_user)}
