"""Instrument router - FastAPI endpoints for instruments"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...cache_control import medium_cache, no_cache
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import InstrumentCreate, InstrumentDetail, InstrumentResponse, InstrumentUpdate
from .service import InstrumentService

router = APIRouter(prefix="/instruments", tags=["Instruments"])


def get_instrument_service(db: Session = Depends(get_db)) -> InstrumentService:
    """Dependency injection for InstrumentService"""
    return InstrumentService(db)


@router.get("", dependencies=[Depends(medium_cache)])
async def list_instruments(
    _: User = Depends(get_current_user),
    service: InstrumentService = Depends(get_instrument_service),
):
    return {"data": [InstrumentResponse.model_validate(i) for i in service.list_instruments()]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id")), Depends(medium_cache)])
async def get_instrument(
    id: str,
    _: User = Depends(get_current_user),
    service: InstrumentService = Depends(get_instrument_service),
):
    return {"data": InstrumentDetail.model_validate(service.get_instrument(id))}


@router.post("", status_code=201, dependencies=[Depends(no_cache)])
async def create_instrument(
    data: InstrumentCreate,
    _: User = Depends(require_role(Role.admin)),
    service: InstrumentService = Depends(get_instrument_service),
):
    return {"data": InstrumentResponse.model_validate(service.create_instrument(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def update_instrument(
    id: str,
    data: InstrumentUpdate,
    _: User = Depends(require_role(Role.admin)),
    service: InstrumentService = Depends(get_instrument_service),
):
    return {"data": InstrumentResponse.model_validate(service.update_instrument(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def delete_instrument(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: InstrumentService = Depends(get_instrument_service),
):
    service.delete_instrument(id)
