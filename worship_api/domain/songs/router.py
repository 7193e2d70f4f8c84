"""Song router - FastAPI endpoints for the song library"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...cache_control import no_cache
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import SongCreate, SongResponse, SongUpdate
from .service import SongService

router = APIRouter(prefix="/songs", tags=["Songs"])


def get_song_service(db: Session = Depends(get_db)) -> SongService:
    """Dependency injection for SongService"""
    return SongService(db)


@router.get("", dependencies=[Depends(no_cache)])
async def list_songs(
    _: User = Depends(get_current_user),
    service: SongService = Depends(get_song_service),
):
    return {"data": [SongResponse.model_validate(s) for s in service.list_songs()]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def get_song(
    id: str,
    _: User = Depends(get_current_user),
    service: SongService = Depends(get_song_service),
):
    return {"data": SongResponse.model_validate(service.get_song(id))}


@router.post("", status_code=201, dependencies=[Depends(no_cache)])
async def create_song(
    data: SongCreate,
    _: User = Depends(get_current_user),
    service: SongService = Depends(get_song_service),
):
    return {"data": SongResponse.model_validate(service.create_song(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def update_song(
    id: str,
    data: SongUpdate,
    _: User = Depends(get_current_user),
    service: SongService = Depends(get_song_service),
):
    return {"data": SongResponse.model_validate(service.update_song(id, data))}


@router.delete("/{id}", dependencies=[Depends(valid_uuid("id")), Depends(no_cache)])
async def delete_song(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: SongService = Depends(get_song_service),
):
    """Deactivates the song and returns it"""
    return {"data": SongResponse.model_validate(service.delete_song(id))}
