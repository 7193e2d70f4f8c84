"""Set song router - FastAPI endpoints for songs within a worship set"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import SetSongCreate, SetSongReorder, SetSongResponse, SetSongUpdate
from .service import SetSongService

router = APIRouter(prefix="/setSongs", tags=["Set Songs"])

require_planner = require_role(Role.admin, Role.leader)


def get_set_song_service(db: Session = Depends(get_db)) -> SetSongService:
    """Dependency injection for SetSongService"""
    return SetSongService(db)


def _serialize(set_songs):
    return [SetSongResponse.model_validate(s) for s in set_songs]


@router.get("/set/{set_id}", dependencies=[Depends(valid_uuid("set_id"))])
async def list_set_songs(
    set_id: str,
    _: User = Depends(get_current_user),
    service: SetSongService = Depends(get_set_song_service),
):
    return {"data": _serialize(service.list_by_set(set_id))}


@router.put("/set/{set_id}/reorder", dependencies=[Depends(valid_uuid("set_id"))])
async def reorder_set_songs(
    set_id: str,
    data: SetSongReorder,
    _: User = Depends(require_planner),
    service: SetSongService = Depends(get_set_song_service),
):
    return {"data": _serialize(service.reorder(set_id, data))}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_set_song(
    id: str,
    _: User = Depends(get_current_user),
    service: SetSongService = Depends(get_set_song_service),
):
    return {"data": SetSongResponse.model_validate(service.get_set_song(id))}


@router.post("", status_code=201)
async def create_set_song(
    data: SetSongCreate,
    _: User = Depends(require_planner),
    service: SetSongService = Depends(get_set_song_service),
):
    """Add a song version to a set; isNew defaults from the song's familiarity"""
    return {"data": SetSongResponse.model_validate(service.create_set_song(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_set_song(
    id: str,
    data: SetSongUpdate,
    _: User = Depends(require_planner),
    service: SetSongService = Depends(get_set_song_service),
):
    return {"data": SetSongResponse.model_validate(service.update_set_song(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_set_song(
    id: str,
    _: User = Depends(require_planner),
    service: SetSongService = Depends(get_set_song_service),
):
    service.delete_set_song(id)
