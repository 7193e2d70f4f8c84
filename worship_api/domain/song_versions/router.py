"""Song version router - FastAPI endpoints for arrangements of a song"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import SongVersionCreate, SongVersionResponse, SongVersionUpdate
from .service import SongVersionService

router = APIRouter(prefix="/songVersions", tags=["Song Versions"])

require_planner = require_role(Role.admin, Role.leader)


def get_song_version_service(db: Session = Depends(get_db)) -> SongVersionService:
    """Dependency injection for SongVersionService"""
    return SongVersionService(db)


@router.get("/song/{song_id}", dependencies=[Depends(valid_uuid("song_id"))])
async def list_versions_for_song(
    song_id: str,
    _: User = Depends(get_current_user),
    service: SongVersionService = Depends(get_song_version_service),
):
    return {"data": [SongVersionResponse.model_validate(v) for v in service.list_for_song(song_id)]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_version(
    id: str,
    _: User = Depends(get_current_user),
    service: SongVersionService = Depends(get_song_version_service),
):
    return {"data": SongVersionResponse.model_validate(service.get_version(id))}


@router.post("", status_code=201)
async def create_version(
    data: SongVersionCreate,
    _: User = Depends(require_planner),
    service: SongVersionService = Depends(get_song_version_service),
):
    return {"data": SongVersionResponse.model_validate(service.create_version(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_version(
    id: str,
    data: SongVersionUpdate,
    _: User = Depends(require_planner),
    service: SongVersionService = Depends(get_song_version_service),
):
    return {"data": SongVersionResponse.model_validate(service.update_version(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_version(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: SongVersionService = Depends(get_song_version_service),
):
    service.delete_version(id)
