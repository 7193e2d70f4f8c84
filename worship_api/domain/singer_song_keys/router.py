"""Singer song key router - FastAPI endpoints for the keys singers sing songs in"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import SingerSongKeyCreate, SingerSongKeyResponse, SingerSongKeyUpdate
from .service import SingerSongKeyService

router = APIRouter(prefix="/singer-song-keys", tags=["Singer Song Keys"])
profile_router = APIRouter(prefix="/users", tags=["Singer Song Keys"])

require_planner = require_role(Role.admin, Role.leader)


def get_singer_song_key_service(db: Session = Depends(get_db)) -> SingerSongKeyService:
    """Dependency injection for SingerSongKeyService"""
    return SingerSongKeyService(db)


@router.get("")
async def list_singer_song_keys(
    singer_id: Optional[str] = Query(None, alias="singerId"),
    song_id: Optional[str] = Query(None, alias="songId"),
    _: User = Depends(get_current_user),
    service: SingerSongKeyService = Depends(get_singer_song_key_service),
):
    records = service.list_keys(singer_id, song_id)
    return {"data": [SingerSongKeyResponse.model_validate(r) for r in records]}


@router.get("/suggestions")
async def get_key_suggestions(
    song_id: Optional[str] = Query(None, alias="songId"),
    singer_id: Optional[str] = Query(None, alias="singerId"),
    _: User = Depends(get_current_user),
    service: SingerSongKeyService = Depends(get_singer_song_key_service),
):
    return {"data": service.suggestions(song_id, singer_id)}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_singer_song_key(
    id: str,
    _: User = Depends(get_current_user),
    service: SingerSongKeyService = Depends(get_singer_song_key_service),
):
    return {"data": SingerSongKeyResponse.model_validate(service.get_key(id))}


@router.post("", status_code=201)
async def create_singer_song_key(
    data: SingerSongKeyCreate,
    _: User = Depends(require_planner),
    service: SingerSongKeyService = Depends(get_singer_song_key_service),
):
    return {"data": SingerSongKeyResponse.model_validate(service.create_key(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_singer_song_key(
    id: str,
    data: SingerSongKeyUpdate,
    _: User = Depends(require_planner),
    service: SingerSongKeyService = Depends(get_singer_song_key_service),
):
    return {"data": SingerSongKeyResponse.model_validate(service.update_key(id, data))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_singer_song_key(
    id: str,
    _: User = Depends(require_planner),
    service: SingerSongKeyService = Depends(get_singer_song_key_service),
):
    service.delete_key(id)


@profile_router.get("/{id}/key-profile", dependencies=[Depends(valid_uuid("id"))])
async def get_user_key_profile(
    id: str,
    _: User = Depends(get_current_user),
    service: SingerSongKeyService = Depends(get_singer_song_key_service),
):
    """Every song a user has sung with the keys used, newest first"""
    return {"data": service.key_profile(id)}
