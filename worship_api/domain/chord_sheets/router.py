"""Chord sheet router - FastAPI endpoints for chord sheets of song versions and set songs"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import ChordSheetResponse, ChordSheetUpsert
from .service import ChordSheetService

router = APIRouter(tags=["Chord Sheets"])

require_planner = require_role(Role.admin, Role.leader)


def get_chord_sheet_service(db: Session = Depends(get_db)) -> ChordSheetService:
    """Dependency injection for ChordSheetService"""
    return ChordSheetService(db)


@router.get("/song-versions/{id}/chord-sheet", dependencies=[Depends(valid_uuid("id"))])
async def get_chord_sheet(
    id: str,
    _: User = Depends(get_current_user),
    service: ChordSheetService = Depends(get_chord_sheet_service),
):
    return {"data": ChordSheetResponse.model_validate(service.get_sheet(id))}


@router.put("/song-versions/{id}/chord-sheet", dependencies=[Depends(valid_uuid("id"))])
async def upsert_chord_sheet(
    id: str,
    data: ChordSheetUpsert,
    _: User = Depends(require_planner),
    service: ChordSheetService = Depends(get_chord_sheet_service),
):
    return {"data": ChordSheetResponse.model_validate(service.upsert_sheet(id, data))}


@router.delete("/song-versions/{id}/chord-sheet", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_chord_sheet(
    id: str,
    _: User = Depends(require_planner),
    service: ChordSheetService = Depends(get_chord_sheet_service),
):
    service.delete_sheet(id)


@router.post("/song-versions/{id}/chord-sheet/upload", dependencies=[Depends(valid_uuid("id"))])
async def upload_chord_sheet_file(
    id: str,
    file: Optional[UploadFile] = File(None),
    _: User = Depends(require_planner),
    service: ChordSheetService = Depends(get_chord_sheet_service),
):
    """Upload a PDF, PNG or JPG (max 5MB) as the chord sheet file"""
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    content = await file.read()
    sheet = service.upload_file(id, file.filename, file.content_type, content)
    return {"data": ChordSheetResponse.model_validate(sheet)}


@router.get("/set-songs/{id}/chord-sheet", dependencies=[Depends(valid_uuid("id"))])
async def get_set_song_chord_sheet(
    id: str,
    _: User = Depends(get_current_user),
    service: ChordSheetService = Depends(get_chord_sheet_service),
):
    """Chord sheet transposed to the key the song is played in"""
    return {"data": service.for_set_song(id)}
