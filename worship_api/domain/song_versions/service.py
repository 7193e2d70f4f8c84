"""Song version service - Business logic for arrangements of a song"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ... import storage
from ...models import Song, SongVersion
from ..chord_sheets.service import file_path
from .repository import SongVersionRepository
from .schemas import SongVersionCreate, SongVersionUpdate

logger = logging.getLogger(__name__)


class SongVersionService:
    """Service layer for song version business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SongVersionRepository()

    def list_for_song(self, song_id: str) -> list[SongVersion]:
        return self.repo.list_for_song(self.db, song_id)

    def get_version(self, version_id: str) -> SongVersion:
        version = self.repo.get_by_id(self.db, version_id)
        if not version:
            raise HTTPException(status_code=404, detail="Song version not found")
        return version

    def create_version(self, data: SongVersionCreate) -> SongVersion:
        if not self.db.query(Song).filter(Song.id == data.song_id).first():
            raise HTTPException(status_code=404, detail="Song not found")
        version = self.repo.create(self.db, **data.model_dump())
        logger.info(f"✅ Added version '{version.name}' to song {version.song_id}")
        return version

    def update_version(self, version_id: str, data: SongVersionUpdate) -> SongVersion:
        version = self.get_version(version_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if key == "name" and value is None:
                continue
            setattr(version, key, value)
        self.db.commit()
        self.db.refresh(version)
        return version

    def delete_version(self, version_id: str) -> None:
        """Versions still placed in a worship set cannot be removed"""
        version = self.get_version(version_id)
        sheet = version.chord_sheet
        stored_file = file_path(version_id, sheet.file_name) if sheet and sheet.file_url and sheet.file_name else None
        self.db.delete(version)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(
                status_code=400, detail="Cannot delete song version that is used in worship sets"
            ) from e
        if stored_file:
            storage.delete_file(stored_file)
        logger.info(f"🗑️ Deleted song version {version_id}")
