"""Song service - Business logic for the song library"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Song
from .repository import SongRepository
from .schemas import SongCreate, SongUpdate

logger = logging.getLogger(__name__)

# Columns that may not be cleared through an update
REQUIRED_FIELDS = {"title", "tags", "familiarity_score"}


class SongService:
    """Service layer for song business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SongRepository()

    def list_songs(self) -> list[Song]:
        return self.repo.list_active(self.db)

    def get_song(self, song_id: str) -> Song:
        song = self.repo.get_by_id(self.db, song_id)
        if not song:
            raise HTTPException(status_code=404, detail="Song not found")
        return song

    def create_song(self, data: SongCreate) -> Song:
        song = self.repo.create(self.db, **data.model_dump())
        logger.info(f"✅ Added song '{song.title}' ({song.id})")
        return song

    def update_song(self, song_id: str, data: SongUpdate) -> Song:
        song = self.get_song(song_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key in REQUIRED_FIELDS:
                continue
            setattr(song, key, value)
        self.db.commit()
        self.db.refresh(song)
        return song

    def delete_song(self, song_id: str) -> Song:
        """Soft delete; set songs and suggestions keep referring to it"""
        song = self.get_song(song_id)
        song.is_active = False
        self.db.commit()
        self.db.refresh(song)
        logger.info(f"🗑️ Deactivated song {song_id}")
        return song
