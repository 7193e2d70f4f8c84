"""Singer song key service - Business logic for tracking the keys singers use"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import SingerSongKey, Song, User
from .repository import SingerSongKeyRepository
from .schemas import (
    KeyProfileEntry,
    KeyProfileSong,
    KeySuggestions,
    SingerSongKeyCreate,
    SingerSongKeyResponse,
    SingerSongKeyUpdate,
    SongRef,
    VersionKey,
)

logger = logging.getLogger(__name__)

SINGER_HISTORY_LIMIT = 10


class SingerSongKeyService:
    """Service layer for singer song key business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SingerSongKeyRepository()

    def list_keys(self, singer_id: Optional[str] = None, song_id: Optional[str] = None) -> list[SingerSongKey]:
        return self.repo.list_keys(self.db, singer_id=singer_id, song_id=song_id)

    def get_key(self, key_id: str) -> SingerSongKey:
        record = self.repo.get_by_id(self.db, key_id)
        if not record:
            raise HTTPException(status_code=404, detail="Singer song key not found")
        return record

    def suggestions(self, song_id: Optional[str], singer_id: Optional[str] = None) -> KeySuggestions:
        """
        Help pick a key for a singer and song.

        Returns the singer's own recent keys for the song, the latest key of
        every other singer, and the default key of each version.
        """
        if not song_id:
            raise HTTPException(status_code=400, detail="songId is required")

        singer_history = []
        if singer_id:
            singer_history = self.repo.list_keys(
                self.db, singer_id=singer_id, song_id=song_id, limit=SINGER_HISTORY_LIMIT
            )

        latest_per_singer: dict[str, SingerSongKey] = {}
        for record in self.repo.list_keys(self.db, song_id=song_id, exclude_singer_id=singer_id):
            latest_per_singer.setdefault(record.singer_id, record)

        return KeySuggestions(
            singer_history=[SingerSongKeyResponse.model_validate(r) for r in singer_history],
            other_singers_history=[SingerSongKeyResponse.model_validate(r) for r in latest_per_singer.values()],
            song_versions=[VersionKey.model_validate(v) for v in self.repo.versions_for_song(self.db, song_id)],
        )

    def create_key(self, data: SingerSongKeyCreate) -> SingerSongKey:
        if not self.db.query(User).filter(User.id == data.singer_id).first():
            raise HTTPException(status_code=400, detail="Singer not found")
        if not self.db.query(Song).filter(Song.id == data.song_id).first():
            raise HTTPException(status_code=400, detail="Song not found")

        record = self.repo.create(self.db, **data.model_dump())
        logger.info(f"🎤 Recorded key {record.key} for singer {record.singer_id} on song {record.song_id}")
        return record

    def update_key(self, key_id: str, data: SingerSongKeyUpdate) -> SingerSongKey:
        record = self.get_key(key_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("key"):
            record.key = updates["key"]
        if "notes" in updates:
            record.notes = updates["notes"]
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete_key(self, key_id: str) -> None:
        self.repo.delete(self.db, self.get_key(key_id))

    def key_profile(self, user_id: str) -> list[KeyProfileSong]:
        """A singer's keys grouped by song; each group is newest first"""
        if not self.db.query(User).filter(User.id == user_id).first():
            raise HTTPException(status_code=404, detail="User not found")

        profile: dict[str, KeyProfileSong] = {}
        for record in self.repo.list_keys(self.db, singer_id=user_id):
            group = profile.get(record.song_id)
            if group is None:
                group = KeyProfileSong(
                    song=SongRef.model_validate(record.song), entries=[], most_recent_key=record.key
                )
                profile[record.song_id] = group
            group.entries.append(KeyProfileEntry.model_validate(record))
        return list(profile.values())
