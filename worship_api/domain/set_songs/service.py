"""Set song service - Business logic for the running order of a worship set"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import SetSong, SongVersion, User, WorshipSet
from .repository import SetSongRepository
from .schemas import SetSongCreate, SetSongReorder, SetSongUpdate

logger = logging.getLogger(__name__)

NEW_SONG_FAMILIARITY_THRESHOLD = 50


def position_taken(position: int) -> HTTPException:
    return HTTPException(status_code=400, detail=f"Position {position} is already taken in this worship set")


class SetSongService:
    """Service layer for set song business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SetSongRepository()

    def list_by_set(self, set_id: str) -> list[SetSong]:
        return self.repo.list_by_set(self.db, set_id)

    def get_set_song(self, set_song_id: str) -> SetSong:
        set_song = self.repo.get_by_id(self.db, set_song_id)
        if not set_song:
            raise HTTPException(status_code=404, detail="Set song not found")
        return set_song

    def _ensure_singer(self, singer_id) -> None:
        if singer_id and not self.db.query(User).filter(User.id == singer_id).first():
            raise HTTPException(status_code=400, detail="Singer not found")

    def create_set_song(self, data: SetSongCreate) -> SetSong:
        if not self.db.query(WorshipSet).filter(WorshipSet.id == data.set_id).first():
            raise HTTPException(status_code=404, detail="Worship set not found")
        version = self.db.query(SongVersion).filter(SongVersion.id == data.song_version_id).first()
        if not version:
            raise HTTPException(status_code=404, detail="Song version not found")
        self._ensure_singer(data.singer_id)
        if self.repo.get_by_position(self.db, data.set_id, data.position):
            raise position_taken(data.position)

        is_new = data.is_new
        if is_new is None:
            is_new = version.song.familiarity_score < NEW_SONG_FAMILIARITY_THRESHOLD

        set_song = self.repo.add(
            self.db,
            set_id=data.set_id,
            song_version_id=data.song_version_id,
            position=data.position,
            key_override=data.key_override,
            youtube_url_override=data.youtube_url_override,
            is_new=is_new,
            notes=data.notes,
            singer_id=data.singer_id,
        )
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise position_taken(data.position) from e
        self.db.refresh(set_song)
        return set_song

    def update_set_song(self, set_song_id: str, data: SetSongUpdate) -> SetSong:
        set_song = self.get_set_song(set_song_id)
        updates = data.model_dump(exclude_unset=True)

        if updates.get("position") is not None and updates["position"] != set_song.position:
            if self.repo.get_by_position(self.db, set_song.set_id, updates["position"]):
                raise position_taken(updates["position"])
        if "singer_id" in updates:
            self._ensure_singer(updates["singer_id"])

        for key, value in updates.items():
            if key in ("position", "is_new") and value is None:
                continue
            setattr(set_song, key, value)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise position_taken(updates.get("position")) from e
        self.db.refresh(set_song)
        return set_song

    def delete_set_song(self, set_song_id: str) -> None:
        """Remove a song and close the gap it leaves in the running order"""
        set_song = self.get_set_song(set_song_id)
        set_id, position = set_song.set_id, set_song.position

        self.db.delete(set_song)
        self.db.flush()
        # Lowest first so each decrement lands on a freed position
        for later in self.repo.songs_after(self.db, set_id, position):
            later.position -= 1
            self.db.flush()
        self.db.commit()
        logger.info(f"🗑️ Removed set song {set_song_id} from set {set_id} at position {position}")

    def reorder(self, set_id: str, data: SetSongReorder) -> list[SetSong]:
        """Positions become 1..n following `song_ids`"""
        song_ids = data.song_ids
        if not isinstance(song_ids, list) or not song_ids:
            raise HTTPException(status_code=400, detail="songIds must be a non-empty array")
        song_ids = [str(sid) for sid in song_ids]

        set_songs = {s.id: s for s in self.repo.list_by_set(self.db, set_id)}
        invalid_ids = [sid for sid in song_ids if sid not in set_songs]
        if invalid_ids:
            raise HTTPException(
                status_code=400,
                detail={
                    "message": "Some song IDs do not belong to this worship set",
                    "invalidIds": invalid_ids,
                },
            )
        if len(set(song_ids)) != len(song_ids):
            raise HTTPException(status_code=400, detail="songIds must not contain duplicates")

        # Negative interim positions keep (set_id, position) unique throughout
        try:
            for index, song_id in enumerate(song_ids):
                set_songs[song_id].position = -(index + 1)
            self.db.flush()
            for index, song_id in enumerate(song_ids):
                set_songs[song_id].position = index + 1
            self.db.flush()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(
                status_code=400, detail="New positions collide with songs missing from songIds"
            ) from e

        logger.info(f"🔄 Reordered {len(song_ids)} songs in set {set_id}")
        return self.repo.list_by_set(self.db, set_id)
