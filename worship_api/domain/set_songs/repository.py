"""Set song repository - Database operations for songs placed in worship sets"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import SetSong, SongVersion


class SetSongRepository:
    """Repository for set song database operations"""

    @staticmethod
    def list_by_set(db: Session, set_id: str) -> list[SetSong]:
        """Songs of a worship set in running order"""
        return (
            db.query(SetSong)
            .options(joinedload(SetSong.song_version).joinedload(SongVersion.song))
            .filter(SetSong.set_id == set_id)
            .order_by(SetSong.position.asc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, set_song_id: str) -> Optional[SetSong]:
        return db.query(SetSong).filter(SetSong.id == set_song_id).first()

    @staticmethod
    def get_by_position(db: Session, set_id: str, position: int) -> Optional[SetSong]:
        return db.query(SetSong).filter(SetSong.set_id == set_id, SetSong.position == position).first()

    @staticmethod
    def count_for_set(db: Session, set_id: str) -> int:
        return db.query(SetSong).filter(SetSong.set_id == set_id).count()

    @staticmethod
    def songs_after(db: Session, set_id: str, position: int) -> list[SetSong]:
        """Songs positioned after `position`, lowest first"""
        return (
            db.query(SetSong)
            .filter(SetSong.set_id == set_id, SetSong.position > position)
            .order_by(SetSong.position.asc())
            .all()
        )

    @staticmethod
    def add(db: Session, **data) -> SetSong:
        """Stage a set song without committing"""
        set_song = SetSong(**data)
        db.add(set_song)
        return set_song
