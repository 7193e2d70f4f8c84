"""Song repository - Database operations for the song library"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import Song


class SongRepository:
    """Repository for song database operations"""

    @staticmethod
    def list_active(db: Session) -> list[Song]:
        """Active songs by title, with their versions"""
        return (
            db.query(Song)
            .options(selectinload(Song.versions))
            .filter(Song.is_active.is_(True))
            .order_by(Song.title.asc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, song_id: str) -> Optional[Song]:
        return db.query(Song).filter(Song.id == song_id).first()

    @staticmethod
    def create(db: Session, **data) -> Song:
        song = Song(**data)
        db.add(song)
        db.commit()
        db.refresh(song)
        return song
