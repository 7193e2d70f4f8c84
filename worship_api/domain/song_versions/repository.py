"""Song version repository - Database operations for arrangements of a song"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import SongVersion


class SongVersionRepository:
    """Repository for song version database operations"""

    @staticmethod
    def list_for_song(db: Session, song_id: str) -> list[SongVersion]:
        return (
            db.query(SongVersion)
            .options(joinedload(SongVersion.song))
            .filter(SongVersion.song_id == song_id)
            .order_by(SongVersion.name.asc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, version_id: str) -> Optional[SongVersion]:
        return db.query(SongVersion).filter(SongVersion.id == version_id).first()

    @staticmethod
    def create(db: Session, **data) -> SongVersion:
        version = SongVersion(**data)
        db.add(version)
        db.commit()
        db.refresh(version)
        return version
