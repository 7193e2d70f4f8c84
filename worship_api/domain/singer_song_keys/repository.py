"""Singer song key repository - Database operations for the keys singers have sung songs in"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import SingerSongKey, SongVersion


class SingerSongKeyRepository:
    """Repository for singer song key database operations"""

    @staticmethod
    def _with_relations(db: Session):
        return db.query(SingerSongKey).options(joinedload(SingerSongKey.singer), joinedload(SingerSongKey.song))

    @classmethod
    def list_keys(
        cls,
        db: Session,
        singer_id: Optional[str] = None,
        song_id: Optional[str] = None,
        exclude_singer_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[SingerSongKey]:
        """Matching records, most recent service first"""
        query = cls._with_relations(db)
        if singer_id:
            query = query.filter(SingerSongKey.singer_id == singer_id)
        if song_id:
            query = query.filter(SingerSongKey.song_id == song_id)
        if exclude_singer_id:
            query = query.filter(SingerSongKey.singer_id != exclude_singer_id)
        query = query.order_by(SingerSongKey.service_date.desc(), SingerSongKey.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @classmethod
    def get_by_id(cls, db: Session, key_id: str) -> Optional[SingerSongKey]:
        return cls._with_relations(db).filter(SingerSongKey.id == key_id).first()

    @staticmethod
    def versions_for_song(db: Session, song_id: str) -> list[SongVersion]:
        return db.query(SongVersion).filter(SongVersion.song_id == song_id).order_by(SongVersion.name.asc()).all()

    @staticmethod
    def create(db: Session, **data) -> SingerSongKey:
        record = SingerSongKey(**data)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete(db: Session, record: SingerSongKey) -> None:
        db.delete(record)
        db.commit()
