"""Chord sheet service - Business logic for chord sheets and their files"""

import logging
import re
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ... import storage
from ...models import ChordSheet, SetSong, SongVersion
from .schemas import ChordSheetResponse, ChordSheetUpsert, SetSongChordSheet
from .transpose import transpose_chord_text

logger = logging.getLogger(__name__)

ALLOWED_FILE_TYPES = {"application/pdf", "image/png", "image/jpeg"}
MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace anything outside [a-zA-Z0-9._-] so names cannot escape their folder"""
    return UNSAFE_FILENAME_CHARS.sub("_", filename)


def file_path(version_id: str, file_name: str) -> str:
    return f"{version_id}/{file_name}"


class ChordSheetService:
    """Service layer for chord sheet business logic"""

    def __init__(self, db: Session):
        self.db = db

    def _get_version(self, version_id: str) -> SongVersion:
        version = self.db.query(SongVersion).filter(SongVersion.id == version_id).first()
        if not version:
            raise HTTPException(status_code=404, detail="Song version not found")
        return version

    def _find_sheet(self, version_id: str) -> Optional[ChordSheet]:
        return self.db.query(ChordSheet).filter(ChordSheet.song_version_id == version_id).first()

    def get_sheet(self, version_id: str) -> ChordSheet:
        sheet = self._find_sheet(version_id)
        if not sheet:
            raise HTTPException(status_code=404, detail="Chord sheet not found")
        return sheet

    def _sheet_for_update(self, version_id: str) -> ChordSheet:
        self._get_version(version_id)
        sheet = self._find_sheet(version_id)
        if sheet is None:
            sheet = ChordSheet(song_version_id=version_id)
            self.db.add(sheet)
        return sheet

    def upsert_sheet(self, version_id: str, data: ChordSheetUpsert) -> ChordSheet:
        sheet = self._sheet_for_update(version_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(sheet, key, value)
        self.db.commit()
        self.db.refresh(sheet)
        logger.info(f"✅ Saved chord sheet for song version {version_id}")
        return sheet

    def delete_sheet(self, version_id: str) -> None:
        sheet = self.get_sheet(version_id)
        if sheet.file_url and sheet.file_name:
            storage.delete_file(file_path(version_id, sheet.file_name))
        self.db.delete(sheet)
        self.db.commit()
        logger.info(f"🗑️ Deleted chord sheet for song version {version_id}")

    def upload_file(
        self, version_id: str, filename: Optional[str], content_type: Optional[str], content: bytes
    ) -> ChordSheet:
        """
        Store a PDF or image for a song version, replacing any earlier file.

        Files live at `{version_id}/{sanitized name}` in the chord sheet bucket.
        """
        self._get_version(version_id)
        if content_type not in ALLOWED_FILE_TYPES:
            raise HTTPException(status_code=400, detail="Invalid file type. Allowed: PDF, PNG, JPG")
        if len(content) > MAX_FILE_SIZE:
            raise HTTPException(status_code=400, detail="File too large. Max 5MB")

        sheet = self._sheet_for_update(version_id)
        if sheet.file_url and sheet.file_name:
            storage.delete_file(file_path(version_id, sheet.file_name))

        safe_name = sanitize_filename(filename or "chord-sheet")
        path = file_path(version_id, safe_name)
        try:
            storage.upload_file(path, content, content_type)
            url = storage.public_url(path)
        except (BotoCoreError, ClientError) as e:
            self.db.rollback()
            logger.error(f"❌ Chord sheet upload failed for {path}: {e}")
            raise HTTPException(status_code=500, detail="Failed to upload file") from e

        sheet.file_url = url
        sheet.file_name = safe_name
        self.db.commit()
        self.db.refresh(sheet)
        return sheet

    def for_set_song(self, set_song_id: str) -> SetSongChordSheet:
        """
        The chord sheet of a set song in the key it will be played in.

        The key override of the set song wins over the version's default key.
        Text is transposed only when both keys are known and differ.
        """
        set_song = self.db.query(SetSong).filter(SetSong.id == set_song_id).first()
        if not set_song:
            raise HTTPException(status_code=404, detail="Set song not found")
        version = set_song.song_version
        sheet = version.chord_sheet
        if not sheet:
            raise HTTPException(status_code=404, detail="Chord sheet not found")

        target_key = set_song.key_override or version.default_key
        chord_text = sheet.chord_text
        if chord_text and sheet.original_key and target_key and sheet.original_key != target_key:
            chord_text = transpose_chord_text(chord_text, sheet.original_key, target_key)

        base = ChordSheetResponse.model_validate(sheet).model_dump()
        base["chord_text"] = chord_text
        return SetSongChordSheet(
            **base,
            display_key=target_key or sheet.original_key,
            song_title=version.song.title,
            song_artist=version.song.artist,
            version_name=version.name,
        )
