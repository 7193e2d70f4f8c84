"""Chord sheet schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ...shared.schemas import CamelInput, CamelModel, HttpUrlStr


class ChordSheetUpsert(CamelInput):
    chord_text: Optional[str] = Field(default=None, max_length=50000)
    original_key: Optional[str] = Field(default=None, max_length=10)
    external_url: Optional[HttpUrlStr] = None


class ChordSheetResponse(CamelModel):
    id: str
    song_version_id: str
    chord_text: Optional[str] = None
    original_key: Optional[str] = None
    external_url: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SetSongChordSheet(ChordSheetResponse):
    """Chord sheet transposed to the key the song is played in at a service"""

    display_key: Optional[str] = None
    song_title: str
    song_artist: Optional[str] = None
    version_name: str
