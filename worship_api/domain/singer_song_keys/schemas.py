"""Singer song key schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import CamelInput, CamelModel
from ...shared.validators import validate_uuid_field


class SingerSongKeyCreate(CamelInput):
    singer_id: str
    song_id: str
    key: str = Field(min_length=1, max_length=10)
    service_date: datetime
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("singer_id", "song_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class SingerSongKeyUpdate(CamelInput):
    key: Optional[str] = Field(default=None, min_length=1, max_length=10)
    notes: Optional[str] = Field(default=None, max_length=500)


class SingerRef(CamelModel):
    id: str
    name: str


class SongRef(CamelModel):
    id: str
    title: str
    artist: Optional[str] = None


class SingerSongKeyResponse(CamelModel):
    id: str
    singer_id: str
    song_id: str
    key: str
    service_date: datetime
    notes: Optional[str] = None
    created_at: datetime
    singer: SingerRef
    song: SongRef


class VersionKey(CamelModel):
    id: str
    name: str
    default_key: Optional[str] = None


class KeySuggestions(CamelModel):
    singer_history: list[SingerSongKeyResponse]
    other_singers_history: list[SingerSongKeyResponse]
    song_versions: list[VersionKey]


class KeyProfileEntry(CamelModel):
    id: str
    key: str
    service_date: datetime
    notes: Optional[str] = None


class KeyProfileSong(CamelModel):
    song: SongRef
    entries: list[KeyProfileEntry]
    most_recent_key: str
