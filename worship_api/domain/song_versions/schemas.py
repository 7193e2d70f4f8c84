"""Song version schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import CamelInput, HttpUrlStr, SongVersionWithSong
from ...shared.validators import validate_uuid_field


class SongVersionCreate(CamelInput):
    song_id: str
    name: str = Field(min_length=1, max_length=255)
    youtube_url: Optional[HttpUrlStr] = None
    default_key: Optional[str] = Field(default=None, max_length=10)
    bpm: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("song_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class SongVersionUpdate(CamelInput):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    youtube_url: Optional[HttpUrlStr] = None
    default_key: Optional[str] = Field(default=None, max_length=10)
    bpm: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = Field(default=None, max_length=1000)


class SongVersionResponse(SongVersionWithSong):
    notes: Optional[str] = None
