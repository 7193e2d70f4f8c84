"""Set song schemas - Pydantic models for validation"""

from typing import Any, Optional

from pydantic import Field, field_validator

from ...shared.schemas import CamelInput, CamelModel, HttpUrlStr, SongVersionWithSong, UserSummary
from ...shared.validators import validate_uuid_field


class SetSongCreate(CamelInput):
    set_id: str
    song_version_id: str
    position: int = Field(ge=1)
    key_override: Optional[str] = Field(default=None, max_length=10)
    youtube_url_override: Optional[HttpUrlStr] = None
    is_new: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=500)
    singer_id: Optional[str] = None

    @field_validator("set_id", "song_version_id", "singer_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class SetSongUpdate(CamelInput):
    position: Optional[int] = Field(default=None, ge=1)
    key_override: Optional[str] = Field(default=None, max_length=10)
    youtube_url_override: Optional[HttpUrlStr] = None
    is_new: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=500)
    singer_id: Optional[str] = None

    @field_validator("singer_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class SetSongReorder(CamelInput):
    # Loosely typed so a malformed body gets the domain error message
    song_ids: Optional[Any] = None


class SetSongResponse(CamelModel):
    id: str
    set_id: str
    song_version_id: str
    position: int
    key_override: Optional[str] = None
    youtube_url_override: Optional[str] = None
    is_new: bool
    notes: Optional[str] = None
    singer_id: Optional[str] = None
    song_version: SongVersionWithSong
    singer: Optional[UserSummary] = None
