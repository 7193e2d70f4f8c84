"""Suggestion schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import CamelInput, CamelModel, HttpUrlStr, SongWithVersions, UserSummary
from ...shared.validators import validate_uuid_field


class SuggestionCreate(CamelInput):
    slot_id: str
    song_id: str
    youtube_url_override: Optional[HttpUrlStr] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("slot_id", "song_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class SuggestionUpdate(CamelInput):
    youtube_url_override: Optional[HttpUrlStr] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class SuggestionApprove(CamelInput):
    add_to_set: bool = False
    song_version_id: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=1)

    @field_validator("song_version_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class SuggestionResponse(CamelModel):
    id: str
    slot_id: str
    song_id: str
    youtube_url_override: Optional[str] = None
    notes: Optional[str] = None
    status: str
    created_at: datetime


class SuggestionWithSong(SuggestionResponse):
    song: SongWithVersions


class SlotInfo(CamelModel):
    id: str
    min_songs: int
    max_songs: int
    due_at: datetime
    status: str


class WorshipSetSuggestion(SuggestionWithSong):
    """Flattened for the set builder: who suggested it and from which slot"""

    suggester: UserSummary
    slot_info: SlotInfo


class SuggestionDecision(CamelModel):
    message: str
    suggestion: SuggestionResponse
