"""Suggestion slot schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ...models import SlotStatus
from ...shared.schemas import CamelInput, CamelModel, ServiceSummary, SongWithVersions, UserSummary
from ...shared.validators import validate_uuid_field


class SlotCreate(CamelInput):
    set_id: str
    assigned_user_id: str
    min_songs: int = Field(default=1, ge=0)
    max_songs: int = Field(default=3, ge=1)
    due_at: datetime

    @field_validator("set_id", "assigned_user_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)

    @model_validator(mode="after")
    def check_song_range(self):
        if self.min_songs > self.max_songs:
            raise ValueError("minSongs must be less than or equal to maxSongs")
        return self


class SlotUpdate(CamelInput):
    min_songs: Optional[int] = Field(default=None, ge=0)
    max_songs: Optional[int] = Field(default=None, ge=1)
    due_at: Optional[datetime] = None
    status: Optional[SlotStatus] = None


class SlotAssignUser(CamelInput):
    assigned_user_id: str

    @field_validator("assigned_user_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class SuggestionBrief(CamelModel):
    id: str
    slot_id: str
    song_id: str
    youtube_url_override: Optional[str] = None
    notes: Optional[str] = None
    status: str
    created_at: datetime
    song: SongWithVersions


class SlotResponse(CamelModel):
    id: str
    set_id: str
    assigned_user_id: str
    min_songs: int
    max_songs: int
    due_at: datetime
    status: str
    assigned_user: Optional[UserSummary] = None


class SlotWithSuggestions(SlotResponse):
    suggestions: list[SuggestionBrief] = []


class SlotWorshipSet(CamelModel):
    id: str
    status: str
    suggest_due_at: Optional[datetime] = None
    service: ServiceSummary


class MySlotResponse(SlotWithSuggestions):
    """Slot as seen by its assignee; an overdue pending slot reports `missed`"""

    worship_set: SlotWorshipSet
    is_overdue: bool = False
    suggestion_count: int = 0
