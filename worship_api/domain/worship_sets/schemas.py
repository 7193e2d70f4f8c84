"""Worship set schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...models import SetStatus
from ...shared.schemas import CamelInput, CamelModel, ServiceSummary, UserSummary
from ...shared.validators import validate_uuid_field
from ..assignments.schemas import AssignmentResponse
from ..set_songs.schemas import SetSongResponse
from ..suggestion_slots.schemas import SlotWithSuggestions


class WorshipSetCreate(CamelInput):
    service_id: str
    suggest_due_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("service_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class WorshipSetUpdate(CamelInput):
    status: Optional[SetStatus] = None
    suggest_due_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class AssignLeaderRequest(CamelInput):
    """`leaderUserId: null` removes the leader"""

    leader_user_id: Optional[str] = None

    @field_validator("leader_user_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class WorshipSetResponse(CamelModel):
    id: str
    service_id: str
    status: str
    suggest_due_at: Optional[datetime] = None
    notes: Optional[str] = None
    leader_user_id: Optional[str] = None
    leader_user: Optional[UserSummary] = None


class WorshipSetListItem(WorshipSetResponse):
    song_count: int = 0
    service: ServiceSummary


class WorshipSetWithAssignments(WorshipSetResponse):
    assignments: list[AssignmentResponse] = []


class WorshipSetDetail(WorshipSetResponse):
    service: ServiceSummary
    set_songs: list[SetSongResponse] = []
    suggestion_slots: list[SlotWithSuggestions] = []
