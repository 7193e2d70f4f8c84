"""Service schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...shared.schemas import CamelInput, CamelModel, ServiceTypeSummary, UserSummary
from ...shared.validators import validate_uuid_field
from ..assignments.schemas import AssignmentResponse
from ..set_songs.schemas import SetSongResponse


class ServiceCreate(CamelInput):
    """Accepts serviceTypeId or service_type_id"""

    date: Optional[datetime] = None
    service_type_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("service_type_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class ServiceUpdate(CamelInput):
    date: Optional[datetime] = None
    service_type_id: Optional[str] = None
    # Unknown values are ignored rather than rejected
    status: Optional[str] = None
    leader_id: Optional[str] = None
    worship_set_leader_id: Optional[str] = None

    @field_validator("service_type_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class ServiceAssignmentsUpdate(CamelInput):
    """{instrumentId: userId}; a blank userId clears the instrument"""

    assignments: dict[str, Optional[str]]


class WorshipSetBrief(CamelModel):
    id: str
    status: str
    notes: Optional[str] = None
    suggest_due_at: Optional[datetime] = None
    leader_user_id: Optional[str] = None
    leader_user: Optional[UserSummary] = None
    song_count: int = 0
    assignments: list[AssignmentResponse] = []


class WorshipSetWithSongs(WorshipSetBrief):
    set_songs: list[SetSongResponse] = []


class ServiceResponse(CamelModel):
    id: str
    service_type_id: str
    service_date: datetime
    status: str
    leader_id: Optional[str] = None
    service_type: ServiceTypeSummary
    leader: Optional[UserSummary] = None
    worship_set: Optional[WorshipSetBrief] = None


class ServiceDetail(ServiceResponse):
    worship_set: Optional[WorshipSetWithSongs] = None
