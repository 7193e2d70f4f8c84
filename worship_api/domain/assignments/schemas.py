"""Assignment schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...models import AssignmentStatus
from ...shared.schemas import CamelInput, CamelModel, InstrumentSummary, UserSummary
from ...shared.validators import validate_uuid_field


class AssignmentCreate(CamelInput):
    set_id: str
    instrument_id: str
    user_id: str
    status: Optional[AssignmentStatus] = None

    @field_validator("set_id", "instrument_id", "user_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class AssignmentUpdate(CamelInput):
    status: AssignmentStatus


class AssignmentResponse(CamelModel):
    id: str
    set_id: str
    instrument_id: str
    user_id: str
    status: str
    invited_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    user: UserSummary
    instrument: InstrumentSummary
