"""Default assignment schemas - Pydantic models for validation"""

from pydantic import field_validator

from ...shared.schemas import CamelInput, CamelModel, InstrumentSummary, ServiceTypeSummary, UserSummary
from ...shared.validators import validate_uuid_field


class DefaultAssignmentCreate(CamelInput):
    service_type_id: str
    instrument_id: str
    user_id: str

    @field_validator("service_type_id", "instrument_id", "user_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class DefaultAssignmentUpdate(CamelInput):
    user_id: str

    @field_validator("user_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class DefaultAssignmentResponse(CamelModel):
    id: str
    service_type_id: str
    instrument_id: str
    user_id: str
    instrument: InstrumentSummary
    user: UserSummary
    service_type: ServiceTypeSummary
