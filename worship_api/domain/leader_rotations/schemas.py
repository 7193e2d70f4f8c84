"""Leader rotation schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from ...shared.schemas import CamelInput, CamelModel, ServiceTypeSummary, UserWithRoles
from ...shared.validators import validate_uuid_field


class RotationCreate(CamelInput):
    user_id: str
    service_type_id: str
    rotation_order: int = Field(default=1, ge=1)

    @field_validator("user_id", "service_type_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class RotationUpdate(CamelInput):
    rotation_order: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class RotationReorder(CamelInput):
    # Loosely typed so a malformed body gets the domain error message
    service_type_id: Optional[str] = None
    rotation_ids: Optional[Any] = None


class RotationResponse(CamelModel):
    id: str
    service_type_id: str
    user_id: str
    rotation_order: int
    is_active: bool
    created_at: datetime
    user: UserWithRoles
    service_type: Optional[ServiceTypeSummary] = None
