"""Notification schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from ...models import Channel
from ...shared.schemas import CamelInput, CamelModel
from ...shared.validators import validate_uuid_field


class NotificationCreate(CamelInput):
    user_id: str
    channel: Channel
    template_key: str = Field(min_length=1, max_length=100)
    payload_json: Optional[Any] = None
    status: str = Field(min_length=1, max_length=50)

    @field_validator("user_id")
    @classmethod
    def validate_ids(cls, v):
        return validate_uuid_field(v)


class NotificationResponse(CamelModel):
    id: str
    user_id: str
    channel: str
    template_key: str
    payload_json: Optional[Any] = None
    sent_at: datetime
    status: str
