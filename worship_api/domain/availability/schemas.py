"""Availability schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ...shared.schemas import CamelInput, CamelModel


class AvailabilityCreate(CamelInput):
    start: datetime
    end: datetime
    notes: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_range(self):
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self


class AvailabilityUpdate(CamelInput):
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class AvailabilityResponse(CamelModel):
    id: str
    user_id: str
    start: datetime
    end: datetime
    notes: Optional[str] = None
