"""Service type schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ...shared.schemas import CamelInput, CamelModel, InstrumentSummary, UserSummary


class ServiceTypeCreate(CamelInput):
    name: str = Field(min_length=1)
    default_start_time: str = Field(min_length=1)  # "HH:mm"
    rrule: Optional[str] = None


class ServiceTypeUpdate(CamelInput):
    name: Optional[str] = Field(default=None, min_length=1)
    default_start_time: Optional[str] = None
    rrule: Optional[str] = None


class GenerateServicesRequest(CamelInput):
    year: Optional[int] = Field(default=None, ge=1970, le=2200)


class ServiceTypeDefault(CamelModel):
    id: str
    instrument_id: str
    user_id: str
    instrument: InstrumentSummary
    user: UserSummary


class ServiceTypeResponse(CamelModel):
    id: str
    name: str
    default_start_time: str
    rrule: Optional[str] = None
    default_assignments: list[ServiceTypeDefault] = []


class GeneratedService(CamelModel):
    id: str
    service_date: datetime
    status: str
    worship_set_id: Optional[str] = None
    leader_user_id: Optional[str] = None
