"""Instrument schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import Field

from ...shared.schemas import CamelInput, CamelModel, InstrumentSummary


class InstrumentCreate(CamelInput):
    code: str = Field(min_length=1, max_length=50)
    display_name: str = Field(min_length=1, max_length=100)
    max_per_set: int = Field(ge=1)


class InstrumentUpdate(CamelInput):
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    max_per_set: Optional[int] = Field(default=None, ge=1)


class InstrumentResponse(InstrumentSummary):
    pass


class InstrumentAssignmentRef(CamelModel):
    id: str
    set_id: str
    user_id: str
    status: str


class InstrumentDefaultRef(CamelModel):
    id: str
    service_type_id: str
    user_id: str


class InstrumentDetail(InstrumentSummary):
    assignments: list[InstrumentAssignmentRef] = []
    default_assignments: list[InstrumentDefaultRef] = []
