"""User instrument schemas - Pydantic models for validation"""

from typing import Any, Optional

from ...shared.schemas import CamelInput, CamelModel


class UserInstrumentsUpdate(CamelInput):
    # Loosely typed so a malformed body gets the domain error message
    instrument_ids: Optional[Any] = None


class UserInstrumentResponse(CamelModel):
    """An instrument as played by one user"""

    id: str
    code: str
    display_name: str
    is_primary: bool = False
    proficiency_level: Optional[str] = None
