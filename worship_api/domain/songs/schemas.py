"""Song schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ...shared.schemas import CamelInput, CamelModel, HttpUrlStr, SongVersionSummary


class SongCreate(CamelInput):
    title: str = Field(min_length=1, max_length=255)
    artist: Optional[str] = Field(default=None, max_length=255)
    ccli_number: Optional[str] = Field(default=None, max_length=50)
    default_youtube_url: Optional[HttpUrlStr] = None
    tags: list[str] = []
    language: Optional[str] = Field(default=None, max_length=50)
    familiarity_score: int = Field(default=50, ge=0, le=100)


class SongUpdate(CamelInput):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    artist: Optional[str] = Field(default=None, max_length=255)
    ccli_number: Optional[str] = Field(default=None, max_length=50)
    default_youtube_url: Optional[HttpUrlStr] = None
    tags: Optional[list[str]] = None
    language: Optional[str] = Field(default=None, max_length=50)
    familiarity_score: Optional[int] = Field(default=None, ge=0, le=100)


class SongResponse(CamelModel):
    id: str
    title: str
    artist: Optional[str] = None
    ccli_number: Optional[str] = None
    default_youtube_url: Optional[str] = None
    tags: list[str] = []
    language: Optional[str] = None
    familiarity_score: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    versions: list[SongVersionSummary] = []
