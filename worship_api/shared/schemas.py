"""Shared Pydantic base and the summary shapes embedded across domains"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, HttpUrl, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from .time_utils import to_naive_utc

_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    _http_url.validate_python(value)
    return value


# Validated as an http(s) URL but kept as the caller wrote it
HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python, either accepted as input"""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel
        use_enum_values = True


class CamelInput(CamelModel):
    """Request bodies: incoming datetimes are normalized to naive UTC"""

    @field_validator("*", mode="after")
    @classmethod
    def normalize_datetimes(cls, v):
        if isinstance(v, datetime):
            return to_naive_utc(v)
        return v


class UserSummary(CamelModel):
    id: str
    name: str
    email: str


class UserWithRoles(UserSummary):
    roles: list[str] = []


class ServiceTypeSummary(CamelModel):
    id: str
    name: str


class InstrumentSummary(CamelModel):
    id: str
    code: str
    display_name: str
    max_per_set: int


class SongSummary(CamelModel):
    id: str
    title: str
    artist: Optional[str] = None
    familiarity_score: int = 50


class SongVersionSummary(CamelModel):
    id: str
    song_id: str
    name: str
    youtube_url: Optional[str] = None
    default_key: Optional[str] = None
    bpm: Optional[int] = None


class SongVersionWithSong(SongVersionSummary):
    song: SongSummary


class SongWithVersions(SongSummary):
    versions: list[SongVersionSummary] = []


class ServiceSummary(CamelModel):
    id: str
    service_type_id: str
    service_date: datetime
    status: str
    service_type: Optional[ServiceTypeSummary] = None


class MessageResponse(BaseModel):
    message: str
