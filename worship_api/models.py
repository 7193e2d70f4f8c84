import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base
from .shared.time_utils import utcnow


def generate_uuid():
    return str(uuid.uuid4())


class Role(str, enum.Enum):
    admin = "admin"
    leader = "leader"
    musician = "musician"


class ServiceStatus(str, enum.Enum):
    planned = "planned"
    published = "published"
    cancelled = "cancelled"


class SetStatus(str, enum.Enum):
    draft = "draft"
    collecting = "collecting"
    selecting = "selecting"
    published = "published"
    locked = "locked"


class SlotStatus(str, enum.Enum):
    pending = "pending"
    submitted = "submitted"
    missed = "missed"


class SuggestionStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class AssignmentStatus(str, enum.Enum):
    invited = "invited"
    accepted = "accepted"
    declined = "declined"
    withdrawn = "withdrawn"


class Channel(str, enum.Enum):
    email = "email"
    sms = "sms"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=True)  # bcrypt hash, null for invited users
    name = Column(String(255), nullable=False)
    phone_e164 = Column(String(20), nullable=True)
    roles = Column(JSON, default=list, nullable=False)  # list of Role values
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    instruments = relationship(
        "UserInstrument", back_populates="user", cascade="all, delete-orphan"
    )

    def has_role(self, *roles) -> bool:
        wanted = {r.value if isinstance(r, Role) else r for r in roles}
        return bool(wanted.intersection(self.roles or []))

    @property
    def is_admin(self) -> bool:
        return self.has_role(Role.admin)


class ServiceType(Base):
    __tablename__ = "service_types"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), unique=True, nullable=False)
    default_start_time = Column(String(20), nullable=False)  # "HH:mm"
    rrule = Column(Text, nullable=True)  # RFC 5545 recurrence rule

    default_assignments = relationship(
        "DefaultAssignment", back_populates="service_type", cascade="all, delete-orphan"
    )


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (UniqueConstraint("service_type_id", "service_date", name="uq_service_type_date"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    service_type_id = Column(String(36), ForeignKey("service_types.id"), nullable=False, index=True)
    service_date = Column(DateTime, nullable=False, index=True)
    leader_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(20), default=ServiceStatus.planned.value, nullable=False)

    service_type = relationship("ServiceType")
    leader = relationship("User")
    worship_set = relationship(
        "WorshipSet", back_populates="service", uselist=False, cascade="all, delete-orphan"
    )


class WorshipSet(Base):
    __tablename__ = "worship_sets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    service_id = Column(String(36), ForeignKey("services.id"), unique=True, nullable=False)
    status = Column(String(20), default=SetStatus.draft.value, nullable=False)
    suggest_due_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    leader_user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    service = relationship("Service", back_populates="worship_set")
    leader_user = relationship("User")
    set_songs = relationship(
        "SetSong", back_populates="worship_set", order_by="SetSong.position", cascade="all, delete-orphan"
    )
    suggestion_slots = relationship(
        "SuggestionSlot", back_populates="worship_set", cascade="all, delete-orphan"
    )
    assignments = relationship("Assignment", back_populates="worship_set", cascade="all, delete-orphan")

    @property
    def song_count(self) -> int:
        return len(self.set_songs)


class Song(Base):
    __tablename__ = "songs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False, index=True)
    artist = Column(String(255), nullable=True)
    ccli_number = Column(String(50), nullable=True)
    default_youtube_url = Column(String(500), nullable=True)
    tags = Column(JSON, default=list, nullable=False)
    language = Column(String(50), nullable=True)
    familiarity_score = Column(Integer, default=50, nullable=False)  # 0-100, < 50 counts as new
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    versions = relationship("SongVersion", back_populates="song", order_by="SongVersion.name")


class SongVersion(Base):
    __tablename__ = "song_versions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    song_id = Column(String(36), ForeignKey("songs.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    youtube_url = Column(String(500), nullable=True)
    default_key = Column(String(10), nullable=True)
    bpm = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    song = relationship("Song", back_populates="versions")
    chord_sheet = relationship(
        "ChordSheet", back_populates="song_version", uselist=False, cascade="all, delete-orphan"
    )


class SetSong(Base):
    __tablename__ = "set_songs"
    __table_args__ = (UniqueConstraint("set_id", "position", name="uq_set_song_position"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    set_id = Column(String(36), ForeignKey("worship_sets.id"), nullable=False, index=True)
    song_version_id = Column(String(36), ForeignKey("song_versions.id"), nullable=False)
    position = Column(Integer, nullable=False)
    key_override = Column(String(10), nullable=True)
    youtube_url_override = Column(String(500), nullable=True)
    is_new = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)
    singer_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    worship_set = relationship("WorshipSet", back_populates="set_songs")
    song_version = relationship("SongVersion")
    singer = relationship("User")


class SuggestionSlot(Base):
    __tablename__ = "suggestion_slots"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    set_id = Column(String(36), ForeignKey("worship_sets.id"), nullable=False, index=True)
    assigned_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    min_songs = Column(Integer, default=1, nullable=False)
    max_songs = Column(Integer, default=3, nullable=False)
    due_at = Column(DateTime, nullable=False)
    status = Column(String(20), default=SlotStatus.pending.value, nullable=False)

    worship_set = relationship("WorshipSet", back_populates="suggestion_slots")
    assigned_user = relationship("User")
    suggestions = relationship("Suggestion", back_populates="slot", cascade="all, delete-orphan")


class Suggestion(Base):
    __tablename__ = "suggestions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    slot_id = Column(String(36), ForeignKey("suggestion_slots.id"), nullable=False, index=True)
    song_id = Column(String(36), ForeignKey("songs.id"), nullable=False)
    youtube_url_override = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), default=SuggestionStatus.pending.value, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    slot = relationship("SuggestionSlot", back_populates="suggestions")
    song = relationship("Song")


class Instrument(Base):
    __tablename__ = "instruments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, nullable=False)
    display_name = Column(String(100), nullable=False)
    max_per_set = Column(Integer, default=1, nullable=False)

    assignments = relationship("Assignment", back_populates="instrument", passive_deletes="all")
    default_assignments = relationship(
        "DefaultAssignment", back_populates="instrument", passive_deletes="all"
    )


class DefaultAssignment(Base):
    __tablename__ = "default_assignments"
    __table_args__ = (
        UniqueConstraint("service_type_id", "instrument_id", name="uq_default_assignment_type_instrument"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    service_type_id = Column(String(36), ForeignKey("service_types.id"), nullable=False, index=True)
    instrument_id = Column(String(36), ForeignKey("instruments.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    service_type = relationship("ServiceType", back_populates="default_assignments")
    instrument = relationship("Instrument", back_populates="default_assignments")
    user = relationship("User")


class Assignment(Base):
    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint("set_id", "instrument_id", "user_id", name="uq_assignment_set_instrument_user"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    set_id = Column(String(36), ForeignKey("worship_sets.id"), nullable=False, index=True)
    instrument_id = Column(String(36), ForeignKey("instruments.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), default=AssignmentStatus.invited.value, nullable=False)
    invited_at = Column(DateTime, default=utcnow, nullable=True)
    responded_at = Column(DateTime, nullable=True)

    worship_set = relationship("WorshipSet", back_populates="assignments")
    instrument = relationship("Instrument", back_populates="assignments")
    user = relationship("User")


class Availability(Base):
    __tablename__ = "availability"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    start = Column(DateTime, nullable=False)
    end = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)

    user = relationship("User")


class NotificationLog(Base):
    __tablename__ = "notification_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    channel = Column(String(10), nullable=False)
    template_key = Column(String(100), nullable=False)
    payload_json = Column(JSON, nullable=True)
    sent_at = Column(DateTime, default=utcnow, nullable=False)
    status = Column(String(50), nullable=False)

    user = relationship("User")


class LeaderRotation(Base):
    __tablename__ = "leader_rotations"
    __table_args__ = (
        UniqueConstraint("service_type_id", "rotation_order", name="uq_leader_rotation_type_order"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    service_type_id = Column(String(36), ForeignKey("service_types.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    rotation_order = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)  # soft delete flag
    created_at = Column(DateTime, default=utcnow, nullable=False)

    service_type = relationship("ServiceType")
    user = relationship("User")


class ChordSheet(Base):
    __tablename__ = "chord_sheets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    song_version_id = Column(String(36), ForeignKey("song_versions.id"), unique=True, nullable=False)
    chord_text = Column(Text, nullable=True)
    original_key = Column(String(10), nullable=True)
    external_url = Column(String(500), nullable=True)
    file_url = Column(String(1000), nullable=True)
    file_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    song_version = relationship("SongVersion", back_populates="chord_sheet")


class PasswordResetToken(Base):
    __tablename__ = "password_reset_tokens"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    token = Column(String(64), unique=True, nullable=False, index=True)  # sha256 hex of the raw token
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User")


class SingerSongKey(Base):
    __tablename__ = "singer_song_keys"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    singer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    song_id = Column(String(36), ForeignKey("songs.id"), nullable=False, index=True)
    key = Column(String(10), nullable=False)
    service_date = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    singer = relationship("User")
    song = relationship("Song")


class UserInstrument(Base):
    __tablename__ = "user_instruments"
    __table_args__ = (UniqueConstraint("user_id", "instrument_id", name="uq_user_instrument"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    instrument_id = Column(String(36), ForeignKey("instruments.id"), nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)
    proficiency_level = Column(String(20), nullable=True)

    user = relationship("User", back_populates="instruments")
    instrument = relationship("Instrument")
