"""Suggestion service - Business logic for song suggestions and their review"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import ensure_self_or_roles
from ...models import (
    Role,
    SlotStatus,
    Song,
    SongVersion,
    Suggestion,
    SuggestionSlot,
    SuggestionStatus,
    User,
    WorshipSet,
)
from ...shared.schemas import UserSummary
from ...shared.time_utils import utcnow
from ..set_songs.repository import SetSongRepository
from ..set_songs.service import NEW_SONG_FAMILIARITY_THRESHOLD, position_taken
from .repository import SuggestionRepository
from .schemas import (
    SlotInfo,
    SuggestionApprove,
    SuggestionCreate,
    SuggestionUpdate,
    SuggestionWithSong,
    WorshipSetSuggestion,
)

logger = logging.getLogger(__name__)

MAX_SET_SONGS = 6


class SuggestionService:
    """Service layer for suggestion business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SuggestionRepository()
        self.set_song_repo = SetSongRepository()

    def _get_slot(self, slot_id: str) -> SuggestionSlot:
        slot = self.db.query(SuggestionSlot).filter(SuggestionSlot.id == slot_id).first()
        if not slot:
            raise HTTPException(status_code=404, detail="Slot not found")
        return slot

    def get_suggestion(self, suggestion_id: str) -> Suggestion:
        suggestion = self.repo.get_by_id(self.db, suggestion_id)
        if not suggestion:
            raise HTTPException(status_code=404, detail="Suggestion not found")
        return suggestion

    def list_by_slot(self, slot_id: str, current_user: User) -> list[Suggestion]:
        slot = self._get_slot(slot_id)
        ensure_self_or_roles(current_user, slot.assigned_user_id, Role.admin, Role.leader)
        return self.repo.list_by_slot(self.db, slot_id)

    def get_for_user(self, suggestion_id: str, current_user: User) -> Suggestion:
        suggestion = self.get_suggestion(suggestion_id)
        ensure_self_or_roles(current_user, suggestion.slot.assigned_user_id, Role.admin, Role.leader)
        return suggestion

    def create_suggestion(self, data: SuggestionCreate, current_user: User) -> Suggestion:
        """Suggest a song; the slot is submitted once it holds `min_songs` suggestions"""
        slot = self._get_slot(data.slot_id)
        if utcnow() > slot.due_at:
            raise HTTPException(status_code=400, detail="Suggestion deadline has passed")
        ensure_self_or_roles(current_user, slot.assigned_user_id, Role.admin)
        if self.repo.find_in_slot(self.db, slot.id, data.song_id):
            raise HTTPException(status_code=400, detail="You have already suggested this song for this slot")
        if not self.db.query(Song).filter(Song.id == data.song_id).first():
            raise HTTPException(status_code=404, detail="Song not found")

        suggestion = Suggestion(**data.model_dump())
        self.db.add(suggestion)
        self.db.flush()
        if slot.status == SlotStatus.pending.value and self.repo.count_in_slot(self.db, slot.id) >= slot.min_songs:
            slot.status = SlotStatus.submitted.value
            logger.info(f"📥 Suggestion slot {slot.id} reached {slot.min_songs} songs and is now submitted")
        self.db.commit()
        self.db.refresh(suggestion)
        return suggestion

    def update_suggestion(self, suggestion_id: str, data: SuggestionUpdate, current_user: User) -> Suggestion:
        suggestion = self.get_suggestion(suggestion_id)
        ensure_self_or_roles(current_user, suggestion.slot.assigned_user_id, Role.admin)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(suggestion, key, value)
        self.db.commit()
        self.db.refresh(suggestion)
        return suggestion

    def delete_suggestion(self, suggestion_id: str, current_user: User) -> None:
        suggestion = self.get_suggestion(suggestion_id)
        ensure_self_or_roles(current_user, suggestion.slot.assigned_user_id, Role.admin, Role.leader)
        self.db.delete(suggestion)
        self.db.commit()

    def list_by_worship_set(self, worship_set_id: str, current_user: User) -> list[WorshipSetSuggestion]:
        """
        Every suggestion made for a set, flattened across its slots.

        Admins and leaders always see them. Anyone else must lead the set,
        play in it, or hold one of its slots.
        """
        worship_set = self.db.query(WorshipSet).filter(WorshipSet.id == worship_set_id).first()
        if not worship_set:
            raise HTTPException(status_code=404, detail="Worship set not found")
        if not current_user.has_role(Role.admin, Role.leader):
            allowed = worship_set.leader_user_id == current_user.id or self.repo.user_takes_part_in_set(
                self.db, worship_set_id, current_user.id
            )
            if not allowed:
                raise HTTPException(status_code=403, detail="Forbidden")

        suggestions = []
        for slot in self.repo.slots_for_set(self.db, worship_set_id):
            suggester = UserSummary.model_validate(slot.assigned_user)
            slot_info = SlotInfo.model_validate(slot)
            for suggestion in slot.suggestions:
                base = SuggestionWithSong.model_validate(suggestion)
                suggestions.append(
                    WorshipSetSuggestion(**base.model_dump(), suggester=suggester, slot_info=slot_info)
                )
        return suggestions

    def _ensure_set_leader(self, suggestion: Suggestion, current_user: User, action: str) -> WorshipSet:
        worship_set = suggestion.slot.worship_set
        if not current_user.is_admin and worship_set.leader_user_id != current_user.id:
            raise HTTPException(
                status_code=403,
                detail=f"Only the worship set leader or an admin can {action} suggestions",
            )
        return worship_set

    def approve(self, suggestion_id: str, data: SuggestionApprove, current_user: User) -> dict:
        """Approve a suggestion, optionally placing a version of the song in the set"""
        suggestion = self.get_suggestion(suggestion_id)
        worship_set = self._ensure_set_leader(suggestion, current_user, "approve")

        added = False
        if data.add_to_set and data.song_version_id:
            song_count = self.set_song_repo.count_for_set(self.db, worship_set.id)
            if song_count >= MAX_SET_SONGS:
                raise HTTPException(
                    status_code=400, detail=f"Worship set is at maximum capacity ({MAX_SET_SONGS} songs)"
                )
            version = self.db.query(SongVersion).filter(SongVersion.id == data.song_version_id).first()
            if not version:
                raise HTTPException(status_code=404, detail="Song version not found")

            position = data.position or song_count + 1
            if self.set_song_repo.get_by_position(self.db, worship_set.id, position):
                raise position_taken(position)
            self.set_song_repo.add(
                self.db,
                set_id=worship_set.id,
                song_version_id=version.id,
                position=position,
                is_new=version.song.familiarity_score < NEW_SONG_FAMILIARITY_THRESHOLD,
            )
            added = True

        suggestion.status = SuggestionStatus.approved.value
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise position_taken(data.position) from e
        self.db.refresh(suggestion)

        logger.info(f"✅ Approved suggestion {suggestion_id}{' and added it to set ' + worship_set.id if added else ''}")
        message = "Suggestion approved and added to worship set" if added else "Suggestion approved"
        return {"message": message, "suggestion": suggestion}

    def reject(self, suggestion_id: str, current_user: User) -> dict:
        suggestion = self.get_suggestion(suggestion_id)
        self._ensure_set_leader(suggestion, current_user, "reject")

        suggestion.status = SuggestionStatus.rejected.value
        self.db.commit()
        self.db.refresh(suggestion)
        return {"message": "Suggestion rejected", "suggestion": suggestion}
