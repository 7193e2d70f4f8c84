"""
Leader rotation scheduler

Worship leaders take turns in a circular round-robin per service type. The
i-th upcoming service is led by rotations[i % n]; whenever membership or order
changes the whole future schedule is recomputed.
"""

import logging
from typing import Optional, Sequence

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import LeaderRotation
from ...shared.time_utils import start_of_today
from .repository import LeaderRotationRepository

logger = logging.getLogger(__name__)


def next_rotation_index(rotations: Sequence[LeaderRotation], last_leader_id: Optional[str]) -> int:
    """Index of the rotation after `last_leader_id`; 0 if unknown or not in the rotation"""
    if not rotations or last_leader_id is None:
        return 0
    for idx, rotation in enumerate(rotations):
        if rotation.user_id == last_leader_id:
            return (idx + 1) % len(rotations)
    return 0


def leader_at(rotations: Sequence[LeaderRotation], index: int) -> Optional[str]:
    """User id of the rotation at `index`, wrapping around; None when nobody rotates"""
    if not rotations:
        return None
    return rotations[index % len(rotations)].user_id


class LeaderScheduler:
    """Applies the rotation to stored services"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LeaderRotationRepository()

    def active_rotations(self, service_type_id: str) -> list[LeaderRotation]:
        return self.repo.list_active_for_type(self.db, service_type_id)

    def last_assigned_leader_id(self, service_type_id: str) -> Optional[str]:
        service = self.repo.last_led_service(self.db, service_type_id)
        return service.worship_set.leader_user_id if service else None

    def next_start_index(self, service_type_id: str, rotations: Sequence[LeaderRotation]) -> int:
        """Where the rotation resumes for services appended after the last led one"""
        return next_rotation_index(rotations, self.last_assigned_leader_id(service_type_id))

    def recalculate(self, service_type_id: str) -> int:
        """
        Reassign leaders of every worship set for services from today onward.

        With no active rotation the leaders are cleared. Services without a
        worship set still consume their turn. Returns the number of worship sets
        touched, whether or not their leader changed.
        """
        rotations = self.active_rotations(service_type_id)
        services = self.repo.future_services(self.db, service_type_id, start_of_today())

        touched = changed = 0
        for i, service in enumerate(services):
            worship_set = service.worship_set
            if worship_set is None:
                continue
            touched += 1
            leader_id = leader_at(rotations, i)
            if worship_set.leader_user_id != leader_id:
                worship_set.leader_user_id = leader_id
                changed += 1

        self.db.commit()
        logger.info(
            f"🔄 Recalculated leaders for service type {service_type_id}: "
            f"{len(services)} upcoming services, {len(rotations)} leaders, {touched} sets, {changed} changed"
        )
        return touched

    def next_leader(self, service_type_id: str) -> LeaderRotation:
        """Rotation entry that should lead the next unscheduled service"""
        rotations = self.active_rotations(service_type_id)
        if not rotations:
            raise HTTPException(
                status_code=404, detail="No active leader rotation found for this service type"
            )
        return rotations[self.next_start_index(service_type_id, rotations)]
