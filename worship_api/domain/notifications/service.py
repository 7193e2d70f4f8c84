"""Notification service - Log of messages sent to team members"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import ensure_self_or_roles
from ...models import NotificationLog, Role, User
from ...shared.time_utils import utcnow
from .schemas import NotificationCreate

logger = logging.getLogger(__name__)


class NotificationService:
    """Service layer for notification log business logic"""

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str, current_user: User) -> list[NotificationLog]:
        ensure_self_or_roles(current_user, user_id, Role.admin, Role.leader)
        return (
            self.db.query(NotificationLog)
            .filter(NotificationLog.user_id == user_id)
            .order_by(NotificationLog.sent_at.desc())
            .all()
        )

    def get_notification(self, notification_id: str, current_user: User) -> NotificationLog:
        log = self.db.query(NotificationLog).filter(NotificationLog.id == notification_id).first()
        if not log:
            raise HTTPException(status_code=404, detail="Notification not found")
        ensure_self_or_roles(current_user, log.user_id, Role.admin, Role.leader)
        return log

    def record(self, data: NotificationCreate) -> NotificationLog:
        log = NotificationLog(**data.model_dump(), sent_at=utcnow())
        self.db.add(log)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="User not found") from e
        self.db.refresh(log)
        logger.info(f"📨 Logged {log.channel} notification '{log.template_key}' for user {log.user_id}")
        return log
