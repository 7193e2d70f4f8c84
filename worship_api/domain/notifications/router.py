"""Notification router - FastAPI endpoints for the notification log"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...shared.validators import valid_uuid
from .schemas import NotificationCreate, NotificationResponse
from .service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


@router.get("/user/{user_id}", dependencies=[Depends(valid_uuid("user_id"))])
async def list_notifications_for_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    logs = service.list_for_user(user_id, current_user)
    return {"data": [NotificationResponse.model_validate(n) for n in logs]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_notification(
    id: str,
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return {"data": NotificationResponse.model_validate(service.get_notification(id, current_user))}


@router.post("", status_code=201)
async def create_notification(
    data: NotificationCreate,
    _: User = Depends(require_role(Role.admin, Role.leader)),
    service: NotificationService = Depends(get_notification_service),
):
    return {"data": NotificationResponse.model_validate(service.record(data))}
