import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import Assignment, Role, User, WorshipSet
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header becomes our own 401 instead of FastAPI's default
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer JWT to an active user"""
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Missing token")

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("userId"):
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.query(User).filter(User.id == payload["userId"]).first()
    if not user:
        logger.warning(f"⚠️ Token presented for unknown user {payload['userId']}")
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account is deactivated")

    return user


def require_role(*roles: Role):
    """
    Create a dependency that only lets users holding one of the roles through

    Example usage:
        @router.post("")
        async def create_instrument(current_user: User = Depends(require_role(Role.admin))):
            ...
    """

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(*roles):
            logger.warning(
                f"🚫 User {current_user.id} lacks role {[r.value for r in roles]} (has {current_user.roles})"
            )
            raise HTTPException(status_code=403, detail="Forbidden: insufficient role")
        return current_user

    return dependency


def ensure_self_or_roles(
    current_user: User, user_id: Optional[str], *roles: Role, detail: str = "Forbidden"
) -> None:
    """Raise 403 unless the caller is `user_id` or holds one of the roles"""
    if current_user.id == user_id:
        return
    if roles and current_user.has_role(*roles):
        return
    raise HTTPException(status_code=403, detail=detail)


def require_worship_set_leader(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    """Admins, or the leader of the worship set identified by the `id` path parameter"""
    if current_user.is_admin:
        return current_user

    worship_set = db.query(WorshipSet).filter(WorshipSet.id == request.path_params.get("id")).first()
    if not worship_set:
        raise HTTPException(status_code=404, detail="Worship set not found")
    if worship_set.leader_user_id != current_user.id:
        raise HTTPException(
            status_code=403,
            detail="Only the worship set leader or an admin can perform this action",
        )
    return current_user


def require_assignment_worship_set_leader(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    """Admins, or the leader of the set the assignment in the `id` path parameter belongs to"""
    if current_user.is_admin:
        return current_user

    assignment = db.query(Assignment).filter(Assignment.id == request.path_params.get("id")).first()
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    if assignment.worship_set.leader_user_id != current_user.id:
        raise HTTPException(
            status_code=403,
            detail="Only the worship set leader or an admin can manage this assignment",
        )
    return current_user
