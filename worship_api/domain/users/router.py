"""User router - FastAPI endpoints for accounts and authentication"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_role
from ...database import get_db
from ...models import Role, User
from ...rate_limiter import login_rate_limit, password_reset_rate_limit, signup_rate_limit
from ...shared.validators import valid_uuid
from .schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    MeResponse,
    ResetPasswordRequest,
    SignupRequest,
    SignupResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


# ============================================================================
# AUTHENTICATION
# ============================================================================


@router.post("/signup", status_code=201, dependencies=[Depends(signup_rate_limit)])
async def signup(data: SignupRequest, service: UserService = Depends(get_user_service)):
    """Public self-registration"""
    user = service.signup(data)
    return {"data": SignupResponse.model_validate(user)}


@router.post("/login", dependencies=[Depends(login_rate_limit)])
async def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    """Exchange credentials for a JWT"""
    return {"data": service.login(data)}


@router.post("/forgot-password", dependencies=[Depends(password_reset_rate_limit)])
async def forgot_password(data: ForgotPasswordRequest, service: UserService = Depends(get_user_service)):
    return {"data": await service.forgot_password(data.email)}


@router.post("/reset-password")
async def reset_password(data: ResetPasswordRequest, service: UserService = Depends(get_user_service)):
    return {"data": service.reset_password(data)}


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    """Profile of the authenticated user"""
    return {"data": MeResponse.model_validate(current_user)}


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("")
async def list_users(
    _: User = Depends(require_role(Role.admin)),
    service: UserService = Depends(get_user_service),
):
    return {"data": [UserResponse.model_validate(u) for u in service.list_users()]}


@router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def get_user(
    id: str,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Self or admin"""
    return {"data": UserResponse.model_validate(service.get_user_for(id, current_user))}


@router.post("", status_code=201)
async def create_user(
    data: UserCreate,
    _: User = Depends(require_role(Role.admin)),
    service: UserService = Depends(get_user_service),
):
    return {"data": UserResponse.model_validate(service.create_user(data))}


@router.put("/{id}", dependencies=[Depends(valid_uuid("id"))])
async def update_user(
    id: str,
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return {"data": UserResponse.model_validate(service.update_user(id, data, current_user))}


@router.delete("/{id}", status_code=204, dependencies=[Depends(valid_uuid("id"))])
async def delete_user(
    id: str,
    _: User = Depends(require_role(Role.admin)),
    service: UserService = Depends(get_user_service),
):
    """Deactivate a user"""
    service.deactivate_user(id)
