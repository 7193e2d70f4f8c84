"""User service - Business logic for accounts, authentication and password resets"""

import logging
from datetime import timedelta

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import ensure_self_or_roles
from ...config import APP_URL, PASSWORD_RESET_EXPIRY_MINUTES
from ...email_service import EmailError, send_password_reset_email
from ...models import Role, User
from ...security_utils import (
    create_access_token,
    generate_reset_token,
    hash_password,
    hash_token,
    verify_password,
)
from ...shared.time_utils import utcnow
from .repository import UserRepository
from .schemas import (
    LoginRequest,
    LoginUser,
    ResetPasswordRequest,
    SignupRequest,
    UserCreate,
    UserUpdate,
)

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account exists with this email, we have sent a reset link."


def _role_values(roles) -> list[str]:
    return [Role(r).value for r in roles]


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def _create(self, **user_data) -> User:
        if self.repo.get_by_email(self.db, user_data["email"]):
            raise HTTPException(status_code=400, detail="Email already in use")
        try:
            return self.repo.create_user(self.db, **user_data)
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="Email already in use") from e

    def signup(self, data: SignupRequest) -> User:
        """Self-registration always yields a plain musician account"""
        logger.info(f"📥 Signup request for {data.email}")
        return self._create(
            name=data.name,
            email=data.email,
            phone_e164=data.phone_e164,
            password=hash_password(data.password),
            roles=[Role.musician.value],
        )

    def login(self, data: LoginRequest) -> dict:
        user = self.repo.get_by_email(self.db, data.email)
        if not user or not user.is_active or not verify_password(data.password, user.password):
            logger.warning(f"⚠️ Failed login for {data.email}")
            raise HTTPException(status_code=401, detail="Invalid credentials")

        token = create_access_token(user.id, user.roles)
        logger.info(f"✅ User {user.id} logged in")
        return {"token": token, "user": LoginUser.model_validate(user)}

    async def forgot_password(self, email: str) -> dict:
        """Issue a reset link; the response never reveals whether the account exists"""
        user = self.repo.get_by_email(self.db, email)
        if not user or not user.is_active:
            return {"message": FORGOT_PASSWORD_MESSAGE}

        raw_token = generate_reset_token()
        expires_at = utcnow() + timedelta(minutes=PASSWORD_RESET_EXPIRY_MINUTES)
        self.repo.replace_reset_token(self.db, user.id, hash_token(raw_token), expires_at)

        reset_link = f"{APP_URL}/auth/reset-password?token={raw_token}"
        try:
            await send_password_reset_email(user.email, reset_link)
        except EmailError as e:
            logger.error(f"❌ Could not send password reset email to user {user.id}: {e}")

        return {"message": FORGOT_PASSWORD_MESSAGE}

    def reset_password(self, data: ResetPasswordRequest) -> dict:
        reset_token = self.repo.get_reset_token(self.db, hash_token(data.token))
        if not reset_token:
            raise HTTPException(status_code=400, detail="Invalid or expired reset link")
        if reset_token.used_at is not None:
            raise HTTPException(status_code=400, detail="This reset link has already been used")
        if reset_token.expires_at < utcnow():
            raise HTTPException(status_code=400, detail="This reset link has expired")

        # Password change and token consumption commit together
        reset_token.user.password = hash_password(data.password)
        reset_token.used_at = utcnow()
        self.db.commit()
        logger.info(f"🔄 Password reset for user {reset_token.user_id}")
        return {"message": "Password has been reset successfully"}

    def list_users(self) -> list[User]:
        return self.repo.list_users(self.db)

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def get_user_for(self, user_id: str, current_user: User) -> User:
        """Self or admin only"""
        ensure_self_or_roles(current_user, user_id, Role.admin)
        return self.get_user(user_id)

    def create_user(self, data: UserCreate) -> User:
        return self._create(
            name=data.name,
            email=data.email,
            phone_e164=data.phone_e164,
            password=hash_password(data.password),
            roles=_role_values(data.roles),
        )

    def update_user(self, user_id: str, data: UserUpdate, current_user: User) -> User:
        ensure_self_or_roles(current_user, user_id, Role.admin)
        user = self.get_user(user_id)
        payload = data.model_dump(exclude_unset=True)

        if not current_user.is_admin:
            if "roles" in payload:
                raise HTTPException(status_code=403, detail="Only admins can update roles")
            if "password" in payload:
                raise HTTPException(
                    status_code=403, detail="Use password change endpoint to update password"
                )
            if "is_active" in payload:
                raise HTTPException(status_code=403, detail="Only admins can change account status")

        updates = {}
        for field in ("name", "email", "is_active"):
            if payload.get(field) is not None:
                updates[field] = payload[field]
        if "phone_e164" in payload:
            updates["phone_e164"] = payload["phone_e164"]
        if payload.get("roles") is not None:
            updates["roles"] = _role_values(payload["roles"])
        if payload.get("password"):
            updates["password"] = hash_password(payload["password"])

        if "email" in updates and updates["email"] != user.email:
            if self.repo.get_by_email(self.db, updates["email"]):
                raise HTTPException(status_code=400, detail="Email already in use")

        return self.repo.update_user(self.db, user, **updates)

    def deactivate_user(self, user_id: str) -> None:
        """Users are deactivated rather than deleted so history stays intact"""
        user = self.get_user(user_id)
        self.repo.update_user(self.db, user, is_active=False)
        logger.info(f"🚫 User {user_id} deactivated")
