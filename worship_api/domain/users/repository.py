"""User repository - Database operations for users and password reset tokens"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import PasswordResetToken, User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_by_id(db: Session, user_id: str) -> Optional[User]:
        """Get a user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        """Get a user by email"""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def list_users(db: Session) -> list[User]:
        """Get all users ordered by name"""
        return db.query(User).order_by(User.name.asc()).all()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        """Create a new user"""
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Apply updates to a user"""
        for key, value in updates.items():
            setattr(user, key, value)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def replace_reset_token(db: Session, user_id: str, token_hash: str, expires_at) -> PasswordResetToken:
        """Invalidate previous reset tokens for the user and store a new one"""
        db.query(PasswordResetToken).filter(PasswordResetToken.user_id == user_id).delete()
        reset_token = PasswordResetToken(user_id=user_id, token=token_hash, expires_at=expires_at)
        db.add(reset_token)
        db.commit()
        return reset_token

    @staticmethod
    def get_reset_token(db: Session, token_hash: str) -> Optional[PasswordResetToken]:
        """Get a reset token by its sha256 digest"""
        return db.query(PasswordResetToken).filter(PasswordResetToken.token == token_hash).first()
