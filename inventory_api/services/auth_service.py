import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_api.config import Settings
from inventory_api.core.constants import DEFAULT_ROLE
from inventory_api.core.dates import utc_now
from inventory_api.core.exceptions import AuthenticationFailed, ConstraintViolation
from inventory_api.core.security import create_access_token, hash_password, verify_password
from inventory_api.models.user import User
from inventory_api.services.store_errors import translate_store_errors

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def _email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = select(User.id).where(User.email == email.strip().lower())
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        return self.db.scalar(query.limit(1)) is not None

    def _commit_user(self, email: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConstraintViolation(f"Email '{email}' is already registered") from exc

    def issue_token(self, user: User) -> str:
        return create_access_token(user.id, user.role, self.settings)

    def register(self, name: str, email: str, password: str, role: Optional[str] = None) -> User:
        with translate_store_errors(self.db, "registering a user"):
            if self._email_taken(email):
                raise ConstraintViolation(f"Email '{email}' is already registered")
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password, self.settings.PASSWORD_PBKDF2_ROUNDS),
                role=role or DEFAULT_ROLE,
            )
            self.db.add(user)
            self._commit_user(email)
            self.db.refresh(user)

        logger.info("Registered user %s with role %s", user.id, user.role)
        return user

    def authenticate(self, email: str, password: str) -> User:
        with translate_store_errors(self.db, "authenticating a user"):
            user = self.db.scalar(select(User).where(User.email == email.strip().lower()))
            if user is None or not verify_password(password, user.password_hash):
                logger.warning("Failed login attempt for %s", email)
                raise AuthenticationFailed("Invalid credentials")
            if not user.is_active:
                raise AuthenticationFailed("Account is deactivated")

            user.last_login_at = utc_now()
            self.db.commit()
        return user

    def get_active_user(self, user_id: int) -> User:
        with translate_store_errors(self.db, "loading the current user"):
            user = self.db.get(User, user_id)
        if user is None:
            raise AuthenticationFailed("User not found")
        if not user.is_active:
            raise AuthenticationFailed("Account is deactivated")
        return user

    def update_profile(self, user: User, name: Optional[str] = None, email: Optional[str] = None) -> User:
        with translate_store_errors(self.db, "updating a profile"):
            if email is not None and self._email_taken(email, exclude_id=user.id):
                raise ConstraintViolation(f"Email '{email}' is already registered")
            if name is not None:
                user.name = name
            if email is not None:
                user.email = email
            self._commit_user(email or user.email)
            self.db.refresh(user)
        return user

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationFailed("Current password is incorrect")
        with translate_store_errors(self.db, "changing a password"):
            user.password_hash = hash_password(new_password, self.settings.PASSWORD_PBKDF2_ROUNDS)
            self.db.commit()
        logger.info("Password changed for user %s", user.id)


__all__ = ["AuthService"]
