from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import validates

from inventory_api.core.constants import DEFAULT_ROLE
from inventory_api.database.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=DEFAULT_ROLE)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_login_at = Column(DateTime(timezone=True))

    @validates("email")
    def _normalize_email(self, _key, value):
        return value.strip().lower() if value else value

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


__all__ = ["User"]
