"""ORM model for application users (login credentials and role)."""

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class Role(str, enum.Enum):
    """Closed set of roles; compared by value."""

    USER = "USER"
    ADMINISTRATOR = "ADMINISTRATOR"


class User(Base):
    """
    User account for token authentication and role-based access control.

    login is unique and never changes after creation; password_hash holds a bcrypt hash.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    login = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, length=32),
        nullable=False,
        default=Role.USER,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    tokens = relationship(
        "Token",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User login={self.login!r} role={self.role}>"
