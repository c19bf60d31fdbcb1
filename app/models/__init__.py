"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.token import Token
from app.models.user import Role, User

__all__ = ["Base", "Role", "Token", "User"]
