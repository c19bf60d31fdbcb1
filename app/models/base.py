"""SQLAlchemy declarative Base shared by the account models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for the users and tokens tables."""
