"""ORM model for opaque session tokens issued on login."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class Token(Base):
    """
    Session token owned by exactly one user. A user may hold many tokens.

    There is no expiry: a token lives until it is logged out. The owner is loaded
    eagerly so a token returned from logout can still be read after deletion.
    """

    __tablename__ = "tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    value = Column(String(255), nullable=False, unique=True, index=True)
    owner_login = Column(
        String(255),
        ForeignKey("users.login", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    owner = relationship("User", back_populates="tokens", lazy="joined")
