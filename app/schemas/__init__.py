"""Pydantic request/response schemas."""

from app.schemas.auth import (
    Credentials,
    Principal,
    RoleChangeRequest,
    TokenResponse,
    UserPublic,
    UsersListResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "Credentials",
    "HealthResponse",
    "Principal",
    "RoleChangeRequest",
    "TokenResponse",
    "UserPublic",
    "UsersListResponse",
]
