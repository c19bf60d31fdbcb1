"""Request/response schemas for auth and user-administration endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    LOGIN_MAX_LEN,
    LOGIN_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from app.models.user import Role


class Credentials(BaseModel):
    """Login and plain-text password (register, login, password change)."""

    login: str = Field(
        ..., min_length=LOGIN_MIN_LEN, max_length=LOGIN_MAX_LEN, description="Login"
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )


class RoleChangeRequest(BaseModel):
    """Target login and the role to assign."""

    login: str = Field(..., min_length=LOGIN_MIN_LEN, max_length=LOGIN_MAX_LEN)
    role: Role


class TokenResponse(BaseModel):
    """Opaque session token and the login it belongs to."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    token: str = Field(..., validation_alias="value", description="Session token")
    login: str = Field(..., validation_alias="owner_login", description="Owner login")
    token_type: str = Field(default="bearer", description="Token type")


class UserPublic(BaseModel):
    """User entry without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    login: str
    role: Role


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserPublic]


class Principal(BaseModel):
    """
    Identity handed to authorization checks: login, stored hash and role.

    authorities holds the single authority string derived from the role, which is
    the shape request-level guards compare against.
    """

    model_config = ConfigDict(frozen=True)

    login: str
    password_hash: str = Field(repr=False)
    role: Role

    @property
    def authorities(self) -> tuple[str, ...]:
        return (self.role.value,)

    def has_authority(self, authority: str | Role) -> bool:
        value = authority.value if isinstance(authority, Role) else authority
        return value in self.authorities
