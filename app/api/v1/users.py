"""User administration: list users, change role (admin only), change password (admin or self)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_principal, require_admin
from app.core.database import get_db
from app.models import Role
from app.schemas.auth import (
    Credentials,
    Principal,
    RoleChangeRequest,
    UserPublic,
    UsersListResponse,
)
from app.services.accounts import AccountNotFoundError, change_password, change_role, list_users

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def get_users(
    _admin: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users without password hashes."""
    users = list_users(db)
    return UsersListResponse(users=[UserPublic.model_validate(u) for u in users])


@router.put("/role", response_model=UserPublic)
def put_role(
    body: RoleChangeRequest,
    _admin: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    try:
        user = change_role(db, body.login, body.role)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return UserPublic.model_validate(user)


@router.put("/password", response_model=UserPublic)
def put_password(
    body: Credentials,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Set a new password. Administrators may change any account; users only their own."""
    if body.login != principal.login and not principal.has_authority(Role.ADMINISTRATOR):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot change another user's password",
        )
    try:
        user = change_password(db, body.login, body.password)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return UserPublic.model_validate(user)
