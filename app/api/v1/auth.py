"""Register/login/logout routes and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models import Role, User
from app.schemas.auth import Credentials, Principal, TokenResponse, UserPublic
from app.services.accounts import (
    AccountExistsError,
    AccountNotFoundError,
    InvalidTokenError,
    get_principal,
    get_user_by_token,
    login_user,
    logout_token,
    register_user,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Dependency: return the raw Bearer token. Raises 401 if the header is missing."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")
    return credentials.credentials


def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: resolve the Bearer token to its owner. Raises 401 for unknown tokens."""
    try:
        return get_user_by_token(db, token)
    except AccountNotFoundError:
        raise _unauthorized("Invalid token")


def get_current_principal(
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Principal:
    """Dependency: principal (login, hash, role) of the authenticated user."""
    try:
        return get_principal(db, user.login)
    except AccountNotFoundError:
        raise _unauthorized("User not found")


def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Dependency: require the ADMINISTRATOR authority. Raises 403 otherwise."""
    if not principal.has_authority(Role.ADMINISTRATOR):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return principal


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    body: Credentials,
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Create an account with role USER."""
    try:
        user = register_user(db, body.login, body.password)
    except AccountExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return UserPublic.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: Credentials,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with login and password; returns an opaque session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        token = login_user(db, body.login, body.password)
    except AccountNotFoundError as e:
        raise _unauthorized(e.message) from e
    return TokenResponse.model_validate(token)


@router.post("/logout", response_model=TokenResponse)
def logout(
    token: Annotated[str, Depends(get_bearer_token)],
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """Invalidate the Bearer token and return the deleted token."""
    try:
        deleted = logout_token(db, token)
    except InvalidTokenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return TokenResponse.model_validate(deleted)


@router.get("/me", response_model=UserPublic)
def me(user: Annotated[User, Depends(get_current_user)]) -> UserPublic:
    """Return the user that owns the Bearer token."""
    return UserPublic.model_validate(user)
