"""Health check: database reachability and bootstrap state."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.models import Role, User
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Used by load balancers and monitoring; never requires authentication."""
    if not check_db_connected(db):
        return HealthResponse(environment=settings.APP_ENV, database="disconnected")

    admin = db.query(User.id).filter(User.role == Role.ADMINISTRATOR).first()
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected",
        administrator_present=admin is not None,
    )
