"""Pydantic schemas for the health endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status, database reachability and whether an administrator exists."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
    administrator_present: bool | None = Field(
        default=None,
        description="False means bootstrap has not run yet; None when the database is unreachable",
    )
