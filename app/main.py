"""FastAPI application entrypoint. No business logic; only wiring, logging and startup."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from app.api.v1 import router as v1_router
from app.bootstrap import configure_logging, run_bootstrap
from app.core.config import settings
from app.core.database import SessionLocal

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _bootstrap_once() -> bool:
    db = SessionLocal()
    try:
        return run_bootstrap(db, settings)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Create the bootstrap administrator once, before requests are served."""
    # Blocking DB and bcrypt work; keep it off the event loop.
    await run_in_threadpool(_bootstrap_once)
    logger.info("Gatekeeper API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Gatekeeper API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Gatekeeper API"}
