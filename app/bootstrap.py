"""
One-shot startup initialization: create the default administrator if none exists.

The API runs this from its lifespan hook. It can also be run on its own, e.g. right
after migrations in a deploy script:

  python -m app.bootstrap
"""

import logging
import sys
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.services.accounts import ensure_bootstrap_admin

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup shared by the API and CLI entrypoints."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def run_bootstrap(session: Session, settings: "Settings") -> bool:
    """
    Ensure a bootstrap administrator exists. Returns True if one was created or promoted.

    Idempotent: once any administrator exists, repeated runs do nothing.
    """
    if not settings.BOOTSTRAP_ADMIN_ENABLED:
        logger.info("Bootstrap admin is disabled (BOOTSTRAP_ADMIN_ENABLED=false); skipping.")
        return False

    admin = ensure_bootstrap_admin(
        session,
        login=settings.BOOTSTRAP_ADMIN_LOGIN,
        password=settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(),
    )
    return admin is not None


def main() -> int:
    """Run bootstrap against the configured database."""
    from app.core.config import get_settings
    from app.core.database import SessionLocal

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        created = run_bootstrap(db, settings)
        logger.info("Bootstrap completed: admin_created=%s", created)
        return 0
    except Exception as e:
        logger.exception("Bootstrap failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
