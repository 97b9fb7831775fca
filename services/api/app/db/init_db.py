from __future__ import annotations

import logging
import os
from pathlib import Path

from services.api.app.db.database import get_engine
from services.api.app.db.models import Base
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def auto_create_enabled() -> bool:
    return os.getenv("TAVOLA_DB_AUTO_CREATE", "true").strip().lower() in {"1", "true", "yes", "y"}


def _ensure_sqlite_dir(engine: Engine) -> None:
    url = engine.url
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def init_db() -> None:
    """Create missing tables unless TAVOLA_DB_AUTO_CREATE is off."""

    if not auto_create_enabled():
        logger.info("Table auto-create disabled")
        return

    engine = get_engine()
    _ensure_sqlite_dir(engine)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready on %s", engine.url.render_as_string(hide_password=True))
