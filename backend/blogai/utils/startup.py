"""Startup utilities shared between the FastAPI lifespan and Celery worker_init.

Both entry points configure logging the same way and sweep jobs left in
``generating`` by an unclean shutdown before serving anything.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Suppress noisy third-party HTTP loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def reclaim_stale_jobs_on_startup() -> int:
    """Fail jobs abandoned in ``generating`` past the staleness timeout.

    Only jobs older than the timeout are touched, so a second instance
    starting while another is mid-generation leaves that job alone.
    """
    from blogai.config import get_settings
    from blogai.database import SessionLocal
    from blogai.services.dispatcher import reclaim_stale_jobs
    from blogai.services.job_store import JobStore
    from blogai.utils.helpers import utcnow

    db = SessionLocal()
    try:
        timeout = get_settings().STALE_JOB_TIMEOUT_SECONDS
        count = reclaim_stale_jobs(JobStore(db), utcnow(), timeout)
        if count:
            logger.info("Reclaimed %d stale job(s) on startup", count)
        return count
    except Exception as exc:
        logger.warning("Could not reclaim stale jobs on startup: %s", exc)
        return 0
    finally:
        db.close()
