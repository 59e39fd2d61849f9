"""Celery tasks for scheduled generation dispatch.

Exposes the ``dispatch_pending_jobs`` task fired by Celery beat. The
dispatcher is async, so each task spins up a short-lived event loop to
bridge sync Celery with the async generation client.
"""
from __future__ import annotations

import asyncio
import logging

from blogai.celery_app import celery_app
from blogai.database import SessionLocal
from blogai.services.dispatcher import Dispatcher
from blogai.services.generation_client import GenerationClient
from blogai.services.http_client_manager import close_all_clients

logger = logging.getLogger(__name__)


async def _run_pass(db) -> dict:
    client = GenerationClient()
    try:
        summary = await Dispatcher(db, client.generate_blog_post).run_once()
    finally:
        await close_all_clients()
    return summary.model_dump()


@celery_app.task(bind=True, name="generation.dispatch_pending_jobs")
def dispatch_pending_jobs(self):
    """Run one dispatcher pass and return its summary.

    Store failures propagate so the task shows as failed; the next beat
    tick is the retry.
    """
    db = SessionLocal()
    try:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            result = loop.run_until_complete(_run_pass(db))
        finally:
            loop.close()
        logger.info(
            "Dispatch task %s: processed=%d reclaimed=%d",
            self.request.id, result["processed"], result["reclaimed"],
        )
        return result
    except Exception:
        logger.exception("Dispatch task %s aborted", self.request.id)
        raise
    finally:
        db.close()
