"""Scheduled dispatch trigger (for external schedulers such as platform cron).

The Celery beat task in ``blogai.tasks.generation`` is the primary trigger;
this endpoint runs the same pass for hosts that call a URL on a schedule.
"""
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from blogai.api.deps import get_generation_client, verify_cron_secret
from blogai.database import get_db
from blogai.schemas.generation import DispatchSummary
from blogai.services.dispatcher import Dispatcher
from blogai.services.generation_client import GenerationClient
from blogai.services.http_client_manager import close_loop_clients

router = APIRouter()
logger = logging.getLogger(__name__)


async def _run_pass(db: Session, client: GenerationClient) -> DispatchSummary:
    try:
        return await Dispatcher(db, client.generate_blog_post).run_once()
    finally:
        await close_loop_clients()


@router.post(
    "/crons/process-generation",
    response_model=DispatchSummary,
    dependencies=[Depends(verify_cron_secret)],
)
def process_generation(
    db: Session = Depends(get_db),
    client: GenerationClient = Depends(get_generation_client),
):
    """Run one dispatcher pass and report what happened to each job.

    Declared sync so FastAPI runs it in the threadpool: the pass makes
    blocking store calls, and gets its own event loop there as the Celery
    task does.
    """
    summary = asyncio.run(_run_pass(db, client))
    logger.info("Cron dispatch pass: processed=%d reclaimed=%d", summary.processed, summary.reclaimed)
    return summary
