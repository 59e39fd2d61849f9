"""Celery application and beat schedule.

Defines the shared Celery instance and the fixed schedule that triggers
one dispatcher pass every ``DISPATCH_INTERVAL_SECONDS``. Each beat tick
is a discrete unit of work; overlapping passes are safe because job
claims are conditional writes.
"""
import logging
from celery import Celery
from celery.signals import worker_init
from blogai.config import get_settings

settings = get_settings()

celery_app = Celery(
    "blogai_worker",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["blogai.tasks.generation"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=False,           # a redelivered pass would only find nothing to claim
    worker_prefetch_multiplier=1,
    result_expires=3600,
    broker_connection_retry_on_startup=True,
    beat_schedule={
        "dispatch-pending-generation-jobs": {
            "task": "generation.dispatch_pending_jobs",
            "schedule": settings.DISPATCH_INTERVAL_SECONDS,
            # A pass still waiting in the queue after one interval is redundant
            "options": {"expires": settings.DISPATCH_INTERVAL_SECONDS},
        },
    },
)


@worker_init.connect
def setup_worker(**kwargs):
    """Run once when the Celery worker process starts."""
    from blogai.utils.startup import reclaim_stale_jobs_on_startup, setup_logging

    setup_logging(settings.LOG_LEVEL)
    logging.getLogger(__name__).info(
        "Worker ready: dispatch every %.0fs, batch size %d",
        settings.DISPATCH_INTERVAL_SECONDS, settings.DISPATCH_BATCH_SIZE,
    )
    reclaim_stale_jobs_on_startup()
