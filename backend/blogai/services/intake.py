"""Job intake — validate a generation request, enforce quota, enqueue."""
from __future__ import annotations

import logging
from datetime import datetime, tzinfo

from sqlalchemy.orm import Session

from blogai.config import get_settings
from blogai.models import GenerationJob
from blogai.schemas.generation import GenerationRequest
from blogai.services.errors import JobValidationError
from blogai.services.job_store import JobStore
from blogai.services.quota import check_daily_quota
from blogai.utils.helpers import utcnow

logger = logging.getLogger(__name__)


def submit_job(
    db: Session,
    owner_id: str,
    request: GenerationRequest,
    now: datetime | None = None,
    daily_limit: int | None = None,
    tz: tzinfo | None = None,
) -> GenerationJob:
    """Create a ``queued`` job for *owner_id*.

    The request itself never triggers generation; the scheduled
    dispatcher picks the job up.
    """
    settings = get_settings()
    if not request.topic or not request.topic.strip():
        raise JobValidationError("Topic is required")

    now = now or utcnow()
    limit = settings.DAILY_JOB_QUOTA if daily_limit is None else daily_limit
    if tz is None:
        tz = settings.quota_tz

    store = JobStore(db)
    check_daily_quota(store, owner_id, now, limit, tz)

    job = store.create(owner_id, request, now)
    logger.info(
        "Queued job %s for user %s (topic=%r, length=%s)",
        job.id[:8], owner_id, job.topic, job.length_preference,
    )
    return job
