"""Status reporting for polling clients.

Progress is derived from persisted state and the clock; nothing in the
pipeline maintains a progress counter. While a job is ``generating`` the
remote call is unobservable, so progress climbs 15 points per elapsed
second and stops at 90 until the job reaches a terminal state.
"""
from __future__ import annotations

import math
from datetime import datetime

from blogai.models import GenerationJob
from blogai.schemas.common import JobStatus
from blogai.schemas.generation import JobStatusResponse
from blogai.services.errors import JobNotFoundError
from blogai.services.job_store import JobStore
from blogai.utils.helpers import ensure_utc, utcnow

QUEUED_PROGRESS = 5
GENERATING_CAP = 90
GENERATING_STEP = 15
FAILED_PROGRESS = 0


def compute_progress(
    status: str | JobStatus,
    processing_started_at: datetime | None,
    now: datetime,
) -> int:
    status = JobStatus(status)
    if status is JobStatus.QUEUED:
        return QUEUED_PROGRESS
    if status is JobStatus.COMPLETED:
        return 100
    if status is JobStatus.FAILED:
        return FAILED_PROGRESS

    started = ensure_utc(processing_started_at)
    if started is None:
        return 0
    elapsed = max(0.0, (ensure_utc(now) - started).total_seconds())
    return min(GENERATING_CAP, math.floor(elapsed) * GENERATING_STEP)


def build_status(job: GenerationJob, now: datetime | None = None) -> JobStatusResponse:
    now = now or utcnow()
    status = JobStatus(job.status)
    payload = JobStatusResponse(
        job_id=job.id,
        status=status,
        progress=compute_progress(status, job.processing_started_at, now),
        topic=job.topic,
        tone=job.tone,
        length_preference=job.length_preference,
        created_at=ensure_utc(job.created_at),
        processing_started_at=ensure_utc(job.processing_started_at),
        completed_at=ensure_utc(job.completed_at),
    )
    if status is JobStatus.COMPLETED:
        payload.result = job.result
        if job.post is not None:
            payload.post_id = job.post.id
    elif status is JobStatus.FAILED:
        payload.error = job.error_message
    elif status is JobStatus.GENERATING and job.result:
        # No writer populates result before completion today.
        payload.partial_content = job.result
    return payload


def get_job_status(store: JobStore, job_id: str, owner_id: str, now: datetime | None = None) -> JobStatusResponse:
    """Status for a job the caller owns; ``JobNotFoundError`` otherwise."""
    job = store.find_by_id_for_owner(job_id, owner_id)
    if job is None:
        raise JobNotFoundError(job_id)
    return build_status(job, now)
