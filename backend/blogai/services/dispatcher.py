"""Dispatcher — advances a bounded batch of queued jobs per invocation.

One call to ``Dispatcher.run_once()`` is one scheduled pass:

  1. Sweep jobs stuck in ``generating`` past the staleness timeout and fail
     them (a crash mid-call would otherwise leave them there forever).
  2. Select up to ``batch_size`` ``queued`` jobs, oldest first.
  3. For each job, strictly one after another:
       - claim it (``queued → generating``) with a conditional write that is
         committed before the remote call; losing the claim means another
         pass owns the job and it is skipped
       - call the generator
       - on success, insert the artifact and mark the job ``completed`` in
         one transaction
       - on any failure, mark the job ``failed`` with the message

A failure inside one job never aborts the batch. Store failures outside a
single job's writes propagate and abort the pass; the next scheduled pass
picks up where this one stopped.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blogai.config import get_settings
from blogai.models import GenerationJob
from blogai.schemas.common import JobStatus
from blogai.schemas.generation import DispatchSummary, JobOutcome
from blogai.services.content_store import ContentStore
from blogai.services.job_state import transition
from blogai.services.job_store import JobStore
from blogai.services.materializer import materialize
from blogai.services.prompt_builder import GenerationParams
from blogai.utils.helpers import utcnow

logger = logging.getLogger(__name__)

GenerateFn = Callable[[GenerationParams], Awaitable[str]]

STALE_JOB_MESSAGE = (
    "Generation timed out: the job was still generating after {seconds}s "
    "and was abandoned. Please submit a new generation."
)


def reclaim_stale_jobs(store: JobStore, now: datetime, timeout_seconds: int) -> int:
    """Fail every job generating for longer than *timeout_seconds*.

    Failing is terminal: ``processing_started_at`` is written once, so a
    stale job is never put back in the queue.
    """
    cutoff = now - timedelta(seconds=timeout_seconds)
    message = STALE_JOB_MESSAGE.format(seconds=timeout_seconds)

    count = 0
    for job in store.find_stale(cutoff):
        job_id, started = job.id, job.processing_started_at
        fields = transition(JobStatus.GENERATING, JobStatus.FAILED, now, error_message=message)
        if store.update_lifecycle(job_id, JobStatus.GENERATING, fields):
            logger.warning("Job %s stuck in generating since %s; marked failed", job_id[:8], started)
            count += 1
    return count


class Dispatcher:
    """Drives queued jobs through the job state machine."""

    def __init__(
        self,
        db: Session,
        generate: GenerateFn,
        batch_size: int | None = None,
        stale_timeout_seconds: int | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        settings = get_settings()
        self.db = db
        self.generate = generate
        self.batch_size = settings.DISPATCH_BATCH_SIZE if batch_size is None else batch_size
        self.stale_timeout_seconds = (
            settings.STALE_JOB_TIMEOUT_SECONDS if stale_timeout_seconds is None else stale_timeout_seconds
        )
        self.clock = clock
        self.jobs = JobStore(db)
        self.content = ContentStore(db)

    # ── Public API ─────────────────────────────────────────────────────

    async def run_once(self) -> DispatchSummary:
        reclaimed = self.reclaim_stale_jobs()
        pending = self.jobs.find_pending(self.batch_size)
        logger.info(
            "Dispatch pass: %d queued job(s) selected (batch size %d, %d stale reclaimed)",
            len(pending), self.batch_size, reclaimed,
        )

        results: list[JobOutcome] = []
        for job in pending:
            results.append(await self._process(job))

        summary = DispatchSummary(processed=len(pending), results=results, reclaimed=reclaimed)
        logger.info(
            "Dispatch pass finished: %s",
            ", ".join(f"{r.job_id[:8]}={r.status}" for r in results) or "nothing to do",
        )
        return summary

    def reclaim_stale_jobs(self) -> int:
        return reclaim_stale_jobs(self.jobs, self.clock(), self.stale_timeout_seconds)

    # ── Per-job processing ─────────────────────────────────────────────

    async def _process(self, job: GenerationJob) -> JobOutcome:
        job_id, owner_id, topic = job.id, job.user_id, job.topic

        claim = transition(JobStatus.QUEUED, JobStatus.GENERATING, self.clock())
        if not self.jobs.update_lifecycle(job_id, JobStatus.QUEUED, claim):
            return JobOutcome(job_id=job_id, status="skipped", error="claimed by another dispatcher")
        logger.info("Job %s: generating", job_id[:8])

        try:
            params = GenerationParams.from_job(job)
            content = await self.generate(params)
        except Exception as e:
            logger.warning("Job %s: generation failed: %s: %s", job_id[:8], type(e).__name__, e)
            return self._fail(job_id, e)

        try:
            return self._complete(job_id, owner_id, topic, content)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Job %s: could not persist artifact", job_id[:8])
            return self._fail(job_id, e)

    def _complete(self, job_id: str, owner_id: str, topic: str, content: str) -> JobOutcome:
        now = self.clock()
        fields = materialize(content, topic, now).as_dict()
        fields.update(user_id=owner_id, job_id=job_id, created_at=now, updated_at=now)

        self.content.create_artifact(fields, commit=False)
        done = transition(JobStatus.GENERATING, JobStatus.COMPLETED, now, result=content)
        if not self.jobs.update_lifecycle(job_id, JobStatus.GENERATING, done, commit=False):
            # Reclaimed as stale while the call was in flight
            self.db.rollback()
            return JobOutcome(job_id=job_id, status="skipped", error="job left generating state during generation")
        self.db.commit()

        logger.info("Job %s: completed (%d words, slug=%s)", job_id[:8], fields["word_count"], fields["slug"])
        return JobOutcome(job_id=job_id, status="completed")

    def _fail(self, job_id: str, exc: BaseException) -> JobOutcome:
        message = str(exc).strip() or type(exc).__name__
        fields = transition(JobStatus.GENERATING, JobStatus.FAILED, self.clock(), error_message=message)
        if not self.jobs.update_lifecycle(job_id, JobStatus.GENERATING, fields):
            # Already failed by the stale sweep; its message stays on the row
            return JobOutcome(job_id=job_id, status="skipped", error="job left generating state during generation")
        return JobOutcome(job_id=job_id, status="failed", error=message)
