"""Job Store — the narrow persistence contract the pipeline works through.

All lifecycle writes are conditional on the status the writer expects to
find (compare-and-swap), so two dispatcher passes racing on the same row
cannot both move it.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from blogai.models import GenerationJob
from blogai.schemas.common import JobStatus
from blogai.schemas.generation import GenerationRequest

logger = logging.getLogger(__name__)


class JobStore:
    """CRUD access to ``generation_jobs`` for intake, dispatch, and status."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, owner_id: str, params: GenerationRequest, now: datetime) -> GenerationJob:
        job = GenerationJob(
            user_id=owner_id,
            topic=params.topic.strip(),
            tone=params.tone.value,
            content_type=params.content_type.value,
            length_preference=params.length_preference.value,
            target_audience=list(params.target_audience) or ["beginners"],
            sections=[s.value for s in params.sections],
            status=JobStatus.QUEUED.value,
            created_at=now,
        )
        self.db.add(job)
        self.db.commit()
        self.db.refresh(job)
        return job

    def count_created_since(self, owner_id: str, since: datetime) -> int:
        return (
            self.db.query(func.count(GenerationJob.id))
            .filter(
                GenerationJob.user_id == owner_id,
                GenerationJob.created_at >= since,
            )
            .scalar()
            or 0
        )

    def find_pending(self, limit: int) -> list[GenerationJob]:
        """Oldest ``queued`` jobs first, regardless of owner."""
        return (
            self.db.query(GenerationJob)
            .filter(GenerationJob.status == JobStatus.QUEUED.value)
            .order_by(GenerationJob.created_at.asc(), GenerationJob.id.asc())
            .limit(limit)
            .all()
        )

    def find_stale(self, cutoff: datetime) -> list[GenerationJob]:
        """Jobs stuck in ``generating`` since before *cutoff*."""
        return (
            self.db.query(GenerationJob)
            .filter(
                GenerationJob.status == JobStatus.GENERATING.value,
                GenerationJob.processing_started_at < cutoff,
            )
            .order_by(GenerationJob.processing_started_at.asc())
            .all()
        )

    def find_by_id_for_owner(self, job_id: str, owner_id: str) -> GenerationJob | None:
        return (
            self.db.query(GenerationJob)
            .filter(GenerationJob.id == job_id, GenerationJob.user_id == owner_id)
            .first()
        )

    def list_for_owner(self, owner_id: str, limit: int = 50) -> list[GenerationJob]:
        return (
            self.db.query(GenerationJob)
            .filter(GenerationJob.user_id == owner_id)
            .order_by(GenerationJob.created_at.desc())
            .limit(limit)
            .all()
        )

    def update_lifecycle(
        self,
        job_id: str,
        expected_status: str | JobStatus,
        fields: dict[str, Any],
        commit: bool = True,
    ) -> bool:
        """Apply *fields* only if the row is still in *expected_status*.

        Returns True when this caller won the update. With ``commit=False``
        the change is left in the open transaction so it can be committed
        together with other writes.
        """
        updated = (
            self.db.query(GenerationJob)
            .filter(
                GenerationJob.id == job_id,
                GenerationJob.status == JobStatus(expected_status).value,
            )
            .update(fields, synchronize_session=False)
        )
        if commit:
            self.db.commit()
        if updated != 1:
            logger.info(
                "Lifecycle update skipped for job %s: no longer %s",
                job_id[:8], JobStatus(expected_status).value,
            )
            return False
        return True

    def get(self, job_id: str) -> GenerationJob | None:
        return self.db.get(GenerationJob, job_id)
