"""Generation job endpoints — submit a job and poll its status."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from blogai.api.deps import get_current_user_id
from blogai.database import get_db
from blogai.schemas.common import JobStatus
from blogai.schemas.generation import (
    GenerationRequest,
    GenerationStartResponse,
    JobResponse,
    JobStatusResponse,
)
from blogai.services.errors import JobNotFoundError, JobValidationError, QuotaExceededError
from blogai.services.intake import submit_job
from blogai.services.job_store import JobStore
from blogai.services.status_reporter import get_job_status

router = APIRouter()


@router.post("/generate", response_model=GenerationStartResponse)
def start_generation(
    payload: GenerationRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Queue a blog-post generation job for the caller."""
    try:
        job = submit_job(db, user_id, payload)
    except JobValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except QuotaExceededError as e:
        raise HTTPException(status_code=429, detail=str(e))

    return GenerationStartResponse(job_id=job.id, status=JobStatus.QUEUED)


@router.get("/jobs/{job_id}/status", response_model=JobStatusResponse)
def get_status(
    job_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Current status and estimated progress for one of the caller's jobs."""
    try:
        return get_job_status(JobStore(db), job_id, user_id)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")


@router.get("/jobs", response_model=list[JobResponse])
def list_jobs(
    limit: int = Query(50, ge=1, le=200),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List the caller's generation jobs, newest first."""
    return JobStore(db).list_for_owner(user_id, limit=limit)
