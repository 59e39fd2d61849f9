"""Finite-state machine for generation job lifecycles.

States and the only legal moves::

    queued ──▶ generating ──▶ completed
                    │
                    └──────▶ failed

``transition()`` validates a move and returns the exact set of lifecycle
columns to write, so every writer goes through the same rules and the
row invariants below hold after each commit:

  - ``processing_started_at`` is null  iff  status is ``queued``
  - ``result`` is non-null             iff  status is ``completed``
  - ``error_message`` is non-null      iff  status is ``failed``
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from blogai.schemas.common import JobStatus
from blogai.services.errors import InvalidTransitionError

ALLOWED_TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.QUEUED: frozenset({JobStatus.GENERATING}),
    JobStatus.GENERATING: frozenset({JobStatus.COMPLETED, JobStatus.FAILED}),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.FAILED: frozenset(),
}

TERMINAL_STATES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED})


def is_terminal(status: str | JobStatus) -> bool:
    return JobStatus(status) in TERMINAL_STATES


def transition(
    current: str | JobStatus,
    target: str | JobStatus,
    now: datetime,
    *,
    result: str | None = None,
    error_message: str | None = None,
) -> dict[str, Any]:
    """Validate ``current -> target`` and return the columns to update.

    Raises ``InvalidTransitionError`` for moves outside
    ``ALLOWED_TRANSITIONS`` or when the payload the target state requires
    is missing.
    """
    current = JobStatus(current)
    target = JobStatus(target)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransitionError(current.value, target.value)

    if target is JobStatus.GENERATING:
        return {"status": target.value, "processing_started_at": now}

    if target is JobStatus.COMPLETED:
        if result is None:
            raise InvalidTransitionError(current.value, target.value, "result is required")
        return {"status": target.value, "result": result, "completed_at": now}

    # FAILED
    if not error_message:
        raise InvalidTransitionError(current.value, target.value, "error message is required")
    return {"status": target.value, "error_message": error_message, "completed_at": now}


def check_invariants(job: Any) -> list[str]:
    """Return a description of every lifecycle invariant *job* violates."""
    problems: list[str] = []
    status = JobStatus(job.status)

    if (job.processing_started_at is None) != (status is JobStatus.QUEUED):
        problems.append(
            f"processing_started_at={job.processing_started_at!r} with status {status.value}"
        )
    if (job.result is not None) != (status is JobStatus.COMPLETED):
        problems.append(f"result present={job.result is not None} with status {status.value}")
    if (job.error_message is not None) != (status is JobStatus.FAILED):
        problems.append(
            f"error_message present={job.error_message is not None} with status {status.value}"
        )
    return problems
