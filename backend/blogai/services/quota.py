"""Daily generation quota, computed from the Job Store on every request.

No in-process counter: the count is a query, so the check stays correct
across any number of API instances.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo

from blogai.services.errors import QuotaExceededError
from blogai.services.job_store import JobStore

logger = logging.getLogger(__name__)


def local_day_start(now: datetime, tz: tzinfo | None = None) -> datetime:
    """Midnight of *now*'s calendar day in *tz*, returned in UTC.

    ``tz=None`` uses the server's local timezone.
    """
    local = now.astimezone(tz) if tz is not None else now.astimezone()
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


def check_daily_quota(
    store: JobStore,
    owner_id: str,
    now: datetime,
    limit: int,
    tz: tzinfo | None = None,
) -> int:
    """Raise ``QuotaExceededError`` if *owner_id* is at *limit* for today.

    Returns the number of jobs already created today.
    """
    since = local_day_start(now, tz)
    used = store.count_created_since(owner_id, since)
    if used >= limit:
        logger.info("Quota reached for user %s (%d/%d since %s)", owner_id, used, limit, since.isoformat())
        raise QuotaExceededError(limit)
    return used
