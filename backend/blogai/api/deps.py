"""Shared FastAPI dependencies: caller identity, cron secret, generator."""
from __future__ import annotations

import hmac

from fastapi import Header, HTTPException

from blogai.config import get_settings
from blogai.services.generation_client import GenerationClient


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Caller identity as resolved by the upstream session layer."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id.strip()


def verify_cron_secret(authorization: str | None = Header(default=None)) -> None:
    """Require ``Authorization: Bearer <CRON_SECRET>`` on the dispatch trigger."""
    secret = get_settings().CRON_SECRET
    if not secret:
        raise HTTPException(status_code=503, detail="Dispatch trigger is not configured")
    expected = f"Bearer {secret}"
    if not authorization or not hmac.compare_digest(authorization.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized")


def get_generation_client() -> GenerationClient:
    return GenerationClient()
