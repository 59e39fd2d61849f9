"""Inline AI assistance for the editor — request/response, not job-queued."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from blogai.api.deps import get_current_user_id, get_generation_client
from blogai.schemas.assist import (
    KeywordRequest,
    KeywordResponse,
    RewriteRequest,
    RewriteResponse,
)
from blogai.services.errors import GenerationError
from blogai.services.generation_client import GenerationClient

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/rewrite", response_model=RewriteResponse, dependencies=[Depends(get_current_user_id)])
async def rewrite(
    payload: RewriteRequest,
    client: GenerationClient = Depends(get_generation_client),
):
    try:
        rewritten = await client.rewrite_text(payload.text, payload.instruction, payload.tone)
    except GenerationError as e:
        logger.warning("Rewrite failed: %s", e)
        raise HTTPException(status_code=502, detail="Failed to process text")
    return RewriteResponse(original_text=payload.text, rewritten_text=rewritten)


@router.post("/extract-keywords", response_model=KeywordResponse, dependencies=[Depends(get_current_user_id)])
async def extract_keywords(
    payload: KeywordRequest,
    client: GenerationClient = Depends(get_generation_client),
):
    keywords = await client.extract_keywords(payload.content, payload.count)
    return KeywordResponse(keywords=keywords)
