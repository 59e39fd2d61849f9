"""Blog post editing endpoints — content, SEO metadata, publish, schedule.

Every endpoint is scoped to the caller's own posts.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from blogai.api.deps import get_current_user_id
from blogai.config import get_settings
from blogai.database import get_db
from blogai.models import BlogPost
from blogai.schemas.common import MessageResponse, PostStatus
from blogai.schemas.post import (
    PostContentResponse,
    PostContentUpdate,
    PostMetadataUpdate,
    PostPublishResponse,
    PostResponse,
    PostScheduleRequest,
    PostScheduleResponse,
)
from blogai.services.content_store import ContentStore
from blogai.services.materializer import count_words, reading_time_minutes, unique_slug
from blogai.utils.helpers import ensure_utc, utcnow

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_owned_post(db: Session, post_id: str, user_id: str) -> BlogPost:
    post = ContentStore(db).find_by_id_for_owner(post_id, user_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return _get_owned_post(db, post_id, user_id)


@router.post("/{post_id}/content", response_model=PostContentResponse)
def save_content(
    post_id: str,
    payload: PostContentUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Save edited content and recompute word count / reading time."""
    post = _get_owned_post(db, post_id, user_id)
    words = count_words(payload.content)
    post.title = payload.title or post.title
    post.content = payload.content
    post.word_count = words
    post.reading_time_minutes = reading_time_minutes(words)
    db.commit()
    return PostContentResponse(
        post_id=post.id,
        word_count=post.word_count,
        reading_time_minutes=post.reading_time_minutes,
        message="Content saved successfully",
    )


@router.post("/{post_id}/metadata", response_model=MessageResponse)
def save_metadata(
    post_id: str,
    payload: PostMetadataUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Save SEO metadata; the slug is regenerated with a fresh timestamp suffix."""
    post = _get_owned_post(db, post_id, user_id)
    post.title = payload.title or post.title
    post.slug = unique_slug(payload.slug or post.title, utcnow())
    post.meta_description = payload.meta_description or None
    post.keywords = payload.keywords or None
    post.category = payload.category or None
    post.featured_image_url = payload.featured_image_url or None
    post.author_name = payload.author_name or None
    db.commit()
    return MessageResponse(message="Metadata saved successfully", detail=post.slug)


@router.post("/{post_id}/publish", response_model=PostPublishResponse)
def publish_post(post_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    post = _get_owned_post(db, post_id, user_id)
    post.status = PostStatus.PUBLISHED.value
    post.published_at = utcnow()
    db.commit()
    db.refresh(post)

    base_url = get_settings().APP_URL.rstrip("/")
    logger.info("Published post %s (%s)", post.id[:8], post.slug)
    return PostPublishResponse(
        post_id=post.id,
        status=PostStatus.PUBLISHED,
        published_at=ensure_utc(post.published_at),
        public_url=f"{base_url}/posts/{post.slug}",
        message="Post published successfully",
    )


@router.post("/{post_id}/schedule", response_model=PostScheduleResponse)
def schedule_post(
    post_id: str,
    payload: PostScheduleRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    scheduled_at = ensure_utc(payload.scheduled_at)
    if scheduled_at <= utcnow():
        raise HTTPException(status_code=400, detail="Scheduled time must be in the future")

    post = _get_owned_post(db, post_id, user_id)
    post.status = PostStatus.SCHEDULED.value
    post.scheduled_at = scheduled_at
    db.commit()
    return PostScheduleResponse(
        post_id=post.id,
        status=PostStatus.SCHEDULED,
        scheduled_at=scheduled_at,
        message="Post scheduled successfully",
    )
