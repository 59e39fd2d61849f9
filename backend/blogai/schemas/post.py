"""Blog post schemas for the editing / publishing endpoints."""
from datetime import datetime
from pydantic import BaseModel, Field
from blogai.schemas.common import PostStatus


class PostResponse(BaseModel):
    id: str
    job_id: str | None
    title: str
    slug: str
    content: str
    excerpt: str | None
    status: PostStatus
    word_count: int
    reading_time_minutes: int
    meta_description: str | None
    keywords: str | None
    category: str | None
    featured_image_url: str | None
    author_name: str | None
    scheduled_at: datetime | None
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PostContentUpdate(BaseModel):
    title: str | None = Field(None, max_length=255)
    content: str


class PostContentResponse(BaseModel):
    post_id: str
    word_count: int
    reading_time_minutes: int
    message: str


class PostMetadataUpdate(BaseModel):
    title: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=320)
    keywords: str | None = None
    category: str | None = Field(None, max_length=100)
    featured_image_url: str | None = Field(None, max_length=500)
    author_name: str | None = Field(None, max_length=255)


class PostScheduleRequest(BaseModel):
    scheduled_at: datetime


class PostPublishResponse(BaseModel):
    post_id: str
    status: PostStatus
    published_at: datetime | None
    public_url: str
    message: str


class PostScheduleResponse(BaseModel):
    post_id: str
    status: PostStatus
    scheduled_at: datetime
    message: str
