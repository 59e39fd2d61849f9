"""Generation request, job status, and dispatch summary schemas."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from blogai.schemas.common import (
    JobStatus,
    Tone,
    ContentType,
    LengthPreference,
    Section,
)


class GenerationRequest(BaseModel):
    """Parameters submitted by a user to request one generated post.

    ``topic`` defaults to empty so a missing topic is rejected by intake
    with the same error as a blank one.
    """
    topic: str = Field(default="", max_length=500)
    tone: Tone = Tone.PROFESSIONAL
    content_type: ContentType = ContentType.BLOG_POST
    length_preference: LengthPreference = LengthPreference.MEDIUM
    target_audience: list[str] = Field(default_factory=lambda: ["beginners"])
    sections: list[Section] = Field(
        default_factory=lambda: [Section.INTRODUCTION, Section.CONCLUSION]
    )

    @field_validator("target_audience", "sections", mode="before")
    @classmethod
    def split_csv(cls, value):
        """Accept either a list or a comma-separated string."""
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


class GenerationStartResponse(BaseModel):
    job_id: str
    status: JobStatus
    estimated_time: int = 60


class JobStatusResponse(BaseModel):
    """Client-facing polling payload."""
    job_id: str
    status: JobStatus
    progress: int
    topic: str
    tone: str
    length_preference: str
    created_at: datetime
    processing_started_at: datetime | None = None
    completed_at: datetime | None = None
    result: str | None = None
    partial_content: str | None = None
    error: str | None = None
    post_id: str | None = None


class JobResponse(BaseModel):
    id: str
    topic: str
    tone: str
    content_type: str
    length_preference: str
    target_audience: list[str]
    sections: list[str]
    status: JobStatus
    processing_started_at: datetime | None
    completed_at: datetime | None
    error_message: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class JobOutcome(BaseModel):
    job_id: str
    status: str  # completed | failed | skipped
    error: str | None = None


class DispatchSummary(BaseModel):
    """Result of one dispatcher pass (scheduling observability)."""
    processed: int
    results: list[JobOutcome] = Field(default_factory=list)
    reclaimed: int = 0
