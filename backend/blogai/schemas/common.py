"""Shared / common schemas: enums and base response models."""
from datetime import datetime
from enum import Enum
from pydantic import BaseModel


# ── Enums ──────────────────────────────────────────────────────────────

class JobStatus(str, Enum):
    QUEUED = "queued"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


class PostStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    FRIENDLY = "friendly"
    AUTHORITATIVE = "authoritative"


class ContentType(str, Enum):
    BLOG_POST = "blog_post"
    HOW_TO_GUIDE = "how-to_guide"
    LISTICLE = "listicle"
    OPINION_PIECE = "opinion_piece"
    TUTORIAL = "tutorial"
    CASE_STUDY = "case_study"


class LengthPreference(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Section(str, Enum):
    INTRODUCTION = "introduction"
    BULLET_POINTS = "bullet_points"
    CONCLUSION = "conclusion"
    CALL_TO_ACTION = "call_to_action"
    FAQ_SECTION = "faq_section"


class RewriteInstruction(str, Enum):
    REWRITE = "rewrite"
    EXPAND = "expand"
    SHORTEN = "shorten"
    SIMPLIFY = "simplify"


# ── Common Responses ───────────────────────────────────────────────────

class MessageResponse(BaseModel):
    message: str
    detail: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
