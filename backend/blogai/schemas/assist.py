"""Inline editing assistance schemas (rewrite, keyword extraction)."""
from pydantic import BaseModel, Field
from blogai.schemas.common import RewriteInstruction, Tone


class RewriteRequest(BaseModel):
    text: str = Field(..., min_length=1)
    instruction: RewriteInstruction
    tone: Tone = Tone.PROFESSIONAL


class RewriteResponse(BaseModel):
    original_text: str
    rewritten_text: str
    improvements: str = "Text successfully processed"


class KeywordRequest(BaseModel):
    content: str = Field(..., min_length=1)
    count: int = Field(default=5, ge=1, le=20)


class KeywordResponse(BaseModel):
    keywords: list[str]
