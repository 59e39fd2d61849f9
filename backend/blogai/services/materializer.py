"""Artifact materialization — derive a draft post from generated markdown.

Everything here is a pure function of the generated text, the job topic,
and the creation timestamp. Slug uniqueness comes from the millisecond
timestamp suffix; collisions at sub-millisecond creation rates are
accepted.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, asdict
from datetime import datetime

TITLE_MAX_LENGTH = 255
SLUG_BASE_MAX_LENGTH = 60
EXCERPT_LENGTH = 200
WORDS_PER_MINUTE = 200

_H1_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_SLUG_INVALID_RE = re.compile(r"[^a-z0-9]+")
_MARKUP_RE = re.compile(r"[#*]")


@dataclass
class ArtifactFields:
    """Initial column values for a ``BlogPost`` created from a job."""
    title: str
    slug: str
    content: str
    excerpt: str
    word_count: int
    reading_time_minutes: int
    status: str = "draft"

    def as_dict(self) -> dict:
        return asdict(self)


def extract_title(content: str, fallback: str) -> str:
    """Text of the first level-1 heading, else *fallback*."""
    match = _H1_RE.search(content)
    title = match.group(1).strip() if match else ""
    return (title or fallback.strip())[:TITLE_MAX_LENGTH]


def slugify(text: str) -> str:
    slug = _SLUG_INVALID_RE.sub("-", text.lower()).strip("-")
    return slug[:SLUG_BASE_MAX_LENGTH].strip("-") or "post"


def unique_slug(text: str, created_at: datetime) -> str:
    """Slug of *text* suffixed with *created_at* in epoch milliseconds."""
    millis = int(created_at.timestamp() * 1000)
    return f"{slugify(text)}-{millis}"


def count_words(content: str) -> int:
    return len(content.split())


def reading_time_minutes(word_count: int) -> int:
    return math.ceil(word_count / WORDS_PER_MINUTE)


def display_reading_time(minutes: int) -> int:
    """Reading time as shown to readers: never below one minute."""
    return max(1, minutes)


def make_excerpt(content: str) -> str:
    return _MARKUP_RE.sub("", content[:EXCERPT_LENGTH])


def materialize(content: str, topic: str, created_at: datetime) -> ArtifactFields:
    """Derive the draft post fields for a completed generation."""
    title = extract_title(content, topic)
    words = count_words(content)
    return ArtifactFields(
        title=title,
        slug=unique_slug(title, created_at),
        content=content,
        excerpt=make_excerpt(content),
        word_count=words,
        reading_time_minutes=reading_time_minutes(words),
    )
