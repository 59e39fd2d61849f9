"""Domain exceptions raised by the generation pipeline.

Routes translate these into HTTP responses; the dispatcher catches the
``GenerationError`` family per job and records it on the job row.
"""
from __future__ import annotations


class BlogAIError(Exception):
    """Base class for all pipeline errors."""


class JobValidationError(BlogAIError):
    """Request parameters rejected before a job is created."""


class QuotaExceededError(BlogAIError):
    """Owner has reached the daily generation limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"Daily limit reached. Free tier allows {limit} posts per day."
        )


class JobNotFoundError(BlogAIError):
    """No job with this id is owned by the caller."""


class PostNotFoundError(BlogAIError):
    """No post with this id is owned by the caller."""


class InvalidTransitionError(BlogAIError):
    """A lifecycle transition not allowed by the job state machine."""

    def __init__(self, current: str, target: str, reason: str = ""):
        self.current = current
        self.target = target
        msg = f"Illegal job transition {current} -> {target}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


# ── Generation failures ────────────────────────────────────────────────

class GenerationError(BlogAIError):
    """The language-model call did not produce usable text."""


class RateLimitedError(GenerationError):
    """Provider answered HTTP 429."""


class MalformedResponseError(GenerationError):
    """Provider answered, but the payload had no usable text."""


class TransportError(GenerationError):
    """Connection failure, timeout, or a non-429 HTTP error."""


class ProviderConfigError(GenerationError):
    """Unknown provider or missing credentials."""
