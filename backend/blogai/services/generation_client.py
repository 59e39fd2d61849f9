"""Generation Invoker — blog drafts, rewrites, and keyword extraction.

Wraps ``llm_http.call_provider()`` and translates every way a remote call
can go wrong into the ``GenerationError`` family:

  - HTTP 429                         → ``RateLimitedError``
  - other HTTP status / connect / timeout / decoding → ``TransportError``
  - unexpected payload or empty text → ``MalformedResponseError``
  - unknown provider / missing key   → ``ProviderConfigError``

No retries happen here. A transient failure surfaces to the dispatcher,
which records it on the job.
"""
from __future__ import annotations

import logging

import httpx

from blogai.config import Settings, get_settings
from blogai.schemas.common import RewriteInstruction, Tone
from blogai.services.errors import (
    GenerationError,
    MalformedResponseError,
    ProviderConfigError,
    RateLimitedError,
    TransportError,
)
from blogai.services.llm_http import SUPPORTED_PROVIDERS, call_provider
from blogai.services.prompt_builder import (
    GenerationParams,
    PromptSpec,
    build_blog_prompt,
    build_keyword_prompt,
    build_rewrite_prompt,
)

logger = logging.getLogger(__name__)


class GenerationClient:
    """Provider-configured entry point for all model calls."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    # ── Public API ─────────────────────────────────────────────────────

    async def generate_blog_post(self, params: GenerationParams) -> str:
        """Draft a markdown blog post for *params*."""
        spec = build_blog_prompt(params, temperature=self.settings.GENERATION_TEMPERATURE)
        logger.info(
            "Generating %s post (%s, %s) on %r",
            params.length_preference.value, params.tone.value,
            params.content_type.value, params.topic,
        )
        return await self._complete(spec)

    async def rewrite_text(self, text: str, instruction: RewriteInstruction, tone: Tone) -> str:
        """Synchronous inline-edit assistance; errors propagate."""
        spec = build_rewrite_prompt(
            text, instruction, tone,
            max_tokens=self.settings.REWRITE_MAX_TOKENS,
            temperature=self.settings.GENERATION_TEMPERATURE,
        )
        return await self._complete(spec)

    async def extract_keywords(self, content: str, count: int = 5) -> list[str]:
        """Extract up to *count* SEO keywords. Returns [] on any failure."""
        spec = build_keyword_prompt(
            content, count,
            content_limit=self.settings.KEYWORD_CONTENT_LIMIT,
            max_tokens=self.settings.KEYWORD_MAX_TOKENS,
            temperature=self.settings.KEYWORD_TEMPERATURE,
        )
        try:
            text = await self._complete(spec)
        except GenerationError as e:
            logger.warning("Keyword extraction failed: %s", e)
            return []
        keywords = [k.strip() for k in text.split(",")]
        return [k for k in keywords if k][:count]

    # ── Internal ───────────────────────────────────────────────────────

    async def _complete(self, spec: PromptSpec) -> str:
        provider = self.settings.LLM_PROVIDER
        if provider not in SUPPORTED_PROVIDERS:
            raise ProviderConfigError(f"Unknown LLM provider: {provider}")
        if provider != "ollama" and not self.settings.LLM_API_KEY:
            raise ProviderConfigError(f"No API key configured for provider {provider}")

        model = self.settings.LLM_MODEL
        try:
            text = await call_provider(
                spec.prompt,
                provider,
                model,
                system=spec.system,
                api_key=self.settings.LLM_API_KEY,
                ollama_url=self.settings.OLLAMA_URL,
                temperature=spec.temperature,
                max_tokens=spec.max_tokens,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body_preview = e.response.text[:200] if e.response.text else "(empty)"
            if status == 429:
                logger.warning("Rate limited by %s/%s (HTTP 429)", provider, model)
                raise RateLimitedError(
                    f"Rate limit exceeded by LLM provider {provider}. Try again later."
                ) from e
            logger.warning("HTTP %d from %s/%s: %s", status, provider, model, body_preview)
            raise TransportError(f"LLM provider {provider} returned HTTP {status}") from e
        except httpx.TimeoutException as e:
            logger.warning("Timeout calling %s/%s: %s", provider, model, e)
            raise TransportError(f"Request to LLM provider {provider} timed out") from e
        except httpx.TransportError as e:
            logger.warning("Connection issue with %s/%s: %s: %s", provider, model, type(e).__name__, e)
            raise TransportError(f"Could not connect to LLM provider {provider}: {e}") from e
        except httpx.HTTPError as e:
            # Decoding errors, redirect loops
            logger.warning("HTTP error from %s/%s: %s: %s", provider, model, type(e).__name__, e)
            raise TransportError(f"Request to LLM provider {provider} failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Malformed response from %s/%s: %s", provider, model, e)
            raise MalformedResponseError(f"Unexpected response format from {provider}: {e}") from e

        if not isinstance(text, str) or not text.strip():
            raise MalformedResponseError(f"Empty response from {provider}")
        return text
