"""Raw HTTP callers for the supported LLM providers.

Provides a single ``call_provider()`` interface that routes to the correct
provider API endpoint. No retry logic lives here, and none lives in the
caller either: a failed call is a failed job.
"""
from __future__ import annotations

import logging

import httpx

from blogai.services.http_client_manager import get_http_client

logger = logging.getLogger(__name__)

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"


# ── Provider-specific HTTP callers ─────────────────────────────────────

async def _call_anthropic(
    prompt: str,
    system: str | None,
    api_key: str,
    model: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Generate text via the Anthropic Messages API."""
    client = get_http_client("anthropic")
    body: dict = {
        "model": model,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": [{"role": "user", "content": prompt}],
    }
    if system:
        body["system"] = system
    resp = await client.post(
        ANTHROPIC_URL,
        headers={
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        },
        json=body,
    )
    resp.raise_for_status()
    block = resp.json()["content"][0]
    if block.get("type") != "text":
        raise ValueError(f"Unexpected response block type: {block.get('type')!r}")
    return block["text"]


async def _call_openai(
    prompt: str,
    system: str | None,
    api_key: str,
    model: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Generate text via the OpenAI chat completions API."""
    client = get_http_client("openai")
    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    resp = await client.post(
        OPENAI_URL,
        headers={"Authorization": f"Bearer {api_key}"},
        json={
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        },
    )
    resp.raise_for_status()
    return resp.json()["choices"][0]["message"]["content"]


async def _call_ollama(
    prompt: str,
    system: str | None,
    model: str,
    ollama_url: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Generate text via a local Ollama server."""
    client = get_http_client("ollama")
    body: dict = {
        "model": model,
        "prompt": prompt,
        "stream": False,
        "options": {
            "temperature": temperature,
            "num_predict": max_tokens,
        },
    }
    if system:
        body["system"] = system
    resp = await client.post(f"{ollama_url.rstrip('/')}/api/generate", json=body)
    resp.raise_for_status()
    return resp.json()["response"]


SUPPORTED_PROVIDERS = ("anthropic", "openai", "ollama")


async def call_provider(
    prompt: str,
    provider: str,
    model: str,
    system: str | None = None,
    api_key: str = "",
    ollama_url: str = "http://host.docker.internal:11434",
    temperature: float = 0.7,
    max_tokens: int = 1024,
) -> str:
    """Send a prompt to an LLM provider and return raw text.

    Raises
    ------
    ValueError : unknown provider, missing API key, or unexpected block type
    KeyError / IndexError : response payload missing the expected fields
    httpx.HTTPStatusError : HTTP errors from provider (4xx, 5xx)
    httpx.TransportError : connection and timeout errors
    """
    if provider == "ollama":
        return await _call_ollama(prompt, system, model, ollama_url, temperature, max_tokens)

    if provider not in SUPPORTED_PROVIDERS:
        raise ValueError(f"Unknown LLM provider: {provider}")
    if not api_key:
        raise ValueError(f"API key required for provider {provider}")

    if provider == "anthropic":
        return await _call_anthropic(prompt, system, api_key, model, temperature, max_tokens)
    return await _call_openai(prompt, system, api_key, model, temperature, max_tokens)
