"""Singleton HTTP client manager with connection pooling.

Provides a single get_http_client() interface for the LLM callers.

Key features:
  - Event-loop-aware client lifecycle (recreates when Celery spins a new loop)
  - Provider-specific timeout configuration
  - Graceful shutdown via close_all_clients()
"""
from __future__ import annotations

import asyncio
import logging

import httpx

logger = logging.getLogger(__name__)

# ── Provider-specific timeout configuration ────────────────────────────

# Long-form generation can take minutes; connect failures should not.
_PROVIDER_TIMEOUTS: dict[str, httpx.Timeout] = {
    "anthropic": httpx.Timeout(180.0, connect=15.0),
    "openai": httpx.Timeout(180.0, connect=15.0),
    "ollama": httpx.Timeout(300.0, connect=15.0),
}

_DEFAULT_TIMEOUT = httpx.Timeout(120.0, connect=15.0)

_CONNECTION_LIMITS = httpx.Limits(
    max_connections=10,
    max_keepalive_connections=5,
    keepalive_expiry=120,
)

# ── Client pool (module-level singletons) ──────────────────────────────

_clients: dict[str, httpx.AsyncClient] = {}
_client_loop_ids: dict[str, int] = {}


def get_http_client(provider: str) -> httpx.AsyncClient:
    """Get or create an httpx AsyncClient for *provider*.

    Automatically recreates the client when the event loop changes
    (happens each time a Celery task runs the dispatcher).
    """
    loop_id = id(asyncio.get_running_loop())

    if (
        provider not in _clients
        or _clients[provider].is_closed
        or _client_loop_ids.get(provider) != loop_id
    ):
        timeout = _PROVIDER_TIMEOUTS.get(provider, _DEFAULT_TIMEOUT)
        _clients[provider] = httpx.AsyncClient(
            timeout=timeout,
            limits=_CONNECTION_LIMITS,
        )
        _client_loop_ids[provider] = loop_id
        logger.debug("Created new HTTP client for provider '%s'", provider)

    return _clients[provider]


async def close_all_clients() -> None:
    """Close every pooled HTTP client (for graceful shutdown)."""
    for name, client in list(_clients.items()):
        if not client.is_closed:
            try:
                await client.aclose()
            except Exception as exc:
                logger.debug("Error closing HTTP client '%s': %s", name, exc)
    _clients.clear()
    _client_loop_ids.clear()
    logger.info("All HTTP clients closed")


async def close_loop_clients() -> None:
    """Close only the pooled clients created on the running event loop.

    Used by passes that run on a short-lived loop of their own, so clients
    serving the API's main loop stay open.
    """
    loop_id = id(asyncio.get_running_loop())
    for name in [n for n, owner in _client_loop_ids.items() if owner == loop_id]:
        client = _clients.pop(name)
        del _client_loop_ids[name]
        if not client.is_closed:
            await client.aclose()
