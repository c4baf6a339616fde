"""Shared HTTP client factory for the affiliate API."""

from __future__ import annotations

import httpx

USER_AGENT = "afflink/0.1.0 (affiliate-link-converter)"


def create_http_client(
    *,
    proxy_url: str | None = None,
    user_agent: str = USER_AGENT,
    timeout: float = 30.0,
    **kwargs,
) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient with our User-Agent and optional proxy."""
    headers = {"User-Agent": user_agent, "Accept": "application/json"}
    if "headers" in kwargs:
        headers.update(kwargs.pop("headers"))
    return httpx.AsyncClient(
        headers=headers,
        timeout=timeout,
        proxy=proxy_url,
        **kwargs,
    )
