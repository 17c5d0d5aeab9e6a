from __future__ import annotations

import httpx

from ..settings import Settings


def create_http_client(settings: Settings, *, verify: bool = True) -> httpx.Client:
    """Create the blocking HTTP client shared by one polling run."""

    return httpx.Client(timeout=settings.http_timeout, verify=verify)


__all__ = ["create_http_client"]
