"""Ports for provider-specific fetch strategies."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, TextIO, runtime_checkable

import httpx

from ...models import FetchWindow


@runtime_checkable
class AuthorizedClient(Protocol):
    """HTTP client that signs requests with one user's OAuth token."""

    def get(self, url: str, *, params: dict[str, Any] | None = None) -> httpx.Response:
        """Perform an authorized GET request."""


@runtime_checkable
class FitnessStrategy(Protocol):
    """Fetches one provider's data for the window it was built with."""

    window: FetchWindow

    def get_data(self, client: AuthorizedClient, sink: TextIO) -> datetime:
        """Write fetched records to ``sink`` and return the next checkpoint."""


__all__ = ["AuthorizedClient", "FitnessStrategy"]
