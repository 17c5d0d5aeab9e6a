"""FitBit daily activity summary strategy."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterator, TextIO

from ...errors import FetchError
from ...models import FetchWindow
from ...settings import Settings
from ..application.ports import AuthorizedClient, FitnessStrategy
from .events import write_event

logger = logging.getLogger(__name__)


class FitBitStrategy(FitnessStrategy):
    """Fetch one daily activity summary per calendar day the window touches."""

    def __init__(self, window: FetchWindow, settings: Settings) -> None:
        self.window = window
        self._api_url = settings.fitbit_api_url.rstrip("/")

    def days(self) -> Iterator[date]:
        day = self.window.start.date()
        last = self.window.end.date()
        while day <= last:
            yield day
            day += timedelta(days=1)

    def get_data(self, client: AuthorizedClient, sink: TextIO) -> datetime:
        for day in self.days():
            url = f"{self._api_url}/1/user/-/activities/date/{day.isoformat()}.json"
            response = client.get(url)
            try:
                summary = response.json()
            except ValueError as exc:
                raise FetchError(f"Response from {url} is not valid JSON") from exc
            if not isinstance(summary, dict):
                raise FetchError(f"Unexpected response shape from {url}")
            write_event(sink, {"date": day.isoformat(), **summary})
            logger.debug("FitBit activity summary retrieved for %s", day)
        sink.flush()
        return self.window.end


__all__ = ["FitBitStrategy"]
