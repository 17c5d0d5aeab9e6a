"""Google Fitness REST strategy."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, TextIO
from urllib.parse import quote

from ...errors import FetchError
from ...models import FetchWindow
from ...settings import Settings
from ..application.ports import AuthorizedClient, FitnessStrategy
from .events import write_event

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_nanos(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(microseconds=1) * 1000


class GoogleFitnessStrategy(FitnessStrategy):
    """Read every data source's dataset overlapping the window."""

    def __init__(self, window: FetchWindow, settings: Settings) -> None:
        self.window = window
        self._api_url = settings.google_fitness_api_url.rstrip("/")

    @property
    def dataset_id(self) -> str:
        return f"{to_nanos(self.window.start)}-{to_nanos(self.window.end)}"

    def get_data(self, client: AuthorizedClient, sink: TextIO) -> datetime:
        sources = self._list_data_sources(client)
        written = 0
        for source in sources:
            if not isinstance(source, dict):
                raise FetchError(f"Unexpected data source entry: {source!r}")
            stream_id = source.get("dataStreamId")
            if not stream_id:
                continue
            if not isinstance(stream_id, str):
                raise FetchError(f"Unexpected dataStreamId: {stream_id!r}")
            dataset = self._json(
                client,
                f"{self._api_url}/users/me/dataSources/{quote(stream_id, safe='')}"
                f"/datasets/{self.dataset_id}",
            )
            points = dataset.get("point") or []
            if not points:
                continue
            write_event(
                sink,
                {
                    "dataSourceId": stream_id,
                    "dataStreamName": source.get("dataStreamName", ""),
                    "dataType": self._data_type(source),
                    "minStartTimeNs": dataset.get("minStartTimeNs"),
                    "maxEndTimeNs": dataset.get("maxEndTimeNs"),
                    "point": points,
                },
            )
            written += 1
        sink.flush()
        logger.info(
            "Google Fitness: %d dataset(s) from %d source(s) for %s",
            written,
            len(sources),
            self.dataset_id,
        )
        return self.window.end

    def _list_data_sources(self, client: AuthorizedClient) -> List[Dict[str, Any]]:
        payload = self._json(client, f"{self._api_url}/users/me/dataSources")
        sources = payload.get("dataSource") or []
        if not isinstance(sources, list):
            raise FetchError("dataSource listing is not a list")
        return sources

    @staticmethod
    def _data_type(source: Dict[str, Any]) -> Any:
        data_type = source.get("dataType") or {}
        if not isinstance(data_type, dict):
            raise FetchError(f"Unexpected dataType on {source.get('dataStreamId')!r}")
        return data_type.get("name")

    @staticmethod
    def _json(client: AuthorizedClient, url: str) -> Dict[str, Any]:
        response = client.get(url)
        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError(f"Response from {url} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise FetchError(f"Unexpected response shape from {url}")
        return data


__all__ = ["GoogleFitnessStrategy", "to_nanos"]
