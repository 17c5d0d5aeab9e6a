from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable

from ..errors import CheckpointCorruptError, CheckpointMissingError, CheckpointReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckpointKey:
    """Identifies the watermark of one credential within one polling instance."""

    instance: str
    credential_id: str


@runtime_checkable
class CheckpointStore(Protocol):
    """Port persisting fetch watermarks."""

    def read(self, key: CheckpointKey) -> datetime:
        """Return the stored watermark or raise ``CheckpointReadError``."""

    def write(self, key: CheckpointKey, moment: datetime) -> None:
        """Persist ``moment`` durably or raise ``CheckpointWriteError``."""


def resume_point(
    store: CheckpointStore,
    key: CheckpointKey,
    *,
    now: datetime,
    fallback: timedelta,
) -> datetime:
    """Return where fetching should resume for ``key``.

    A missing checkpoint starts from ``now``; a corrupt one starts ``fallback``
    before ``now`` so a recent partial run is fetched again rather than lost.
    """

    try:
        return store.read(key)
    except CheckpointMissingError as exc:
        logger.warning("No checkpoint for %s (%s); starting from now", key, exc)
        return now
    except CheckpointCorruptError as exc:
        logger.warning(
            "Unable to decode checkpoint for %s (%s); rewinding %s", key, exc, fallback
        )
        return now - fallback
    except CheckpointReadError as exc:
        logger.warning("Unable to read checkpoint for %s (%s); starting from now", key, exc)
        return now


__all__ = ["CheckpointKey", "CheckpointStore", "resume_point"]
