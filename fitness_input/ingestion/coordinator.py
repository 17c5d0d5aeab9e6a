"""Checkpointed polling of every stored credential for one polling instance."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, TextIO, Tuple

from ..checkpoints import CheckpointKey, CheckpointStore, resume_point
from ..credentials import CredentialRepository
from ..errors import (
    CheckpointWriteError,
    CredentialResolutionError,
    FitnessInputError,
    IngestionError,
)
from ..models import AppCredential, FetchWindow, Provider, UserCredential
from ..providers import AuthorizedClient, FitnessStrategy, resolve_strategy
from ..providers.infrastructure.oauth import Clock, utc_now
from ..settings import Settings

logger = logging.getLogger(__name__)

SessionFactory = Callable[[Provider, UserCredential, AppCredential], AuthorizedClient]
StrategyResolver = Callable[[Provider, FetchWindow, Settings], FitnessStrategy]


@dataclass(frozen=True)
class RunContext:
    """Values scoped to one run of one polling instance."""

    instance: str
    sink: TextIO
    session_key: str = ""
    checkpoint_dir: str = ""
    management_url: str = ""
    verify_management_cert: bool = False
    clock: Clock = utc_now


@dataclass
class RunSummary:
    """Checkpoints written during a run, keyed by credential id."""

    provider: Provider
    checkpoints: dict[str, datetime] = field(default_factory=dict)
    failures: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.checkpoints)


class IngestionCoordinator:
    """Coordinates credential lookup, strategy dispatch and checkpointing."""

    def __init__(
        self,
        *,
        credentials: CredentialRepository,
        checkpoints: CheckpointStore,
        session_factory: SessionFactory,
        settings: Settings,
        strategy_resolver: StrategyResolver = resolve_strategy,
    ) -> None:
        self._credentials = credentials
        self._checkpoints = checkpoints
        self._session_factory = session_factory
        self._settings = settings
        self._resolve_strategy = strategy_resolver

    @property
    def fallback(self) -> timedelta:
        return timedelta(hours=self._settings.checkpoint_fallback_hours)

    def run(self, provider: Provider, context: RunContext) -> RunSummary:
        """Poll every credential stored for ``provider``.

        A failing credential does not stop the others; once all have been
        attempted an ``IngestionError`` lists the failures. Checkpoint write
        failures abort immediately.
        """

        app = self._credentials.list_app_credential(provider)
        if app is None:
            raise CredentialResolutionError(
                f"No app credential stored for {provider.value}"
            )

        batch = self._credentials.list_user_credentials(provider)
        summary = RunSummary(provider=provider)
        summary.failures.extend((exc.credential_id, exc) for exc in batch.rejected)
        if not batch.credentials:
            logger.info(
                "No stored %s credentials for %s; nothing to poll",
                provider.value,
                context.instance,
            )

        for credential in batch:
            try:
                summary.checkpoints[credential.id] = self.process_credential(
                    provider, app, credential, context
                )
            except CheckpointWriteError:
                raise
            except FitnessInputError as exc:
                logger.error(
                    "Polling %s for credential %s failed: %s",
                    provider.value,
                    credential.id,
                    exc,
                )
                summary.failures.append((credential.id, exc))

        logger.info(
            "%s run for %s finished: %d succeeded, %d failed",
            provider.value,
            context.instance,
            summary.processed,
            len(summary.failures),
        )
        if summary.failures:
            raise IngestionError(summary.failures)
        return summary

    def process_credential(
        self,
        provider: Provider,
        app: AppCredential,
        credential: UserCredential,
        context: RunContext,
    ) -> datetime:
        """Fetch one credential's window and advance its checkpoint."""

        key = CheckpointKey(context.instance, credential.id)
        client = self._session_factory(provider, credential, app)
        now = context.clock()
        resume = resume_point(self._checkpoints, key, now=now, fallback=self.fallback)
        window = FetchWindow.ending_at(resume, now)
        strategy = self._resolve_strategy(provider, window, self._settings)
        logger.info(
            "Fetching %s data for %s from %s to %s",
            provider.value,
            credential.id,
            window.start.isoformat(),
            window.end.isoformat(),
        )
        # A watermark ahead of the clock is kept rather than moved back.
        checkpoint = max(strategy.get_data(client, context.sink), resume)
        self._checkpoints.write(key, checkpoint)
        return checkpoint


__all__ = [
    "IngestionCoordinator",
    "RunContext",
    "RunSummary",
    "SessionFactory",
    "StrategyResolver",
]
