"""Entry point for streaming events from every configured polling instance."""

from __future__ import annotations

import logging
from typing import Callable, List, TextIO, Tuple

import httpx

from ..checkpoints import FileCheckpointStore
from ..credentials import create_credential_repository
from ..errors import ConfigurationError, IngestionError
from ..models import AppCredential, InputConfig, Provider, Stanza, UserCredential
from ..platform.http import create_http_client
from ..providers import AuthorizedClient, create_session
from ..providers.infrastructure.oauth import Clock, utc_now
from ..settings import Settings
from .coordinator import IngestionCoordinator, RunContext, RunSummary

logger = logging.getLogger(__name__)

HttpClientFactory = Callable[..., httpx.Client]


def validate_config(config: InputConfig) -> List[tuple[Stanza, Provider]]:
    """Validate every stanza before any network call is made."""

    if not config.stanzas:
        raise ConfigurationError("Configuration contains no stanzas")
    if not config.checkpoint_dir:
        raise ConfigurationError("Configuration is missing checkpoint_dir")
    return [(stanza, stanza.provider) for stanza in config.stanzas]


def build_context(config: InputConfig, stanza: Stanza, sink: TextIO, clock: Clock) -> RunContext:
    return RunContext(
        instance=stanza.instance_name,
        sink=sink,
        session_key=config.session_key,
        checkpoint_dir=config.checkpoint_dir,
        management_url=config.server_uri,
        verify_management_cert=stanza.force_cert_validation,
        clock=clock,
    )


def run_stanza(
    provider: Provider,
    context: RunContext,
    *,
    settings: Settings,
    http_client_factory: HttpClientFactory = create_http_client,
) -> RunSummary:
    """Run one polling instance with its own HTTP clients and adapters."""

    with http_client_factory(
        settings, verify=context.verify_management_cert
    ) as store_client, http_client_factory(settings) as provider_client:
        credentials = create_credential_repository(
            http_client=store_client,
            settings=settings,
            session_key=context.session_key,
            management_url=context.management_url or None,
        )

        def session_factory(
            provider: Provider, credential: UserCredential, app: AppCredential
        ) -> AuthorizedClient:
            return create_session(
                provider,
                http_client=provider_client,
                credential=credential,
                app=app,
                settings=settings,
                clock=context.clock,
            )

        coordinator = IngestionCoordinator(
            credentials=credentials,
            checkpoints=FileCheckpointStore(context.checkpoint_dir),
            session_factory=session_factory,
            settings=settings,
        )
        return coordinator.run(provider, context)


def stream_events(
    config: InputConfig,
    sink: TextIO,
    *,
    settings: Settings,
    http_client_factory: HttpClientFactory = create_http_client,
    clock: Clock = utc_now,
) -> List[RunSummary]:
    """Poll every stanza in ``config`` in order.

    Credential failures in one stanza are collected and the next stanza is
    still polled; ``IngestionError`` lists them all once every stanza ran.
    Configuration, credential store and checkpoint write errors stop at once.
    """

    summaries: List[RunSummary] = []
    failures: List[Tuple[str, Exception]] = []
    for stanza, provider in validate_config(config):
        logger.info("Starting %s polling for %s", provider.value, stanza.name)
        context = build_context(config, stanza, sink, clock)
        try:
            summaries.append(
                run_stanza(
                    provider,
                    context,
                    settings=settings,
                    http_client_factory=http_client_factory,
                )
            )
        except IngestionError as exc:
            logger.error("Polling %s finished with failures: %s", stanza.name, exc)
            failures.extend(
                (f"{context.instance}/{credential_id}", error)
                for credential_id, error in exc.failures
            )
    if failures:
        raise IngestionError(failures)
    return summaries


__all__ = ["build_context", "run_stanza", "stream_events", "validate_config"]
