"""Static table of provider strategies and OAuth endpoints."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple

import httpx

from ..errors import StrategyResolutionError
from ..models import AppCredential, FetchWindow, Provider, UserCredential
from ..settings import Settings
from .application.ports import FitnessStrategy
from .infrastructure.fitbit import FitBitStrategy
from .infrastructure.google_fitness import GoogleFitnessStrategy
from .infrastructure.oauth import Clock, OAuthSession, utc_now

StrategyFactory = Callable[[FetchWindow, Settings], FitnessStrategy]


class TokenEndpoint(NamedTuple):
    setting: str
    basic_client_auth: bool


STRATEGIES: Mapping[Provider, StrategyFactory] = MappingProxyType(
    {
        Provider.GOOGLE_FITNESS: GoogleFitnessStrategy,
        Provider.FITBIT: FitBitStrategy,
    }
)

TOKEN_ENDPOINTS: Mapping[Provider, TokenEndpoint] = MappingProxyType(
    {
        Provider.GOOGLE_FITNESS: TokenEndpoint("google_token_url", False),
        Provider.FITBIT: TokenEndpoint("fitbit_token_url", True),
    }
)


def resolve_strategy(
    provider: Provider | str, window: FetchWindow, settings: Settings
) -> FitnessStrategy:
    """Build the strategy registered for ``provider`` bound to ``window``.

    Unknown names raise ``UnsupportedProviderError``; known providers without
    a registered strategy raise ``StrategyResolutionError``.
    """

    if not isinstance(provider, Provider):
        provider = Provider.parse(provider)
    factory = STRATEGIES.get(provider)
    if factory is None:
        raise StrategyResolutionError(f"Unsupported reader requested: {provider.value}")
    return factory(window, settings)


def create_session(
    provider: Provider,
    *,
    http_client: httpx.Client,
    credential: UserCredential,
    app: AppCredential,
    settings: Settings,
    clock: Clock = utc_now,
) -> OAuthSession:
    """Build an authorized client for ``credential`` against ``provider``."""

    endpoint = TOKEN_ENDPOINTS.get(provider)
    if endpoint is None:
        raise StrategyResolutionError(f"No OAuth endpoint registered for {provider.value}")
    return OAuthSession(
        http_client,
        credential.token,
        app,
        token_url=getattr(settings, endpoint.setting),
        basic_client_auth=endpoint.basic_client_auth,
        clock=clock,
    )


__all__ = [
    "STRATEGIES",
    "StrategyFactory",
    "TOKEN_ENDPOINTS",
    "create_session",
    "resolve_strategy",
]
