"""Fitness provider strategies."""

from .application import AuthorizedClient, FitnessStrategy
from .infrastructure import FitBitStrategy, GoogleFitnessStrategy, OAuthSession
from .registry import STRATEGIES, create_session, resolve_strategy

__all__ = [
    "AuthorizedClient",
    "FitBitStrategy",
    "FitnessStrategy",
    "GoogleFitnessStrategy",
    "OAuthSession",
    "STRATEGIES",
    "create_session",
    "resolve_strategy",
]
