"""Application layer for provider strategies."""

from .ports import AuthorizedClient, FitnessStrategy

__all__ = ["AuthorizedClient", "FitnessStrategy"]
