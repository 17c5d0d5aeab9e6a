"""HTTP-backed provider strategies."""

from .events import write_event
from .fitbit import FitBitStrategy
from .google_fitness import GoogleFitnessStrategy
from .oauth import OAuthSession

__all__ = [
    "FitBitStrategy",
    "GoogleFitnessStrategy",
    "OAuthSession",
    "write_event",
]
