"""Ingestion orchestration."""

from .coordinator import IngestionCoordinator, RunContext, RunSummary
from .service import run_stanza, stream_events, validate_config

__all__ = [
    "IngestionCoordinator",
    "RunContext",
    "RunSummary",
    "run_stanza",
    "stream_events",
    "validate_config",
]
