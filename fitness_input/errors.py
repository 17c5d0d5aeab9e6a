"""Error taxonomy shared by the connector layers."""

from __future__ import annotations

from typing import Sequence, Tuple


class FitnessInputError(RuntimeError):
    """Base class for failures surfaced by the modular input."""


class ConfigurationError(FitnessInputError):
    """Raised when the host configuration is missing or invalid."""


class UnsupportedProviderError(ConfigurationError):
    """Raised when the configured fitness service is not a known provider."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"Improper service '{provider}' name indicated.")
        self.provider = provider


class CredentialResolutionError(FitnessInputError):
    """Raised when the secure store cannot be queried or lacks app credentials."""


class CredentialDecodeError(FitnessInputError):
    """Raised when a stored token payload cannot be decoded."""

    def __init__(self, credential_id: str, reason: str) -> None:
        super().__init__(f"Unable to decode stored token {credential_id!r}: {reason}")
        self.credential_id = credential_id


class CheckpointReadError(FitnessInputError):
    """Raised when a checkpoint cannot be read."""


class CheckpointMissingError(CheckpointReadError):
    """Raised when no checkpoint has been written yet."""


class CheckpointCorruptError(CheckpointReadError):
    """Raised when a checkpoint exists but cannot be decoded."""


class CheckpointWriteError(FitnessInputError):
    """Raised when a checkpoint cannot be persisted."""


class StrategyResolutionError(FitnessInputError):
    """Raised when a known provider has no registered fetch strategy."""


class FetchError(FitnessInputError):
    """Raised when a provider request fails."""


class ProviderAuthError(FetchError):
    """Raised when a provider rejects or cannot refresh a user token."""


class IngestionError(FitnessInputError):
    """Raised after a run in which one or more credentials failed."""

    def __init__(self, failures: Sequence[Tuple[str, Exception]]) -> None:
        self.failures = list(failures)
        names = ", ".join(credential_id for credential_id, _ in self.failures)
        super().__init__(
            f"{len(self.failures)} credential(s) failed during ingestion: {names}"
        )


__all__ = [
    "FitnessInputError",
    "ConfigurationError",
    "UnsupportedProviderError",
    "CredentialResolutionError",
    "CredentialDecodeError",
    "CheckpointReadError",
    "CheckpointMissingError",
    "CheckpointCorruptError",
    "CheckpointWriteError",
    "StrategyResolutionError",
    "FetchError",
    "ProviderAuthError",
    "IngestionError",
]
