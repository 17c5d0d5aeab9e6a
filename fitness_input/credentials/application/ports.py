"""Ports for resolving stored OAuth credentials."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, runtime_checkable

from ...errors import CredentialDecodeError
from ...models import AppCredential, Provider, UserCredential


@dataclass
class CredentialBatch:
    """User credentials for one provider plus the entries that failed to decode."""

    credentials: List[UserCredential] = field(default_factory=list)
    rejected: List[CredentialDecodeError] = field(default_factory=list)

    def __iter__(self) -> Iterator[UserCredential]:
        return iter(self.credentials)

    def __len__(self) -> int:
        return len(self.credentials)


@runtime_checkable
class CredentialRepository(Protocol):
    """Port exposing the secure credential store to the orchestrator."""

    def list_app_credential(self, provider: Provider) -> Optional[AppCredential]:
        """Return the OAuth client registration for ``provider`` if one is stored."""

    def list_user_credentials(self, provider: Provider) -> CredentialBatch:
        """Return every stored user token whose realm is ``provider``."""


__all__ = ["CredentialBatch", "CredentialRepository"]
