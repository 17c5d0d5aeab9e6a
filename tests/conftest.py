"""Shared test fixtures and doubles."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from fitness_input.checkpoints import CheckpointKey, CheckpointStore
from fitness_input.credentials import CredentialBatch, CredentialRepository
from fitness_input.errors import (
    CheckpointMissingError,
    CheckpointWriteError,
    CredentialDecodeError,
)
from fitness_input.models import (
    AppCredential,
    FetchWindow,
    OAuthToken,
    Provider,
    UserCredential,
)
from fitness_input.settings import Settings


class FrozenClock:
    """Mutable clock passed wherever the code asks for "now"."""

    def __init__(self, current: datetime) -> None:
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self._current = current

    def __call__(self) -> datetime:
        return self._current

    @property
    def current(self) -> datetime:
        return self._current

    def advance(self, **delta: Any) -> None:
        self._current += timedelta(**delta)


def make_credential(credential_id: str, realm: str = "FitBit", **token: Any) -> UserCredential:
    return UserCredential(
        id=credential_id,
        realm=realm,
        username=credential_id.split(":")[1] if ":" in credential_id else credential_id,
        token=OAuthToken(access_token=f"{credential_id}-access", **token),
    )


class CredentialRepositoryFake(CredentialRepository):
    """In-memory credential store keyed by provider."""

    def __init__(self) -> None:
        self.apps: Dict[Provider, AppCredential] = {}
        self.users: List[UserCredential] = []
        self.rejected: List[CredentialDecodeError] = []
        self.calls: List[str] = []

    def with_app(self, provider: Provider, client_id: str = "client", secret: str = "secret") -> "CredentialRepositoryFake":
        self.apps[provider] = AppCredential(client_id=client_id, client_secret=secret)
        return self

    def with_users(self, *credentials: UserCredential) -> "CredentialRepositoryFake":
        self.users.extend(credentials)
        return self

    def list_app_credential(self, provider: Provider) -> Optional[AppCredential]:
        self.calls.append("app")
        return self.apps.get(provider)

    def list_user_credentials(self, provider: Provider) -> CredentialBatch:
        self.calls.append("users")
        return CredentialBatch(
            credentials=[c for c in self.users if c.realm == provider.value],
            rejected=list(self.rejected),
        )


class CheckpointStoreFake(CheckpointStore):
    """Checkpoint store double that records writes in order."""

    def __init__(self) -> None:
        self.store: Dict[CheckpointKey, datetime] = {}
        self.writes: List[tuple[CheckpointKey, datetime]] = []
        self.write_error: Exception | None = None

    def read(self, key: CheckpointKey) -> datetime:
        if key not in self.store:
            raise CheckpointMissingError(f"{key} not stored")
        return self.store[key]

    def write(self, key: CheckpointKey, moment: datetime) -> None:
        if self.write_error is not None:
            raise CheckpointWriteError(str(self.write_error))
        self.writes.append((key, moment))
        self.store[key] = moment


@dataclass
class StrategyCall:
    provider: Provider
    window: FetchWindow
    client: Any


@dataclass
class StrategySpy:
    """Stands in for the registry and records every strategy invocation."""

    calls: List[StrategyCall] = field(default_factory=list)
    failures: Dict[str, Exception] = field(default_factory=dict)
    records: List[str] = field(default_factory=list)

    def __call__(self, provider: Provider, window: FetchWindow, settings: Settings) -> Any:
        spy = self

        class _Strategy:
            def __init__(self) -> None:
                self.window = window

            def get_data(self, client: Any, sink: TextIO) -> datetime:
                spy.calls.append(StrategyCall(provider, window, client))
                failure = spy.failures.get(client.credential.id)
                if failure is not None:
                    raise failure
                line = f"{provider.value}:{client.credential.id}\n"
                spy.records.append(line)
                sink.write(line)
                return window.end

        return _Strategy()


@dataclass
class RecordedClient:
    provider: Provider
    credential: UserCredential
    app: AppCredential


@dataclass
class SessionFactorySpy:
    """Records which authorized clients the coordinator builds."""

    built: List[RecordedClient] = field(default_factory=list)
    failures: Dict[str, Exception] = field(default_factory=dict)

    def __call__(self, provider: Provider, credential: UserCredential, app: AppCredential) -> RecordedClient:
        failure = self.failures.get(credential.id)
        if failure is not None:
            raise failure
        client = RecordedClient(provider, credential, app)
        self.built.append(client)
        return client


@pytest.fixture
def settings() -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        management_url="https://127.0.0.1:8089",
        google_fitness_api_url="https://fitness.example.com/fitness/v1",
        google_token_url="https://oauth.example.com/token",
        fitbit_api_url="https://fitbit.example.com",
        fitbit_token_url="https://fitbit.example.com/oauth2/token",
        checkpoint_fallback_hours=2,
    )


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def credential_repository() -> CredentialRepositoryFake:
    return CredentialRepositoryFake()


@pytest.fixture
def checkpoint_store() -> CheckpointStoreFake:
    return CheckpointStoreFake()


@pytest.fixture
def strategy_spy() -> StrategySpy:
    return StrategySpy()


@pytest.fixture
def session_factory() -> SessionFactorySpy:
    return SessionFactorySpy()
