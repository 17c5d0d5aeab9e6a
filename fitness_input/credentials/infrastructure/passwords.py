"""Credential repository backed by the host's ``storage/passwords`` endpoint."""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from ...errors import CredentialDecodeError, CredentialResolutionError
from ...models import AppCredential, OAuthToken, Provider, StoredEntry, UserCredential
from ...settings import Settings
from ..application.ports import CredentialBatch, CredentialRepository

logger = logging.getLogger(__name__)


class StoragePasswordsRepository(CredentialRepository):
    """Read OAuth app and user credentials stored for this application.

    The store is queried once per instance; app and user lookups share the
    cached entries.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        settings: Settings,
        *,
        session_key: str,
        management_url: str | None = None,
    ) -> None:
        self._http_client = http_client
        self._settings = settings
        self._session_key = session_key
        self._management_url = (management_url or settings.management_url).rstrip("/")
        self._entries: Optional[List[StoredEntry]] = None

    @property
    def endpoint(self) -> str:
        return (
            f"{self._management_url}/servicesNS/{self._settings.owner}/"
            f"{self._settings.app_name}/storage/passwords"
        )

    def list_entries(self) -> List[StoredEntry]:
        """Return all password entries owned by this application."""

        if self._entries is not None:
            return self._entries

        try:
            response = self._http_client.get(
                self.endpoint,
                headers={"Authorization": f"Splunk {self._session_key}"},
                params={"output_mode": "json", "count": 0},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise CredentialResolutionError(
                f"Unable to retrieve password entries for {self._settings.app_name}: {exc}"
            ) from exc
        except ValueError as exc:
            raise CredentialResolutionError(
                f"Password listing for {self._settings.app_name} is not valid JSON"
            ) from exc

        try:
            self._entries = [
                StoredEntry.model_validate(entry) for entry in payload.get("entry", [])
            ]
        except (AttributeError, ValidationError) as exc:
            raise CredentialResolutionError(
                f"Unexpected password listing for {self._settings.app_name}: {exc}"
            ) from exc
        return self._entries

    def list_app_credential(self, provider: Provider) -> Optional[AppCredential]:
        marker = self._app_markers().get(provider)
        if not marker:
            return None

        for entry in self.list_entries():
            # The entry id embeds the stored username, which for OAuth apps is
            # the client id.
            if marker in entry.id:
                return AppCredential(
                    client_id=entry.get("username") or "",
                    client_secret=entry.get("clear_password") or "",
                )
        return None

    def list_user_credentials(self, provider: Provider) -> CredentialBatch:
        marker = self._app_markers().get(provider)
        batch = CredentialBatch()
        for entry in self.list_entries():
            if entry.get("realm") != provider.value:
                continue
            if marker and marker in entry.id:
                continue
            try:
                batch.credentials.append(self._decode(entry))
            except CredentialDecodeError as exc:
                logger.warning("%s", exc)
                batch.rejected.append(exc)
        return batch

    def _decode(self, entry: StoredEntry) -> UserCredential:
        identifier = entry.name or entry.id
        payload = entry.get("clear_password")
        if not payload:
            raise CredentialDecodeError(identifier, "empty token payload")
        try:
            token = OAuthToken.model_validate(json.loads(payload))
        except (ValueError, TypeError, ValidationError) as exc:
            raise CredentialDecodeError(identifier, str(exc)) from exc
        return UserCredential(
            id=identifier,
            realm=entry.get("realm") or "",
            username=entry.get("username") or "",
            token=token,
        )

    def _app_markers(self) -> Dict[Provider, str]:
        return {
            Provider.GOOGLE_FITNESS: self._settings.google_app_marker,
            Provider.FITBIT: self._settings.fitbit_app_marker,
        }


def create_credential_repository(
    *,
    http_client: httpx.Client,
    settings: Settings,
    session_key: str,
    management_url: str | None = None,
) -> CredentialRepository:
    """Create the storage/passwords repository for one run."""
    return StoragePasswordsRepository(
        http_client,
        settings,
        session_key=session_key,
        management_url=management_url,
    )
