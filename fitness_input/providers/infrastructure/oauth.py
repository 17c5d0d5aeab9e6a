"""OAuth-authorized HTTP session for one stored user token."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import httpx

from ...errors import FetchError, ProviderAuthError
from ...models import AppCredential, OAuthToken
from ..application.ports import AuthorizedClient

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OAuthSession(AuthorizedClient):
    """Sign requests with a user token, refreshing it in memory when needed.

    Refreshed tokens live only for the duration of the run; the secure store
    is never written to.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        token: OAuthToken,
        app: AppCredential,
        *,
        token_url: str,
        basic_client_auth: bool = False,
        clock: Clock = utc_now,
    ) -> None:
        self._http_client = http_client
        self._token = token
        self._app = app
        self._token_url = token_url
        self._basic_client_auth = basic_client_auth
        self._clock = clock

    @property
    def token(self) -> OAuthToken:
        return self._token

    def get(self, url: str, *, params: dict[str, Any] | None = None) -> httpx.Response:
        """Fetch ``url``, refreshing the token once on expiry or a 401."""

        if self._token.is_expired(self._clock()):
            self.refresh()

        try:
            response = self._send(url, params)
            if response.status_code == 401 and self._token.refresh_token:
                self.refresh()
                response = self._send(url, params)
            if response.status_code == 401:
                raise ProviderAuthError(f"Provider rejected access token for {url}")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {url} failed: {exc}") from exc
        return response

    def refresh(self) -> OAuthToken:
        """Exchange the refresh token for a new access token."""

        if not self._token.refresh_token:
            raise ProviderAuthError("Stored token has no refresh token")

        payload = {
            "grant_type": "refresh_token",
            "refresh_token": self._token.refresh_token,
        }
        auth: Optional[tuple[str, str]] = None
        if self._basic_client_auth:
            auth = (self._app.client_id, self._app.client_secret)
        else:
            payload["client_id"] = self._app.client_id
            payload["client_secret"] = self._app.client_secret

        try:
            response = self._http_client.post(self._token_url, data=payload, auth=auth)
        except httpx.HTTPError as exc:
            raise ProviderAuthError(f"Failed to refresh access token: {exc}") from exc
        if response.status_code != 200:
            raise ProviderAuthError(
                f"Failed to refresh access token (status {response.status_code})"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderAuthError("Token refresh response is not valid JSON") from exc
        if not isinstance(data, dict):
            raise ProviderAuthError("Token refresh response is not a JSON object")
        access_token: Optional[str] = data.get("access_token")
        if not access_token:
            raise ProviderAuthError("Token refresh response missing access token")

        expires_in = data.get("expires_in")
        expires_at = None
        if expires_in:
            try:
                lifetime = timedelta(seconds=int(expires_in))
            except (TypeError, ValueError, OverflowError) as exc:
                raise ProviderAuthError(
                    f"Token refresh response has invalid expires_in {expires_in!r}"
                ) from exc
            expires_at = self._clock() + lifetime

        self._token = self._token.model_copy(
            update={
                "access_token": access_token,
                "refresh_token": data.get("refresh_token") or self._token.refresh_token,
                "token_type": data.get("token_type") or self._token.token_type,
                "expires_at": expires_at,
            }
        )
        logger.info("Refreshed access token via %s", self._token_url)
        return self._token

    def _send(self, url: str, params: dict[str, Any] | None) -> httpx.Response:
        return self._http_client.get(
            url,
            params=params,
            headers={"Authorization": self._token.authorization},
        )


__all__ = ["Clock", "OAuthSession", "utc_now"]
