"""Builder helpers to express test inputs succinctly."""

from __future__ import annotations

import json
from typing import Any, Dict, List
from urllib.parse import quote

STORE_URL = "https://127.0.0.1:8089/servicesNS/nobody/TA-GoogleFitness/storage/passwords"


def make_token_payload(**overrides: Any) -> Dict[str, Any]:
    """Return a stored token payload with optional overrides."""

    base = {
        "access_token": "access-token",
        "refresh_token": "refresh-token",
        "token_type": "Bearer",
        "expires_at": "2030-01-01T00:00:00+00:00",
    }
    base.update(overrides)
    return base


def make_password_entry(
    name: str,
    *,
    realm: str = "",
    username: str = "",
    clear_password: Any = "",
) -> Dict[str, Any]:
    """Build one storage/passwords entry as returned in JSON output mode."""

    if isinstance(clear_password, dict):
        clear_password = json.dumps(clear_password)
    return {
        "name": name,
        "id": f"{STORE_URL}/{quote(name, safe='')}",
        "content": {
            "realm": realm,
            "username": username,
            "clear_password": clear_password,
        },
    }


def make_user_entry(realm: str, username: str, **token: Any) -> Dict[str, Any]:
    return make_password_entry(
        f"{realm}:{username}:",
        realm=realm,
        username=username,
        clear_password=make_token_payload(access_token=f"{username}-access", **token),
    )


def make_google_app_entry(
    client_id: str = "1234.apps.googleusercontent.com", secret: str = "google-secret"
) -> Dict[str, Any]:
    return make_password_entry(f":{client_id}:", username=client_id, clear_password=secret)


def make_fitbit_app_entry(client_id: str = "227MVJ", secret: str = "fitbit-secret") -> Dict[str, Any]:
    return make_password_entry(
        f"fitbit-app:{client_id}:",
        realm="fitbit-app",
        username=client_id,
        clear_password=secret,
    )


def make_passwords_listing(*entries: Dict[str, Any]) -> Dict[str, Any]:
    return {"entry": list(entries)}


def make_input_xml(
    stanzas: List[tuple[str, Dict[str, str]]],
    *,
    checkpoint_dir: str = "/tmp/checkpoints",
    server_uri: str = "https://127.0.0.1:8089",
    session_key: str = "session-key",
) -> str:
    """Render the configuration document the host writes to stdin."""

    rendered = []
    for name, params in stanzas:
        body = "".join(
            f'<param name="{key}">{value}</param>' for key, value in params.items()
        )
        rendered.append(f'<stanza name="{name}">{body}</stanza>')
    return (
        "<input>"
        "<server_host>splunk</server_host>"
        f"<server_uri>{server_uri}</server_uri>"
        f"<session_key>{session_key}</session_key>"
        f"<checkpoint_dir>{checkpoint_dir}</checkpoint_dir>"
        f"<configuration>{''.join(rendered)}</configuration>"
        "</input>"
    )


def make_validation_xml(params: Dict[str, str]) -> str:
    body = "".join(f'<param name="{key}">{value}</param>' for key, value in params.items())
    return (
        "<items>"
        "<server_host>splunk</server_host>"
        "<session_key>session-key</session_key>"
        f'<item name="fitness">{body}</item>'
        "</items>"
    )
