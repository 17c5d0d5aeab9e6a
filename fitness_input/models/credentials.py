from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Layout produced by Go's time.Time.String(), e.g.
# "2016-06-21 07:59:23.44961918 -0700 PDT m=+0.000000001"
_GO_TIME = re.compile(
    r"^(?P<stamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r" (?P<offset>[+-]\d{4})"
    r"(?: \S+)*$"
)


def parse_expiry(value: Any) -> Optional[datetime]:
    """Parse a stored ``expires_at`` value into an aware datetime.

    Unparseable or empty values mean the expiry is unknown.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        text = str(value).strip()
        match = _GO_TIME.match(text)
        if match:
            fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
            parsed = datetime.strptime(
                f"{match.group('stamp')}.{fraction} {match.group('offset')}",
                "%Y-%m-%d %H:%M:%S.%f %z",
            )
        else:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class OAuthToken(BaseModel):
    """Per-user OAuth token decoded from the secure store."""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    expires_at: Optional[datetime] = None

    @field_validator("expires_at", mode="before")
    @classmethod
    def _coerce_expiry(cls, value: Any) -> Optional[datetime]:
        return parse_expiry(value)

    @field_validator("token_type", mode="before")
    @classmethod
    def _default_token_type(cls, value: Any) -> str:
        return value or "Bearer"

    def is_expired(self, now: datetime, leeway: timedelta = timedelta(seconds=30)) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at - leeway <= now

    @property
    def authorization(self) -> str:
        # Google returns "Bearer" but some stores hold the lower-case form.
        token_type = "Bearer" if self.token_type.lower() == "bearer" else self.token_type
        return f"{token_type} {self.access_token}"


class UserCredential(BaseModel):
    """A stored token together with the store entry it came from."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identifier of the secure store entry")
    realm: str
    username: str = ""
    token: OAuthToken


class AppCredential(BaseModel):
    """OAuth client registration shared by every user of a provider."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str


class StoredEntry(BaseModel):
    """Raw entry returned by the secure credential store."""

    id: str
    name: str = ""
    content: dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        value = self.content.get(key)
        return None if value is None else str(value)
