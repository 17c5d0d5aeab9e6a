from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from fitness_input.models import FetchWindow, OAuthToken, parse_expiry


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param("2024-01-01T12:00:00Z", datetime(2024, 1, 1, 12, tzinfo=timezone.utc), id="iso_z"),
        pytest.param("2024-01-01T12:00:00", datetime(2024, 1, 1, 12, tzinfo=timezone.utc), id="naive_iso"),
        pytest.param(
            "2024-01-01 12:00:00 +0000 UTC m=+3600.000000001",
            datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
            id="go_monotonic",
        ),
        pytest.param(1704110400, datetime(2024, 1, 1, 12, tzinfo=timezone.utc), id="epoch_seconds"),
        pytest.param("", None, id="empty"),
        pytest.param("0001-01-01 garbage", None, id="unparseable"),
    ],
)
def test_parse_expiry(value: object, expected: datetime | None) -> None:
    assert parse_expiry(value) == expected


def test_token_defaults() -> None:
    token = OAuthToken.model_validate({"access_token": "a", "token_type": "", "expires_at": ""})

    assert token.token_type == "Bearer"
    assert token.expires_at is None
    assert token.authorization == "Bearer a"


def test_token_requires_access_token() -> None:
    with pytest.raises(ValidationError):
        OAuthToken.model_validate({"refresh_token": "r"})


def test_window_start_must_not_follow_end() -> None:
    end = datetime(2024, 1, 1, tzinfo=timezone.utc)

    with pytest.raises(ValidationError):
        FetchWindow(start=end.replace(hour=1), end=end)
    assert FetchWindow.ending_at(end.replace(hour=1), end).start == end
