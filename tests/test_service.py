"""Polling several stanzas in one run."""

from __future__ import annotations

import io
from pathlib import Path

import httpx
import pytest
import respx

from fitness_input.checkpoints import CheckpointKey, FileCheckpointStore
from fitness_input.errors import CredentialResolutionError, IngestionError
from fitness_input.ingestion import stream_events
from fitness_input.platform import read_input_config
from fitness_input.settings import Settings

from tests.builders import (
    STORE_URL,
    make_fitbit_app_entry,
    make_input_xml,
    make_password_entry,
    make_passwords_listing,
    make_user_entry,
)
from tests.conftest import FrozenClock

STANZAS = [
    ("fitness://first", {"FitnessService": "FitBit"}),
    ("fitness://second", {"FitnessService": "FitBit"}),
]


def test_credential_failures_do_not_skip_later_stanzas(
    tmp_path: Path, settings: Settings, clock: FrozenClock
) -> None:
    config = read_input_config(io.StringIO(make_input_xml(STANZAS, checkpoint_dir=str(tmp_path))))
    listing = make_passwords_listing(
        make_fitbit_app_entry(),
        make_password_entry("FitBit:broken:", realm="FitBit", clear_password="{bad"),
        make_user_entry("FitBit", "alice"),
    )
    sink = io.StringIO()

    with respx.mock(assert_all_called=False) as router:
        router.get(STORE_URL).mock(return_value=httpx.Response(200, json=listing))
        router.get(url__regex=r"https://fitbit\.example\.com/1/user/-/activities/date/.*").mock(
            return_value=httpx.Response(200, json={"summary": {"steps": 7}})
        )
        with pytest.raises(IngestionError) as excinfo:
            stream_events(config, sink, settings=settings, clock=clock)

    assert [credential_id for credential_id, _ in excinfo.value.failures] == [
        "first/FitBit:broken:",
        "second/FitBit:broken:",
    ]
    store = FileCheckpointStore(tmp_path)
    for instance in ("first", "second"):
        assert store.read(CheckpointKey(instance, "FitBit:alice:")) == clock.current
    assert len(sink.getvalue().splitlines()) == 2


def test_credential_store_failure_stops_the_run(
    tmp_path: Path, settings: Settings, clock: FrozenClock
) -> None:
    config = read_input_config(io.StringIO(make_input_xml(STANZAS, checkpoint_dir=str(tmp_path))))

    with respx.mock(assert_all_called=False) as router:
        route = router.get(STORE_URL).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(CredentialResolutionError):
            stream_events(config, io.StringIO(), settings=settings, clock=clock)

    assert route.call_count == 1
    assert list(tmp_path.iterdir()) == []
