from __future__ import annotations

import json
from typing import Any, Dict, TextIO


def write_event(sink: TextIO, record: Dict[str, Any]) -> None:
    """Write one record as a single minified JSON line."""

    sink.write(json.dumps(record, separators=(",", ":"), default=str))
    sink.write("\n")


__all__ = ["write_event"]
