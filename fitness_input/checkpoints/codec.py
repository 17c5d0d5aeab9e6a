"""Binary checkpoint encoding.

Layout: 4-byte magic, 1-byte format version, then the version payload. Version
1 stores a big-endian signed 64-bit count of microseconds since the Unix
epoch. Later versions must keep that field first so older readers can resume.
"""

from __future__ import annotations

import struct
from datetime import datetime, timedelta, timezone

from ..errors import CheckpointCorruptError

MAGIC = b"FICP"
VERSION = 1

_HEADER = struct.Struct(">4sB")
_TIMESTAMP = struct.Struct(">q")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)


def encode_checkpoint(moment: datetime) -> bytes:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    micros = (moment - _EPOCH) // _MICROSECOND
    return _HEADER.pack(MAGIC, VERSION) + _TIMESTAMP.pack(micros)


def decode_checkpoint(data: bytes) -> datetime:
    if len(data) < _HEADER.size:
        raise CheckpointCorruptError("checkpoint is truncated")
    magic, version = _HEADER.unpack_from(data)
    if magic != MAGIC:
        raise CheckpointCorruptError("checkpoint has an unknown format")
    if version < 1:
        raise CheckpointCorruptError(f"checkpoint version {version} is not supported")
    payload = data[_HEADER.size:]
    if len(payload) < _TIMESTAMP.size or (version == VERSION and len(payload) != _TIMESTAMP.size):
        raise CheckpointCorruptError("checkpoint payload has an unexpected length")
    (micros,) = _TIMESTAMP.unpack_from(payload)
    try:
        return _EPOCH + micros * _MICROSECOND
    except OverflowError as exc:
        raise CheckpointCorruptError("checkpoint timestamp is out of range") from exc


__all__ = ["MAGIC", "VERSION", "decode_checkpoint", "encode_checkpoint"]
