"""Checkpoint store writing one small binary file per credential."""

from __future__ import annotations

import hashlib
import os
import tempfile
from datetime import datetime
from pathlib import Path

from ..errors import (
    CheckpointCorruptError,
    CheckpointMissingError,
    CheckpointReadError,
    CheckpointWriteError,
)
from .codec import decode_checkpoint, encode_checkpoint
from .ports import CheckpointKey, CheckpointStore


class FileCheckpointStore(CheckpointStore):
    """Store watermarks under ``<checkpoint_dir>/<instance>/<credential digest>``."""

    def __init__(self, checkpoint_dir: str | os.PathLike[str]) -> None:
        self._root = Path(checkpoint_dir)

    def path_for(self, key: CheckpointKey) -> Path:
        digest = hashlib.sha256(key.credential_id.encode("utf-8")).hexdigest()[:16]
        return self._root / key.instance / digest

    def read(self, key: CheckpointKey) -> datetime:
        path = self.path_for(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise CheckpointMissingError(f"{path} does not exist") from exc
        except OSError as exc:
            raise CheckpointReadError(f"Unable to read checkpoint file {path}: {exc}") from exc
        try:
            return decode_checkpoint(data)
        except CheckpointCorruptError as exc:
            raise CheckpointCorruptError(f"{path}: {exc}") from exc

    def write(self, key: CheckpointKey, moment: datetime) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write a sibling temp file, then rename it over the target.
            fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(encode_checkpoint(moment))
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(temp_name, path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CheckpointWriteError(f"Error writing checkpoint file {path}: {exc}") from exc


__all__ = ["FileCheckpointStore"]
