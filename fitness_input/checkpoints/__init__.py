"""Checkpoint persistence."""

from .codec import decode_checkpoint, encode_checkpoint
from .file_store import FileCheckpointStore
from .ports import CheckpointKey, CheckpointStore, resume_point

__all__ = [
    "CheckpointKey",
    "CheckpointStore",
    "FileCheckpointStore",
    "decode_checkpoint",
    "encode_checkpoint",
    "resume_point",
]
