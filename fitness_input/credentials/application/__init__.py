"""Application layer for credential resolution."""

from .ports import CredentialBatch, CredentialRepository

__all__ = ["CredentialBatch", "CredentialRepository"]
