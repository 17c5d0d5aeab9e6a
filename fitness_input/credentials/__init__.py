"""Credential resolution package."""

from .application import CredentialBatch, CredentialRepository
from .infrastructure import StoragePasswordsRepository, create_credential_repository

__all__ = [
    "CredentialBatch",
    "CredentialRepository",
    "StoragePasswordsRepository",
    "create_credential_repository",
]
