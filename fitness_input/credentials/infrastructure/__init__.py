"""Infrastructure adapters for credential resolution."""

from .passwords import StoragePasswordsRepository, create_credential_repository

__all__ = ["StoragePasswordsRepository", "create_credential_repository"]
