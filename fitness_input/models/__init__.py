from .config import InputConfig, Stanza, ValidationItem, parse_bool, validate_parameters
from .credentials import (
    AppCredential,
    OAuthToken,
    StoredEntry,
    UserCredential,
    parse_expiry,
)
from .provider import CERT_VALIDATION_PARAM, PROVIDER_PARAM, Provider
from .window import FetchWindow

__all__ = [
    'AppCredential',
    'CERT_VALIDATION_PARAM',
    'FetchWindow',
    'InputConfig',
    'OAuthToken',
    'PROVIDER_PARAM',
    'Provider',
    'Stanza',
    'StoredEntry',
    'UserCredential',
    'ValidationItem',
    'parse_bool',
    'parse_expiry',
    'validate_parameters',
]
