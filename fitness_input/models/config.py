from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError
from .provider import CERT_VALIDATION_PARAM, PROVIDER_PARAM, Provider

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


def parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Parameter '{name}' must be a boolean, got '{value}'")


def validate_parameters(params: Dict[str, str]) -> Provider:
    """Check stanza parameters and return the selected provider.

    Raises ``ConfigurationError`` when the provider parameter is missing and
    ``UnsupportedProviderError`` when it names an unknown service.
    """

    if PROVIDER_PARAM not in params:
        raise ConfigurationError(f"Missing required parameter '{PROVIDER_PARAM}'")
    provider = Provider.parse(params[PROVIDER_PARAM])
    if CERT_VALIDATION_PARAM in params:
        parse_bool(CERT_VALIDATION_PARAM, params[CERT_VALIDATION_PARAM])
    return provider


class Stanza(BaseModel):
    """One named polling instance."""

    model_config = ConfigDict(frozen=True)

    name: str
    params: Dict[str, str] = Field(default_factory=dict)

    @property
    def instance_name(self) -> str:
        """Stanza name with any ``scheme://`` prefix removed."""

        _, separator, remainder = self.name.partition("://")
        return remainder if separator else self.name

    @property
    def provider(self) -> Provider:
        return validate_parameters(self.params)

    @property
    def force_cert_validation(self) -> bool:
        value = self.params.get(CERT_VALIDATION_PARAM)
        if value is None:
            return False
        return parse_bool(CERT_VALIDATION_PARAM, value)


class InputConfig(BaseModel):
    """Configuration document delivered by the host for a streaming run."""

    model_config = ConfigDict(frozen=True)

    server_host: str = ""
    server_uri: str = ""
    session_key: str = ""
    checkpoint_dir: str = ""
    stanzas: List[Stanza] = Field(default_factory=list)


class ValidationItem(BaseModel):
    """Stanza parameters submitted for external validation."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    params: Dict[str, str] = Field(default_factory=dict)
