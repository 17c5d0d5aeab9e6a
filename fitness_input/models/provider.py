from __future__ import annotations

from enum import Enum

from ..errors import UnsupportedProviderError

PROVIDER_PARAM = "FitnessService"
CERT_VALIDATION_PARAM = "force_cert_validation"


class Provider(str, Enum):
    """Fitness services a polling instance may be configured for."""

    GOOGLE_FITNESS = "GoogleFitness"
    FITBIT = "FitBit"
    MICROSOFT = "Microsoft"

    @classmethod
    def parse(cls, value: str | None) -> "Provider":
        """Return the provider named ``value`` or raise ``UnsupportedProviderError``."""

        for provider in cls:
            if provider.value == value:
                return provider
        raise UnsupportedProviderError(value or "")

    @classmethod
    def names(cls) -> list[str]:
        return [provider.value for provider in cls]
