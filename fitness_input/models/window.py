from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator


class FetchWindow(BaseModel):
    """Time range ``[start, end)`` requested from a provider."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _ordered(self) -> "FetchWindow":
        if self.start > self.end:
            raise ValueError("window start must not be after its end")
        return self

    @classmethod
    def ending_at(cls, start: datetime, end: datetime) -> "FetchWindow":
        """Build a window, clamping a start that lies in the future to ``end``."""

        return cls(start=min(start, end), end=end)
