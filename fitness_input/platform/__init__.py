"""Host integration helpers."""

from .http import create_http_client
from .modinput import (
    read_input_config,
    read_validation_item,
    render_error,
    render_scheme,
)

__all__ = [
    "create_http_client",
    "read_input_config",
    "read_validation_item",
    "render_error",
    "render_scheme",
]
