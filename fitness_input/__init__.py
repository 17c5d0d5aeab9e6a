"""Modular input that polls fitness tracking APIs for stored OAuth users."""

__version__ = "0.3.0"
