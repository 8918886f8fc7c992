"""Themed icon map resolution for launcher icon providers."""

__version__ = "0.3.0"
