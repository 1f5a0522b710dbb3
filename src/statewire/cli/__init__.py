"""Command-line interface for statewire."""

from .main import cli

__all__ = ["cli"]
