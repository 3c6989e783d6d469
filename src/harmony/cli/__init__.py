"""Command line interface for Daily Harmony."""

from harmony.cli.main import cli

__all__ = ["cli"]
