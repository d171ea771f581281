"""CLI command modules."""

from skillmatch.cli.commands import config, skill

__all__ = ["config", "skill"]
