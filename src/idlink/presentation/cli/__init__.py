"""idlink command-line interface."""

from idlink.presentation.cli.app import app, cli

__all__ = ["app", "cli"]
