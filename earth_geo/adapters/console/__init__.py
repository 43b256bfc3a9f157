"""Console adapters - Session and world ports for the CLI."""

from .console_session import ConsoleSession, FlatWorld

__all__ = ["ConsoleSession", "FlatWorld"]
