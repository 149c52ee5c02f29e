"""Errors that are allowed to reach the CLI entrypoint."""

from __future__ import annotations


class StartupError(RuntimeError):
    """Raised when the viewer cannot find anything to show at startup."""
