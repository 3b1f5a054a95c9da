"""UI facade for the cloudgate CLI and terminal front ends."""

from cg_ui.cli import app, main

__all__ = ["app", "main"]
