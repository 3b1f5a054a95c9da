"""Typer sub-apps registered on the cloudgate CLI."""
