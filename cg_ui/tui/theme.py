from __future__ import annotations

from typing import Mapping

from rich.markup import escape

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT
RICH_CURSOR_STYLE = "bold white on blue"
RICH_SENTINEL_STYLE = "italic cyan"
RICH_CONTEXT_STYLE = "dim"
RICH_HELP_STYLE = "dim italic"
RICH_PLACEHOLDER_STYLE = "dim"

# CodePipeline stage states.
RICH_STATUS_COLORS: dict[str, str] = {
    "Succeeded": "green",
    "Failed": "red",
    "InProgress": "yellow",
    "Stopped": "dim",
    "Stopping": "yellow",
    "Superseded": "dim",
    "Cancelled": "dim",
    "Unknown": "dim",
}

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

SPINNER_NAME = "dots"


def panel_title(text: str) -> str:
    return f"[{RICH_ACCENT_BOLD}]{text}[/{RICH_ACCENT_BOLD}]"


def status_style(status: str) -> str:
    return RICH_STATUS_COLORS.get(status, "")


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=escape(message))


def error_line(message: str) -> str:
    return f"[bold red]Error: {escape(message)}[/bold red]"


def prompt_toolkit_wizard_style() -> Mapping[str, str]:
    return {
        "frame.border": "fg:#0000aa",
        "frame.label": "fg:#0000aa bold",
    }
