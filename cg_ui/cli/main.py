"""
Command-line interface for cloudgate.

Launches the interactive wizard for cloud approvals and pipelines, or replays a
scripted walk through it with ``--headless``. The ``approvals`` commands list and
decide manual approvals without the wizard.
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from cg_common.errors import CGError, ConfigurationError, UIFlowError
from cg_ui.cli.commands.approvals import create_approvals_app
from cg_ui.tui import theme
from cg_ui.tui.headless import HeadlessWizard, parse_script
from cg_ui.wiring.dependencies import UIContext, configure_logging

logger = logging.getLogger(__name__)

ctx_store = UIContext()
approvals_app = create_approvals_app(ctx_store)

app = typer.Typer(
    help="Walk through cloud resources and act on them from the terminal.",
)
app.add_typer(approvals_app, name="approvals")


def _fail(exc: Exception, exit_code: int) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(exit_code)


def _require_terminal() -> None:
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise UIFlowError(
            "cloudgate needs an interactive terminal; use --headless --script for automation.",
            exit_code=2,
        )


def _load_script(path: Path) -> list:
    if not path.exists():
        raise ConfigurationError(f"Script not found: {path}", context={"path": path})
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Invalid YAML in {path}", context={"path": path}, cause=exc
        ) from exc
    return parse_script(data)


def run_headless(script: Optional[Path]) -> None:
    if script is None:
        raise UIFlowError("--headless requires --script", exit_code=2)
    steps = _load_script(script)
    session = ctx_store.create_session()
    driver = HeadlessWizard(session, table_height=ctx_store.settings.table_height)
    try:
        driver.run_script(steps)
    finally:
        session.close()
    typer.echo(driver.snapshot())


def run_tui() -> None:
    from cg_ui.tui.app import WizardApp

    _require_terminal()
    session = ctx_store.create_session()
    WizardApp(session, table_height=ctx_store.settings.table_height).run()


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Write logs to this file."
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file (regions, table height, default profile).",
    ),
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Replay a scripted session instead of opening the full-screen UI.",
    ),
    script: Optional[Path] = typer.Option(
        None, "--script", help="YAML list of steps for --headless."
    ),
) -> None:
    """Global entry point handling interactive vs headless modes."""
    ctx_store.config_path = config
    ctx_store.headless = headless
    try:
        level = ctx_store.settings.log_level
        # The full-screen UI owns the terminal; logs only go to a file there.
        interactive = ctx.invoked_subcommand is None and not headless
        configure_logging(
            level=level,
            debug=debug,
            log_file=str(log_file) if log_file else None,
            stream=not interactive,
            force=True,
        )
        if ctx.invoked_subcommand is not None:
            return
        if headless:
            run_headless(script)
        else:
            run_tui()
    except UIFlowError as exc:
        _fail(exc, exc.exit_code)
    except ConfigurationError as exc:
        _fail(exc, 2)
    except CGError as exc:
        logger.debug("Wizard failed", exc_info=True)
        _fail(exc, 1)


@app.command("providers")
def list_providers() -> None:
    """List providers and the operations they offer."""
    table = Table(
        title=theme.panel_title("Providers"),
        border_style=theme.RICH_BORDER_STYLE,
        header_style=theme.RICH_ACCENT_BOLD,
    )
    for header in ("Provider", "Service", "Category", "Operation"):
        table.add_column(header)
    for ref in ctx_store.registry.refs():
        if not ref.available:
            table.add_row(ref.name, "(Coming Soon)", "", "")
            continue
        for service in ref.services:
            for category in service.visible_categories():
                for operation in category.visible_operations():
                    table.add_row(ref.name, service.name, category.name, operation.name)
    Console().print(table)


@app.command("version")
def version() -> None:
    """Show the installed cloudgate version."""
    try:
        installed = importlib.metadata.version("cloudgate")
    except importlib.metadata.PackageNotFoundError:
        installed = "unknown"
    typer.echo(f"cloudgate {installed}")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
