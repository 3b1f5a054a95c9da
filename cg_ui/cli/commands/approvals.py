from __future__ import annotations

import logging

import structlog
import typer
from rich.console import Console
from rich.table import Table

from cg_common.errors import CGError, UIFlowError, error_to_payload
from cg_core.models import ApprovalItem
from cg_core.navigation import APPROVED_MESSAGE, REJECTED_MESSAGE
from cg_core.protocols import ProviderSession
from cg_providers.aws.catalog import AWS_PROVIDER_ID
from cg_ui.tui import theme
from cg_ui.wiring.dependencies import UIContext

logger = logging.getLogger(__name__)


def find_approval(
    approvals: list[ApprovalItem], pipeline: str, stage: str, action: str
) -> ApprovalItem:
    """Pick the pending approval addressed by pipeline, stage and action names."""
    for item in approvals:
        if (item.pipeline_name, item.stage_name, item.action_name) == (pipeline, stage, action):
            return item
    raise UIFlowError(
        f"No pending approval found for pipeline '{pipeline}' stage '{stage}' "
        f"action '{action}'"
    )


def create_approvals_app(ctx: UIContext) -> typer.Typer:
    """Build the approvals Typer app (list/approve/reject without the wizard)."""
    app = typer.Typer(
        help="List and decide CodePipeline manual approvals non-interactively.",
        no_args_is_help=True,
    )

    def _open(profile: str, region: str) -> ProviderSession:
        provider = ctx.registry.get(AWS_PROVIDER_ID)
        return provider.open_session((("profile", profile), ("region", region)))

    def _fail(exc: Exception, exit_code: int) -> None:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(exit_code)

    def _decide(
        profile: str,
        region: str,
        names: tuple[str, str, str],
        summary: str,
        approved: bool,
    ) -> None:
        try:
            session = _open(profile, region)
            item = find_approval(session.list_pending_approvals(), *names)
            session.decide_approval(item, approved, summary)
        except UIFlowError as exc:
            _fail(exc, exc.exit_code)
        except CGError as exc:
            with structlog.contextvars.bound_contextvars(**error_to_payload(exc)):
                logger.error("Approval decision failed")
            _fail(exc, 1)
        template = APPROVED_MESSAGE if approved else REJECTED_MESSAGE
        Console().print(theme.presenter_message("success", template % names))

    @app.command("list")
    def approvals_list(
        profile: str = typer.Option(..., "--profile", "-p", help="AWS profile to use."),
        region: str = typer.Option(..., "--region", "-r", help="AWS region to use."),
    ) -> None:
        """List pending manual approvals."""
        try:
            approvals = _open(profile, region).list_pending_approvals()
        except CGError as exc:
            with structlog.contextvars.bound_contextvars(**error_to_payload(exc)):
                logger.error("Listing approvals failed")
            _fail(exc, 1)
        if not approvals:
            Console().print(theme.presenter_message("warning", "No pending approvals found"))
            return
        table = Table(
            title=theme.panel_title("Pending Approvals"),
            border_style=theme.RICH_BORDER_STYLE,
            header_style=theme.RICH_ACCENT_BOLD,
        )
        for header in ("Pipeline", "Stage", "Action", "Token"):
            table.add_column(header)
        for item in approvals:
            table.add_row(item.pipeline_name, item.stage_name, item.action_name, item.token)
        Console().print(table)

    @app.command("approve")
    def approvals_approve(
        pipeline: str = typer.Argument(..., help="Pipeline name."),
        stage: str = typer.Argument(..., help="Stage holding the approval action."),
        action: str = typer.Argument(..., help="Approval action name."),
        profile: str = typer.Option(..., "--profile", "-p", help="AWS profile to use."),
        region: str = typer.Option(..., "--region", "-r", help="AWS region to use."),
        summary: str = typer.Option(
            "", "--summary", "-s", help="Summary sent with the decision."
        ),
    ) -> None:
        """Approve a manual approval action."""
        _decide(profile, region, (pipeline, stage, action), summary, True)

    @app.command("reject")
    def approvals_reject(
        pipeline: str = typer.Argument(..., help="Pipeline name."),
        stage: str = typer.Argument(..., help="Stage holding the approval action."),
        action: str = typer.Argument(..., help="Approval action name."),
        profile: str = typer.Option(..., "--profile", "-p", help="AWS profile to use."),
        region: str = typer.Option(..., "--region", "-r", help="AWS region to use."),
        summary: str = typer.Option(
            "", "--summary", "-s", help="Summary sent with the decision."
        ),
    ) -> None:
        """Reject a manual approval action."""
        _decide(profile, region, (pipeline, stage, action), summary, False)

    return app
