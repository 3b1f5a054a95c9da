"""Tests for the non-interactive approvals commands."""

from __future__ import annotations

import importlib

import pytest
from typer.testing import CliRunner

from cg_common.errors import UIFlowError
from cg_common.settings import CloudgateSettings
from cg_ui.cli.commands.approvals import find_approval
from tests.helpers.fakes import APPROVAL


pytestmark = pytest.mark.unit_ui

runner = CliRunner()
cli_main = importlib.import_module("cg_ui.cli.main")

LOCATOR_ARGS = ["--profile", "prod", "--region", "eu-west-1"]


@pytest.fixture
def wired(monkeypatch: pytest.MonkeyPatch, directory) -> None:
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kw: None)
    monkeypatch.setattr(cli_main.ctx_store, "_settings", CloudgateSettings())
    monkeypatch.setattr(cli_main.ctx_store, "_registry", directory)
    monkeypatch.setattr(cli_main.ctx_store, "config_path", None)
    monkeypatch.setattr(cli_main.ctx_store, "headless", False)


def test_list_shows_pending_approvals(wired, provider) -> None:
    result = runner.invoke(cli_main.app, ["approvals", "list", *LOCATOR_ARGS])
    assert result.exit_code == 0, result.output
    assert "Pending Approvals" in result.output
    assert "pipe1" in result.output
    assert "tok-1" in result.output
    assert provider.opened == [(("profile", "prod"), ("region", "eu-west-1"))]


def test_list_without_approvals(wired, provider) -> None:
    provider.session.approvals = []
    result = runner.invoke(cli_main.app, ["approvals", "list", *LOCATOR_ARGS])
    assert result.exit_code == 0, result.output
    assert "No pending approvals found" in result.output


def test_list_requires_profile_and_region(wired) -> None:
    result = runner.invoke(cli_main.app, ["approvals", "list", "--profile", "prod"])
    assert result.exit_code == 2


def test_approve_sends_summary(wired, provider) -> None:
    result = runner.invoke(
        cli_main.app,
        ["approvals", "approve", "pipe1", "Approve", "Gate", *LOCATOR_ARGS, "-s", "ship it"],
    )
    assert result.exit_code == 0, result.output
    assert provider.session.calls[-1] == ("decide_approval", (APPROVAL, True, "ship it"))
    assert "Successfully approved pipeline: pipe1" in result.output


def test_reject_sends_decision(wired, provider) -> None:
    result = runner.invoke(
        cli_main.app,
        ["approvals", "reject", "pipe1", "Approve", "Gate", *LOCATOR_ARGS],
    )
    assert result.exit_code == 0, result.output
    assert provider.session.calls[-1] == ("decide_approval", (APPROVAL, False, ""))
    assert "Successfully rejected pipeline: pipe1" in result.output


def test_unknown_approval_is_reported(wired, provider) -> None:
    result = runner.invoke(
        cli_main.app,
        ["approvals", "approve", "pipe1", "Approve", "Other", *LOCATOR_ARGS],
    )
    assert result.exit_code == 1
    assert "No pending approval found" in result.output
    assert all(name != "decide_approval" for name, _ in provider.session.calls)


def test_remote_failure_exits_with_error(wired, provider) -> None:
    provider.open_error = "The config profile (prod) could not be found"
    result = runner.invoke(cli_main.app, ["approvals", "list", *LOCATOR_ARGS])
    assert result.exit_code == 1
    assert "could not be found" in result.output


def test_find_approval_matches_all_three_names() -> None:
    assert find_approval([APPROVAL], "pipe1", "Approve", "Gate") is APPROVAL
    with pytest.raises(UIFlowError):
        find_approval([APPROVAL], "pipe1", "Deploy", "Gate")
