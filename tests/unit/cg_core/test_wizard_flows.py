"""End-to-end walks through the wizard against in-memory collaborators."""

from __future__ import annotations

import pytest

from cg_core.catalog import OperationKind
from cg_core.messages import Cancel, Confirm, ToggleMode
from cg_core.models import ApprovalDecision
from cg_core.navigation import APPROVED_MESSAGE, REJECTED_MESSAGE
from cg_core.screens import ScreenId
from cg_core.session import WizardSession
from cg_core.state import InputMode
from cg_providers.aws.catalog import MANUAL_APPROVAL, START_PIPELINE
from tests.helpers.driving import (
    TO_APPROVAL_OPERATIONS,
    TO_WORKFLOWS,
    labels,
    pick,
    type_in,
    walk,
)
from tests.helpers.fakes import APPROVAL, FUNCTION, PIPELINE


pytestmark = pytest.mark.unit_core


@pytest.fixture
def session(directory) -> WizardSession:
    return WizardSession(directory)


def test_approve_pending_action(session, provider) -> None:
    walk(session, *TO_APPROVAL_OPERATIONS)
    state = pick(session, "Manual Approval")
    assert state.screen is ScreenId.CHOOSE_TARGET
    assert state.selection.collection == (APPROVAL,)

    state = pick(session, "pipe1 / Approve / Gate")
    assert state.screen is ScreenId.CONFIRM_ACTION
    state = pick(session, "Approve")
    assert state.screen is ScreenId.ENTER_COMMENT
    assert state.selection.action is ApprovalDecision.APPROVE

    state = type_in(session, "looks good")
    assert state.screen is ScreenId.EXECUTING
    assert state.selection.text == "looks good"

    state = pick(session, "Execute")
    assert provider.session.calls[-1] == ("decide_approval", (APPROVAL, True, "looks good"))
    assert state.screen is ScreenId.CHOOSE_OPERATION
    assert state.selection.operation == MANUAL_APPROVAL
    assert state.selection.target is None
    assert state.selection.collection is None
    assert state.banner == APPROVED_MESSAGE % ("pipe1", "Approve", "Gate")
    assert not state.busy


def test_reject_pending_action(session, provider) -> None:
    walk(session, *TO_APPROVAL_OPERATIONS, "Manual Approval", "pipe1 / Approve / Gate")
    pick(session, "Reject")
    type_in(session, "not yet")
    state = pick(session, "Execute")
    assert provider.session.calls[-1] == ("decide_approval", (APPROVAL, False, "not yet"))
    assert state.banner == REJECTED_MESSAGE % ("pipe1", "Approve", "Gate")


def test_session_opens_with_both_locator_values(session, provider) -> None:
    state = walk(session, "AWS", "default")
    assert state.screen is ScreenId.CHOOSE_LOCATOR
    assert state.selection.locator == (("profile", "default"),)
    assert labels(session) == ["Manual Entry", "us-east-1", "eu-west-1"]

    state = pick(session, "eu-west-1")
    assert state.screen is ScreenId.CHOOSE_SERVICE
    assert provider.opened == [(("profile", "default"), ("region", "eu-west-1"))]
    assert state.selection.locator == (("profile", "default"), ("region", "eu-west-1"))
    assert state.selection.session is provider.session


def test_empty_manual_entry_changes_nothing(session) -> None:
    walk(session, "AWS")
    before = session.state
    session.dispatch(ToggleMode())
    assert session.state.input_mode is InputMode.MANUAL
    session.dispatch(Confirm())
    assert session.state == before


def test_failed_fetch_keeps_operation_and_returns_to_it(session, provider) -> None:
    provider.session.errors["list_pending_approvals"] = "access denied"
    walk(session, *TO_APPROVAL_OPERATIONS)
    state = pick(session, "Manual Approval")
    assert state.screen is ScreenId.ERROR
    assert state.error == "access denied"
    assert state.error_type == "RemoteError"
    assert state.selection.operation == MANUAL_APPROVAL

    state = session.dispatch(Cancel())
    assert state.screen is ScreenId.CHOOSE_OPERATION
    assert state.error is None
    assert state.selection.operation == MANUAL_APPROVAL
    assert state.selection.collection is None
    assert labels(session)[state.cursor] == "Manual Approval"


def test_failed_session_returns_to_last_locator_field(session, provider) -> None:
    provider.open_error = "The config profile (prod) could not be found"
    walk(session, "AWS", "prod")
    state = pick(session, "eu-west-1")
    assert state.screen is ScreenId.ERROR
    assert state.selection.locator == (("profile", "prod"),)

    state = session.dispatch(Cancel())
    assert state.screen is ScreenId.CHOOSE_LOCATOR
    assert state.current_locator_field.key == "region"
    assert labels(session)[state.cursor] == "eu-west-1"


def test_start_pipeline_with_latest_commit(session, provider) -> None:
    walk(session, *TO_WORKFLOWS)
    state = pick(session, "Start Pipeline")
    assert state.screen is ScreenId.CHOOSE_TARGET
    assert state.operation_kind is OperationKind.START_PIPELINE

    state = pick(session, "pipe1")
    assert state.screen is ScreenId.ENTER_COMMENT
    assert labels(session) == ["Manual Entry", "Latest Commit"]

    state = pick(session, "Latest Commit")
    assert state.screen is ScreenId.EXECUTING
    assert state.selection.text == ""

    state = pick(session, "Execute")
    assert provider.session.calls[-1] == ("start_pipeline", ("pipe1", None))
    assert state.selection.operation == START_PIPELINE
    assert state.banner == "Successfully started pipeline: pipe1"


def test_start_pipeline_with_typed_revision(session, provider) -> None:
    walk(session, *TO_WORKFLOWS, "Start Pipeline", "pipe1")
    type_in(session, "abc123")
    pick(session, "Execute")
    assert provider.session.calls[-1] == ("start_pipeline", ("pipe1", "abc123"))


def test_pipeline_status_shows_stage_details(session) -> None:
    walk(session, *TO_WORKFLOWS, "Pipeline Status")
    state = pick(session, "pipe1")
    assert state.screen is ScreenId.VIEW_DETAILS
    assert state.selection.target == PIPELINE

    state = session.dispatch(Cancel())
    assert state.screen is ScreenId.CHOOSE_TARGET
    assert state.selection.target is None


def test_function_status_walk(session) -> None:
    walk(session, "AWS", "default", "us-east-1", "Lambda", "Workflows")
    state = pick(session, "Function Status")
    assert state.selection.collection == (FUNCTION,)
    state = pick(session, "handler-fn")
    assert state.screen is ScreenId.VIEW_DETAILS


def test_cancel_on_executing_returns_to_operations(session, provider) -> None:
    walk(session, *TO_APPROVAL_OPERATIONS, "Manual Approval", "pipe1 / Approve / Gate", "Approve")
    type_in(session, "ok")
    state = pick(session, "Cancel")
    assert state.screen is ScreenId.CHOOSE_OPERATION
    assert state.selection.target is None
    assert all(name != "decide_approval" for name, _ in provider.session.calls)


def test_empty_approval_comment_is_refused(session) -> None:
    walk(session, *TO_APPROVAL_OPERATIONS, "Manual Approval", "pipe1 / Approve / Gate", "Approve")
    state = type_in(session, "   ")
    assert state.screen is ScreenId.ENTER_COMMENT
    assert state.notice == "Comment cannot be empty"
    assert state.input_mode is InputMode.SELECT


def test_hidden_category_is_not_offered(session) -> None:
    walk(session, "AWS", "default", "us-east-1", "CodePipeline")
    assert labels(session) == ["Workflows", "Operations"]


def test_unavailable_provider_shows_notice(session) -> None:
    state = pick(session, "Azure (Coming Soon)")
    assert state.screen is ScreenId.CHOOSE_PROVIDER
    assert state.notice == "Azure support is coming soon"
    assert state.selection.provider is None


def test_typed_profile_is_accepted(session) -> None:
    walk(session, "AWS")
    state = type_in(session, "  staging  ")
    assert state.selection.locator == (("profile", "staging"),)


def test_failed_approval_keeps_inputs_for_retry(session, provider) -> None:
    provider.session.errors["decide_approval"] = "throttled"
    walk(session, *TO_APPROVAL_OPERATIONS, "Manual Approval", "pipe1 / Approve / Gate", "Approve")
    type_in(session, "looks good")
    state = pick(session, "Execute")
    assert state.screen is ScreenId.ERROR
    assert state.error == "throttled"
    assert not state.busy

    state = session.dispatch(Cancel())
    assert state.screen is ScreenId.EXECUTING
    assert state.selection.target == APPROVAL
    assert state.selection.action is ApprovalDecision.APPROVE
    assert state.selection.text == "looks good"

    del provider.session.errors["decide_approval"]
    state = pick(session, "Execute")
    assert provider.session.calls[-1] == ("decide_approval", (APPROVAL, True, "looks good"))
    assert state.banner == APPROVED_MESSAGE % ("pipe1", "Approve", "Gate")


def test_failed_pipeline_start_returns_to_executing(session, provider) -> None:
    provider.session.errors["start_pipeline"] = "pipeline is disabled"
    walk(session, *TO_WORKFLOWS, "Start Pipeline", "pipe1")
    type_in(session, "abc123")
    state = pick(session, "Execute")
    assert state.screen is ScreenId.ERROR
    assert state.selection.operation == START_PIPELINE

    state = session.dispatch(Cancel())
    assert state.screen is ScreenId.EXECUTING
    assert state.selection.target == PIPELINE
    assert state.selection.text == "abc123"
