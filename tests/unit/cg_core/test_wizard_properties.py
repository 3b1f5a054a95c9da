"""Properties that hold across every legal walk of the wizard."""

from __future__ import annotations

import pytest

from cg_core.catalog import OperationKind
from cg_core.messages import Cancel, Confirm, TaskFailed
from cg_core.navigation import advance, retreat
from cg_core.screens import INITIAL_SCREEN, ScreenId, parent_of
from cg_core.session import WizardSession
from cg_core.tasks import Failure, Success
from cg_core.update import receive
from tests.helpers.driving import TO_WORKFLOWS, pick, type_in, walk
from tests.helpers.fakes import DeferredRunner


pytestmark = pytest.mark.unit_core


WALKS = [
    pytest.param(
        ("AWS", "default", "us-east-1", "CodePipeline", "Operations", "Manual Approval",
         "pipe1 / Approve / Gate", "Approve"),
        "ship it",
        id="approval",
    ),
    pytest.param(
        (*TO_WORKFLOWS, "Start Pipeline", "pipe1", "Latest Commit"),
        None,
        id="start-latest",
    ),
    pytest.param(
        (*TO_WORKFLOWS, "Start Pipeline", "pipe1"),
        "abc123",
        id="start-revision",
    ),
    pytest.param((*TO_WORKFLOWS, "Pipeline Status", "pipe1"), None, id="status"),
    pytest.param(
        ("AWS", "prod", "eu-west-1", "Lambda", "Workflows", "Function Status", "handler-fn"),
        None,
        id="functions",
    ),
]


@pytest.mark.parametrize("steps,typed", WALKS)
def test_retreating_once_per_confirm_returns_to_start(directory, steps, typed) -> None:
    session = WizardSession(directory)
    walk(session, *steps)
    confirms = len(steps)
    if typed is not None:
        type_in(session, typed)
        confirms += 1

    state = session.state
    for _ in range(confirms):
        state = retreat(state)
    assert state.screen is INITIAL_SCREEN
    assert state.selection.path() == ()


def test_retreat_on_initial_screen_is_idempotent(directory) -> None:
    state = WizardSession(directory).state
    assert retreat(state) == state
    assert retreat(retreat(state)) == state


@pytest.mark.parametrize(
    "prefix,label,typed",
    [
        (("AWS",), "prod", "prod"),
        (("AWS", "default"), "eu-west-1", "eu-west-1"),
        ((*TO_WORKFLOWS, "Start Pipeline", "pipe1"), None, "deadbeef"),
    ],
)
def test_typed_value_matches_picked_value(directory, prefix, label, typed) -> None:
    picked = WizardSession(directory)
    walk(picked, *prefix)
    typed_session = WizardSession(directory)
    walk(typed_session, *prefix)

    if label is None:
        expected = advance(picked.state, typed, directory).state
    else:
        pick(picked, label)
        expected = picked.state
    assert type_in(typed_session, typed) == expected


def test_changing_service_clears_deeper_selections(directory) -> None:
    session = WizardSession(directory)
    state = walk(session, *TO_WORKFLOWS, "Pipeline Status")
    assert state.selection.collection is not None
    for _ in range(3):
        state = session.dispatch(Cancel())
    assert state.screen is ScreenId.CHOOSE_SERVICE

    state = pick(session, "Lambda")
    assert state.selection.service.name == "Lambda"
    assert state.selection.category is None
    assert state.selection.operation is None
    assert state.selection.collection is None
    assert state.selection.target is None


def test_each_task_resolves_exactly_once(directory, provider) -> None:
    runner = DeferredRunner()
    session = WizardSession(directory)
    walk(session, *TO_WORKFLOWS)
    session.runner = runner
    session.dispatch(Confirm())
    task = runner.complete()
    assert isinstance(task.outcome, Success)
    assert task.resolve(TaskFailed(task.task_id, "late")) is False
    assert isinstance(task.outcome, Success)
    assert session.process_pending() == 1

    provider.session.errors["list_pipeline_status"] = "throttled"
    session.dispatch(Cancel())
    pick(session, "Pipeline Status")
    failed = runner.complete()
    assert failed.outcome == Failure("throttled", "RemoteError")
    session.process_pending()
    assert receive(session.state, TaskFailed(failed.task_id, "again")) == session.state


@pytest.mark.parametrize("steps,typed", WALKS)
def test_retreat_lands_on_parent_screen(directory, steps, typed) -> None:
    session = WizardSession(directory)
    for label in steps:
        pick(session, label)
        state = session.state
        if state.screen is ScreenId.CHOOSE_LOCATOR and state.selection.locator:
            continue
        approval = state.operation_kind is OperationKind.MANUAL_APPROVAL
        assert retreat(state).screen is parent_of(state.screen, approval_flow=approval)
