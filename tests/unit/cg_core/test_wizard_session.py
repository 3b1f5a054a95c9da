"""Tests for the session loop glue."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

import pytest

from cg_core.messages import Cancel, Confirm, Quit
from cg_core.screens import ScreenId
from cg_core.session import WizardSession
from cg_core.tasks import ThreadedTaskRunner
from tests.helpers.driving import TO_APPROVAL_OPERATIONS, TO_WORKFLOWS, move_to, pick, walk
from tests.helpers.fakes import (
    APPROVAL,
    DeferredRunner,
    FakeProvider,
    FakeSession,
    build_directory,
)


pytestmark = pytest.mark.unit_core


def test_post_wakes_the_loop(directory) -> None:
    wakeups = []
    runner = DeferredRunner()
    session = WizardSession(directory)
    walk(session, *TO_WORKFLOWS)
    session.runner = runner
    session.set_wakeup(lambda: wakeups.append(1))
    session.dispatch(Confirm())
    runner.complete()
    assert wakeups == [1]
    assert session.state.busy
    assert session.process_pending() == 1
    assert session.state.screen is ScreenId.CHOOSE_TARGET


def test_threaded_session_reaches_target(directory) -> None:
    session = WizardSession(directory, ThreadedTaskRunner())
    try:
        walk(session, "AWS", "default", "us-east-1")
        session.wait_idle(5)
        assert session.state.screen is ScreenId.CHOOSE_SERVICE
    finally:
        session.close()


def test_quit_requested_property(directory) -> None:
    session = WizardSession(directory)
    assert not session.quit_requested
    session.dispatch(Quit())
    assert session.quit_requested


@dataclass
class GatedSession(FakeSession):
    """Holds the first approvals fetch until ``gate`` is set."""

    gate: threading.Event = field(default_factory=threading.Event)
    fetches: int = 0

    def list_pending_approvals(self):
        self.fetches += 1
        if self.fetches == 1:
            self.gate.wait(10)
        return super().list_pending_approvals()


def _walk_and_settle(session: WizardSession, *steps: str) -> None:
    for label in steps:
        pick(session, label)
        session.wait_idle(5)


def test_retry_after_cancel_is_not_held_by_abandoned_fetch() -> None:
    provider = FakeProvider(session=GatedSession())
    session = WizardSession(build_directory(provider), ThreadedTaskRunner())
    try:
        _walk_and_settle(session, *TO_APPROVAL_OPERATIONS)
        move_to(session, "Manual Approval")
        session.dispatch(Confirm())
        assert session.state.busy

        state = session.dispatch(Cancel())
        assert not state.busy
        assert state.screen is ScreenId.CHOOSE_OPERATION
        assert session.current_task is None

        session.dispatch(Confirm())
        state = session.wait_idle(5)
        assert state.screen is ScreenId.CHOOSE_TARGET
        assert state.selection.collection == (APPROVAL,)
        assert provider.session.fetches == 2
    finally:
        provider.session.gate.set()
        session.close()


def test_wait_idle_returns_at_once_after_abandon(directory) -> None:
    runner = DeferredRunner()
    session = WizardSession(directory, runner)
    walk(session, *TO_WORKFLOWS[:2])
    pick(session, "us-east-1")
    assert session.state.busy
    session.dispatch(Cancel())
    assert session.current_task is None
    assert session.wait_idle(0).screen is ScreenId.CHOOSE_LOCATOR
    assert len(runner.pending) == 1
