"""Helpers that drive a WizardSession through labelled rows."""

from __future__ import annotations

from cg_core.messages import Character, Confirm, NavigateDown, NavigateUp, ToggleMode
from cg_core.presentation import choices
from cg_core.session import WizardSession
from cg_core.state import WizardState


def labels(session: WizardSession) -> list[str]:
    return [entry.label for entry in choices(session.state.screen, session.state)]


def move_to(session: WizardSession, label: str) -> None:
    target = labels(session).index(label)
    while session.state.cursor < target:
        session.dispatch(NavigateDown())
    while session.state.cursor > target:
        session.dispatch(NavigateUp())


def pick(session: WizardSession, label: str) -> WizardState:
    move_to(session, label)
    session.dispatch(Confirm())
    session.process_pending()
    return session.state


def type_in(session: WizardSession, text: str) -> WizardState:
    if not session.state.manual:
        session.dispatch(ToggleMode())
    for char in text:
        session.dispatch(Character(char))
    session.dispatch(Confirm())
    session.process_pending()
    return session.state


def walk(session: WizardSession, *steps: str) -> WizardState:
    for label in steps:
        pick(session, label)
    return session.state


TO_APPROVAL_OPERATIONS = ("AWS", "default", "us-east-1", "CodePipeline", "Operations")
TO_WORKFLOWS = ("AWS", "default", "us-east-1", "CodePipeline", "Workflows")
