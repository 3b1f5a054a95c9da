"""Input mode controller: choose-from-list versus type-a-value.

A submitted buffer goes through exactly the same ``advance`` call a list pick
of the same string would, so nothing downstream knows where a value came from.
"""

from __future__ import annotations

from dataclasses import replace

from cg_common.errors import ValidationError
from cg_core.catalog import OperationKind
from cg_core.navigation import EMPTY_COMMENT_MESSAGE, advance
from cg_core.protocols import ProviderDirectory
from cg_core.screens import ScreenId, supports_manual_entry
from cg_core.state import InputMode, Transition, WizardState


def toggle(state: WizardState) -> WizardState:
    """Flip between select and manual mode; a no-op on list-only screens."""
    if state.busy or not supports_manual_entry(state.screen):
        return state
    if state.manual:
        return leave_manual(state)
    return replace(state, input_mode=InputMode.MANUAL, buffer="", notice=None)


def leave_manual(state: WizardState, notice: str | None = None) -> WizardState:
    return replace(state, input_mode=InputMode.SELECT, buffer="", notice=notice)


def type_char(state: WizardState, char: str) -> WizardState:
    if not state.manual:
        return state
    return replace(state, buffer=state.buffer + char)


def erase(state: WizardState) -> WizardState:
    if not state.manual or not state.buffer:
        return state
    return replace(state, buffer=state.buffer[:-1])


def _requires_text(state: WizardState) -> bool:
    return (
        state.screen is ScreenId.ENTER_COMMENT
        and state.operation_kind is OperationKind.MANUAL_APPROVAL
    )


def submit(state: WizardState, directory: ProviderDirectory) -> Transition:
    """Confirm the typed buffer as if it had been picked from the list.

    An empty buffer leaves manual mode without a transition. Where a value is
    mandatory (approval comments) the refusal is reported as a notice.
    """
    if not state.manual:
        return Transition(state)
    value = state.buffer.strip()
    if not value:
        notice = None
        if _requires_text(state):
            notice = str(ValidationError(EMPTY_COMMENT_MESSAGE))
        return Transition(leave_manual(state, notice))
    return advance(state, value, directory)
