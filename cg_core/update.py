"""Single entry point mapping input events and task results to transitions."""

from __future__ import annotations

import logging
from dataclasses import replace

from cg_common.errors import ValidationError
from cg_core import input_mode
from cg_core.messages import (
    TASK_MESSAGE_TYPES,
    ActionCompleted,
    ApprovalsFetched,
    Cancel,
    Character,
    Confirm,
    Erase,
    Event,
    FunctionsFetched,
    InputEvent,
    NavigateDown,
    NavigateUp,
    Quit,
    SessionOpened,
    StatusFetched,
    TaskFailed,
    TaskMessage,
    ToggleMode,
)
from cg_core.navigation import advance, back_to_operations, enter, retreat
from cg_core.presentation import choices
from cg_core.protocols import ProviderDirectory
from cg_core.screens import ScreenId
from cg_core.state import Transition, WizardState

logger = logging.getLogger(__name__)


def receive(state: WizardState, message: TaskMessage) -> WizardState:
    """Fold a task result into the state.

    Results for any task other than the pending one are stale (the task was
    abandoned) and are discarded.
    """
    if message.task_id != state.pending_task_id:
        logger.info("Discarding result of abandoned task %s", message.task_id)
        return state

    done = replace(state, pending_task_id=None, busy_message="")
    if isinstance(message, TaskFailed):
        logger.warning("Task %s failed: %s", message.task_id, message.error)
        return enter(
            done,
            ScreenId.ERROR,
            done.selection,
            error=message.error,
            error_type=message.error_type,
        )

    done = replace(done, return_screen=None, return_cursor=0)
    selection = done.selection
    if isinstance(message, SessionOpened):
        selection = selection.with_locator_value(message.key, message.value)
        selection = selection.with_session(message.session)
        return enter(done, ScreenId.CHOOSE_SERVICE, selection)
    if isinstance(message, (ApprovalsFetched, StatusFetched, FunctionsFetched)):
        logger.debug("Fetched %d item(s)", len(message.items))
        return enter(done, ScreenId.CHOOSE_TARGET, selection.with_collection(message.items))
    if isinstance(message, ActionCompleted):
        logger.info("%s", message.summary)
        return replace(back_to_operations(done), banner=message.summary)
    raise TypeError(f"Unknown task message: {message!r}")


def _move(state: WizardState, delta: int) -> WizardState:
    if state.manual:
        return state
    count = len(choices(state.screen, state))
    if count == 0:
        return state
    cursor = min(max(state.cursor + delta, 0), count - 1)
    return replace(state, cursor=cursor)


def _confirm(state: WizardState, directory: ProviderDirectory) -> Transition:
    if state.manual:
        return input_mode.submit(state, directory)
    entries = choices(state.screen, state)
    if not entries:
        return Transition(state)
    choice = entries[min(state.cursor, len(entries) - 1)]
    if choice.manual:
        return Transition(input_mode.toggle(state))
    return advance(state, choice.value, directory)


def _handle_input(
    state: WizardState, event: InputEvent, directory: ProviderDirectory
) -> Transition:
    if isinstance(event, NavigateUp):
        return Transition(_move(state, -1))
    if isinstance(event, NavigateDown):
        return Transition(_move(state, 1))
    if isinstance(event, ToggleMode):
        return Transition(input_mode.toggle(state))
    if isinstance(event, Character):
        return Transition(input_mode.type_char(state, event.char))
    if isinstance(event, Erase):
        return Transition(input_mode.erase(state))
    if isinstance(event, Confirm):
        return _confirm(state, directory)
    raise TypeError(f"Unknown input event: {event!r}")


def update(state: WizardState, event: Event, directory: ProviderDirectory) -> Transition:
    if isinstance(event, TASK_MESSAGE_TYPES):
        return Transition(receive(state, event))
    if isinstance(event, Quit):
        return Transition(replace(state, quit_requested=True))
    if isinstance(event, Cancel):
        if state.manual and not state.busy:
            return Transition(input_mode.leave_manual(state))
        return Transition(retreat(state))
    # Busy and error screens only honour cancel and quit; the rest is dropped.
    if state.busy or state.screen is ScreenId.ERROR:
        return Transition(state)
    try:
        return _handle_input(state, event, directory)
    except ValidationError as exc:
        logger.info("Input refused on %s: %s", state.screen.value, exc)
        return Transition(replace(state, notice=str(exc)))
