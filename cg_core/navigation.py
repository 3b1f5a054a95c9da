"""Navigation controller: forward and backward transitions between screens.

``advance`` confirms a value on the current screen and either enters the next
screen or starts the task whose result will. ``retreat`` moves to the parent
screen and truncates the selection to what existed when that screen was shown.
Both are pure; I/O happens only inside the returned ``TaskSpec``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable

from cg_common.errors import PreconditionError, ValidationError
from cg_core.catalog import (
    CategoryRef,
    OperationKind,
    OperationRef,
    ProviderRef,
    ServiceRef,
)
from cg_core.messages import (
    ActionCompleted,
    ApprovalsFetched,
    FunctionsFetched,
    SessionOpened,
    StatusFetched,
    TaskMessage,
)
from cg_core.models import (
    ApprovalDecision,
    ApprovalItem,
    ExecuteChoice,
    FunctionStatus,
    PipelineStatus,
)
from cg_core.presentation import choices, index_of
from cg_core.protocols import ProviderDirectory, ProviderSession
from cg_core.screens import INITIAL_SCREEN, ScreenId, parent_of
from cg_core.selection import Depth, SelectionState
from cg_core.state import InputMode, Transition, WizardState
from cg_core.tasks import TaskSpec

logger = logging.getLogger(__name__)

APPROVED_MESSAGE = "Successfully approved pipeline: %s, stage: %s, action: %s"
REJECTED_MESSAGE = "Successfully rejected pipeline: %s, stage: %s, action: %s"
STARTED_MESSAGE = "Successfully started pipeline: %s"
EMPTY_COMMENT_MESSAGE = "Comment cannot be empty"

_TARGET_TYPES = {
    OperationKind.MANUAL_APPROVAL: ApprovalItem,
    OperationKind.PIPELINE_STATUS: PipelineStatus,
    OperationKind.START_PIPELINE: PipelineStatus,
    OperationKind.FUNCTION_STATUS: FunctionStatus,
}


# -- helpers -------------------------------------------------------------


def enter(
    state: WizardState,
    screen: ScreenId,
    selection: SelectionState,
    *,
    cursor: int = 0,
    **changes: Any,
) -> WizardState:
    """Show ``screen`` with a fresh input mode, buffer, cursor and notice."""
    return replace(
        state,
        screen=screen,
        selection=selection,
        input_mode=InputMode.SELECT,
        buffer="",
        cursor=cursor,
        notice=None,
        banner=None,
        **changes,
    )


def enter_with_cursor(
    state: WizardState, screen: ScreenId, selection: SelectionState, value: Any
) -> WizardState:
    """Enter ``screen`` with the cursor resting on ``value``."""
    entered = enter(state, screen, selection)
    return replace(entered, cursor=index_of(screen, entered, value))


def _start(
    state: WizardState,
    label: str,
    busy_message: str,
    build: Callable[[int], Callable[[], TaskMessage]],
) -> Transition:
    task_id = state.next_task_id
    spec = TaskSpec(task_id, label, busy_message, build(task_id))
    busy = replace(
        state,
        pending_task_id=task_id,
        next_task_id=task_id + 1,
        busy_message=busy_message,
        return_screen=state.screen,
        return_cursor=state.cursor,
        input_mode=InputMode.SELECT,
        buffer="",
        notice=None,
        banner=None,
    )
    logger.debug("Task %s (%s) launched from %s", task_id, label, state.screen.value)
    return Transition(busy, spec)


def _expect(value: Any, expected: type | tuple[type, ...], state: WizardState) -> Any:
    if not isinstance(value, expected):
        raise PreconditionError(
            f"Unexpected value for screen '{state.screen.value}'",
            context={"value": value, "screen": state.screen.value},
        )
    return value


def _require(value: Any, name: str, state: WizardState) -> Any:
    if value is None:
        raise PreconditionError(
            f"Missing required selection: {name}",
            context={"screen": state.screen.value},
        )
    return value


def _member(value: Any, options: tuple[Any, ...] | list[Any], state: WizardState) -> Any:
    if value not in options:
        raise PreconditionError(
            f"Value is not offered on screen '{state.screen.value}'",
            context={"value": value, "screen": state.screen.value},
        )
    return value


def _session(state: WizardState) -> ProviderSession:
    return _require(state.selection.session, "session", state)


# -- forward edges -------------------------------------------------------


def _advance_provider(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    provider = _member(_expect(value, ProviderRef, state), state.providers, state)
    if not provider.available:
        return Transition(replace(state, notice=f"{provider.name} support is coming soon"))
    live = directory.get(provider.id)
    options = tuple(
        (locator_field.key, tuple(live.locator_options(locator_field.key)))
        for locator_field in provider.locator_fields
    )
    selection = state.selection.with_provider(provider)
    return Transition(
        enter(state, ScreenId.CHOOSE_LOCATOR, selection, locator_options=options)
    )


def _advance_locator(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    provider = _require(state.selection.provider, "provider", state)
    locator_field = _require(state.current_locator_field, "locator field", state)
    text = _expect(value, str, state).strip()
    if not text:
        raise ValidationError(f"{locator_field.label} cannot be empty")

    if provider.field_index(locator_field.key) < len(provider.locator_fields) - 1:
        selection = state.selection.with_locator_value(locator_field.key, text)
        return Transition(enter(state, ScreenId.CHOOSE_LOCATOR, selection))

    # The last field is committed only once the session actually opens.
    locator = state.selection.locator + ((locator_field.key, text),)
    live = directory.get(provider.id)

    def build(task_id: int) -> Callable[[], TaskMessage]:
        def work() -> TaskMessage:
            return SessionOpened(task_id, locator_field.key, text, live.open_session(locator))

        return work

    return _start(
        state, f"open-session:{provider.id}", f"Connecting to {provider.name}...", build
    )


def _advance_service(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    provider = _require(state.selection.provider, "provider", state)
    _session(state)
    service = _member(_expect(value, ServiceRef, state), provider.services, state)
    if not service.available:
        return Transition(replace(state, notice=f"{service.name} support is coming soon"))
    selection = state.selection.with_service(service)
    return Transition(enter(state, ScreenId.CHOOSE_CATEGORY, selection))


def _advance_category(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    service = _require(state.selection.service, "service", state)
    category = _member(
        _expect(value, CategoryRef, state), service.visible_categories(), state
    )
    selection = state.selection.with_category(category)
    return Transition(enter(state, ScreenId.CHOOSE_OPERATION, selection))


def _fetch_work(
    kind: OperationKind, session: ProviderSession
) -> Callable[[int], Callable[[], TaskMessage]]:
    def build(task_id: int) -> Callable[[], TaskMessage]:
        def work() -> TaskMessage:
            if kind is OperationKind.MANUAL_APPROVAL:
                return ApprovalsFetched(task_id, tuple(session.list_pending_approvals()))
            if kind is OperationKind.FUNCTION_STATUS:
                return FunctionsFetched(task_id, tuple(session.list_functions()))
            return StatusFetched(task_id, tuple(session.list_pipeline_status()))

        return work

    return build


def _advance_operation(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    category = _require(state.selection.category, "category", state)
    operation = _member(
        _expect(value, OperationRef, state), category.visible_operations(), state
    )
    session = _session(state)
    # Committed before the fetch; a failed fetch returns here with it selected.
    committed = replace(state, selection=state.selection.with_operation(operation))
    return _start(
        committed,
        f"fetch:{operation.kind.value}",
        operation.kind.loading_message,
        _fetch_work(operation.kind, session),
    )


def _advance_target(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    operation = _require(state.selection.operation, "operation", state)
    collection = _require(state.selection.collection, "collection", state)
    item = _member(_expect(value, _TARGET_TYPES[operation.kind], state), collection, state)
    selection = state.selection.with_target(item)
    if operation.kind is OperationKind.MANUAL_APPROVAL:
        return Transition(enter(state, ScreenId.CONFIRM_ACTION, selection))
    if operation.kind is OperationKind.START_PIPELINE:
        return Transition(enter(state, ScreenId.ENTER_COMMENT, selection))
    return Transition(enter(state, ScreenId.VIEW_DETAILS, selection))


def _advance_details(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    raise PreconditionError("Details are read-only; there is nothing to confirm")


def _advance_confirm(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    _require(state.selection.target, "target", state)
    decision = _expect(value, ApprovalDecision, state)
    selection = state.selection.with_action(decision)
    return Transition(enter(state, ScreenId.ENTER_COMMENT, selection))


def _advance_comment(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    operation = _require(state.selection.operation, "operation", state)
    _require(state.selection.target, "target", state)
    text = _expect(value, str, state).strip()
    if operation.kind is OperationKind.MANUAL_APPROVAL:
        _require(state.selection.action, "action", state)
        if not text:
            raise ValidationError(EMPTY_COMMENT_MESSAGE)
    selection = state.selection.with_text(text)
    return Transition(enter(state, ScreenId.EXECUTING, selection))


def _mutation_work(
    selection: SelectionState, session: ProviderSession
) -> tuple[str, str, Callable[[int], Callable[[], TaskMessage]]]:
    target = selection.target
    text = selection.text or ""
    if isinstance(target, ApprovalItem):
        decision = selection.action
        approved = decision.approved
        template = APPROVED_MESSAGE if approved else REJECTED_MESSAGE
        summary = template % (target.pipeline_name, target.stage_name, target.action_name)

        def build_decision(task_id: int) -> Callable[[], TaskMessage]:
            def work() -> TaskMessage:
                session.decide_approval(target, approved, text)
                return ActionCompleted(task_id, summary)

            return work

        return "decide-approval", "Executing approval action...", build_decision

    pipeline_name = target.name
    revision = text or None

    def build_start(task_id: int) -> Callable[[], TaskMessage]:
        def work() -> TaskMessage:
            session.start_pipeline(pipeline_name, revision)
            return ActionCompleted(task_id, STARTED_MESSAGE % pipeline_name)

        return work

    return "start-pipeline", "Starting pipeline...", build_start


def back_to_operations(state: WizardState) -> WizardState:
    """Return to choose-operation with target-level state and the collection cleared."""
    operation = _require(state.selection.operation, "operation", state)
    selection = state.selection.with_operation(operation)
    entered = enter(state, ScreenId.CHOOSE_OPERATION, selection)
    return replace(entered, cursor=index_of(ScreenId.CHOOSE_OPERATION, entered, operation))


def _advance_executing(
    state: WizardState, value: Any, directory: ProviderDirectory
) -> Transition:
    choice = _expect(value, ExecuteChoice, state)
    if choice is ExecuteChoice.CANCEL:
        return Transition(back_to_operations(state))
    selection = state.selection
    _require(selection.target, "target", state)
    _require(selection.text, "text", state)
    label, busy_message, build = _mutation_work(selection, _session(state))
    return _start(state, label, busy_message, build)


_ADVANCE: dict[ScreenId, Callable[[WizardState, Any, ProviderDirectory], Transition]] = {
    ScreenId.CHOOSE_PROVIDER: _advance_provider,
    ScreenId.CHOOSE_LOCATOR: _advance_locator,
    ScreenId.CHOOSE_SERVICE: _advance_service,
    ScreenId.CHOOSE_CATEGORY: _advance_category,
    ScreenId.CHOOSE_OPERATION: _advance_operation,
    ScreenId.CHOOSE_TARGET: _advance_target,
    ScreenId.VIEW_DETAILS: _advance_details,
    ScreenId.CONFIRM_ACTION: _advance_confirm,
    ScreenId.ENTER_COMMENT: _advance_comment,
    ScreenId.EXECUTING: _advance_executing,
}


def advance(state: WizardState, value: Any, directory: ProviderDirectory) -> Transition:
    """Confirm ``value`` on the current screen.

    Raises:
        PreconditionError: a task is pending, the screen has no forward edge,
            a required selection is missing, or ``value`` is not offered here.
        ValidationError: ``value`` is empty where a non-empty value is required.
    """
    if state.busy:
        raise PreconditionError(
            "Cannot advance while a task is pending",
            context={"screen": state.screen.value, "task_id": state.pending_task_id},
        )
    handler = _ADVANCE.get(state.screen)
    if handler is None:
        raise PreconditionError(
            f"Screen '{state.screen.value}' has no forward transition",
            context={"screen": state.screen.value},
        )
    return handler(state, value, directory)


# -- backward edges ------------------------------------------------------


def abandon(state: WizardState) -> WizardState:
    """Forget the pending task; its late result is dropped by id."""
    logger.info("Abandoning task %s", state.pending_task_id)
    return replace(
        state,
        pending_task_id=None,
        busy_message="",
        return_screen=None,
        return_cursor=0,
        notice="Cancelled",
    )


def _retreat_from_error(state: WizardState) -> WizardState:
    screen = state.return_screen or INITIAL_SCREEN
    restored = enter(state, screen, state.selection, error=None, error_type=None)
    limit = max(len(choices(screen, restored)) - 1, 0)
    return replace(
        restored,
        cursor=min(state.return_cursor, limit),
        return_screen=None,
        return_cursor=0,
    )


def _retreat_from_comment(state: WizardState) -> WizardState:
    selection = state.selection
    approval = state.operation_kind is OperationKind.MANUAL_APPROVAL
    if parent_of(ScreenId.ENTER_COMMENT, approval_flow=approval) is ScreenId.CONFIRM_ACTION:
        return enter_with_cursor(
            state, ScreenId.CONFIRM_ACTION, selection.truncate(Depth.ACTION), selection.action
        )
    return enter_with_cursor(
        state, ScreenId.CHOOSE_TARGET, selection.truncate(Depth.TARGET), selection.target
    )


def _retreat_from_executing(state: WizardState) -> WizardState:
    text = state.selection.text or ""
    restored = enter(state, ScreenId.ENTER_COMMENT, state.selection.truncate(Depth.TEXT))
    if text:
        return replace(restored, input_mode=InputMode.MANUAL, buffer=text)
    return replace(
        restored, cursor=index_of(ScreenId.ENTER_COMMENT, restored, "")
    )


def retreat(state: WizardState) -> WizardState:
    """Move to the parent screen. Total; a no-op on the initial screen."""
    if state.busy:
        return abandon(state)

    selection = state.selection
    screen = state.screen
    if screen is ScreenId.ERROR:
        return _retreat_from_error(state)
    if screen is INITIAL_SCREEN:
        return state
    if screen is ScreenId.CHOOSE_LOCATOR:
        if selection.locator:
            _, value = selection.locator[-1]
            return enter_with_cursor(
                state, ScreenId.CHOOSE_LOCATOR, selection.without_last_locator_value(), value
            )
        return enter_with_cursor(
            replace(state, locator_options=()),
            ScreenId.CHOOSE_PROVIDER,
            selection.truncate(Depth.PROVIDER),
            selection.provider,
        )
    if screen is ScreenId.CHOOSE_SERVICE:
        _, value = selection.locator[-1]
        return enter_with_cursor(
            state, ScreenId.CHOOSE_LOCATOR, selection.without_last_locator_value(), value
        )
    if screen is ScreenId.CHOOSE_CATEGORY:
        return enter_with_cursor(
            state, ScreenId.CHOOSE_SERVICE, selection.truncate(Depth.SERVICE), selection.service
        )
    if screen is ScreenId.CHOOSE_OPERATION:
        return enter_with_cursor(
            state,
            ScreenId.CHOOSE_CATEGORY,
            selection.truncate(Depth.CATEGORY),
            selection.category,
        )
    if screen is ScreenId.CHOOSE_TARGET:
        return enter_with_cursor(
            state,
            ScreenId.CHOOSE_OPERATION,
            selection.truncate(Depth.OPERATION),
            selection.operation,
        )
    if screen in (ScreenId.VIEW_DETAILS, ScreenId.CONFIRM_ACTION):
        return enter_with_cursor(
            state, ScreenId.CHOOSE_TARGET, selection.truncate(Depth.TARGET), selection.target
        )
    if screen is ScreenId.ENTER_COMMENT:
        return _retreat_from_comment(state)
    if screen is ScreenId.EXECUTING:
        return _retreat_from_executing(state)
    raise PreconditionError(f"No backward transition from '{screen.value}'")


__all__ = [
    "APPROVED_MESSAGE",
    "EMPTY_COMMENT_MESSAGE",
    "REJECTED_MESSAGE",
    "STARTED_MESSAGE",
    "abandon",
    "advance",
    "back_to_operations",
    "enter",
    "retreat",
]
