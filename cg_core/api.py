"""Stable API surface for the wizard state machine."""

from __future__ import annotations

from cg_core.catalog import (
    CategoryRef,
    LocatorField,
    OperationKind,
    OperationRef,
    ProviderRef,
    ServiceRef,
)
from cg_core.input_mode import erase, submit, toggle, type_char
from cg_core.messages import (
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
from cg_core.models import (
    ApprovalDecision,
    ApprovalItem,
    ExecuteChoice,
    FunctionStatus,
    PipelineStatus,
    RemoteItem,
    StageStatus,
)
from cg_core.navigation import advance, retreat
from cg_core.presentation import (
    MANUAL_ENTRY_LABEL,
    Choice,
    ColumnSpec,
    choices,
    columns,
    context_lines,
    help_text,
    rows,
    title,
)
from cg_core.protocols import CloudProvider, ProviderDirectory, ProviderSession
from cg_core.screens import INITIAL_SCREEN, ScreenId
from cg_core.selection import Depth, SelectionState
from cg_core.session import WizardSession
from cg_core.state import InputMode, Transition, WizardState, initial_state
from cg_core.tasks import (
    Busy,
    Failure,
    InlineTaskRunner,
    Success,
    Task,
    TaskOutcome,
    TaskRunner,
    TaskSpec,
    ThreadedTaskRunner,
)
from cg_core.update import update

__all__ = [
    "ActionCompleted",
    "ApprovalDecision",
    "ApprovalItem",
    "ApprovalsFetched",
    "Busy",
    "Cancel",
    "CategoryRef",
    "Character",
    "Choice",
    "CloudProvider",
    "ColumnSpec",
    "Confirm",
    "Depth",
    "Erase",
    "Event",
    "ExecuteChoice",
    "Failure",
    "FunctionStatus",
    "FunctionsFetched",
    "INITIAL_SCREEN",
    "InlineTaskRunner",
    "InputEvent",
    "InputMode",
    "LocatorField",
    "MANUAL_ENTRY_LABEL",
    "NavigateDown",
    "NavigateUp",
    "OperationKind",
    "OperationRef",
    "PipelineStatus",
    "ProviderDirectory",
    "ProviderRef",
    "ProviderSession",
    "Quit",
    "RemoteItem",
    "ScreenId",
    "SelectionState",
    "ServiceRef",
    "SessionOpened",
    "StageStatus",
    "StatusFetched",
    "Success",
    "Task",
    "TaskFailed",
    "TaskMessage",
    "TaskOutcome",
    "TaskRunner",
    "TaskSpec",
    "ThreadedTaskRunner",
    "ToggleMode",
    "Transition",
    "WizardSession",
    "WizardState",
    "advance",
    "choices",
    "columns",
    "context_lines",
    "erase",
    "help_text",
    "initial_state",
    "retreat",
    "rows",
    "submit",
    "title",
    "toggle",
    "type_char",
    "update",
]
