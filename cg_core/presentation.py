"""List presentation adapter: turns wizard state into titles, columns and rows.

Pure functions only. On screens that accept typed input, row 0 is always the
"Manual Entry" sentinel so the cursor and the input-mode toggle agree on what
index 0 means.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cg_core.catalog import OperationKind
from cg_core.models import (
    ApprovalDecision,
    ApprovalItem,
    ExecuteChoice,
    FunctionStatus,
    PipelineStatus,
)
from cg_core.screens import TITLES, ScreenId, supports_manual_entry
from cg_core.state import WizardState

MANUAL_ENTRY_LABEL = "Manual Entry"
LATEST_COMMIT_LABEL = "Latest Commit"
COMING_SOON_SUFFIX = " (Coming Soon)"
APP_DESCRIPTION = "A simple tool to manage your cloud resources"


@dataclass(frozen=True)
class Choice:
    label: str
    value: Any = None
    manual: bool = False


@dataclass(frozen=True)
class ColumnSpec:
    header: str
    ratio: int = 1


def _with_suffix(name: str, available: bool) -> str:
    return name if available else f"{name}{COMING_SOON_SUFFIX}"


def _item_choices(state: WizardState) -> list[Choice]:
    items = state.selection.collection or ()
    if state.operation_kind is OperationKind.MANUAL_APPROVAL:
        return [
            Choice(f"{item.pipeline_name} / {item.stage_name} / {item.action_name}", item)
            for item in items
        ]
    return [Choice(item.name, item) for item in items]


def choices(screen: ScreenId, state: WizardState) -> list[Choice]:
    """Selectable entries for ``screen``, in row order."""
    selection = state.selection
    entries: list[Choice] = []
    if supports_manual_entry(screen):
        entries.append(Choice(MANUAL_ENTRY_LABEL, manual=True))

    if screen is ScreenId.CHOOSE_PROVIDER:
        entries.extend(
            Choice(_with_suffix(ref.name, ref.available), ref) for ref in state.providers
        )
    elif screen is ScreenId.CHOOSE_LOCATOR:
        locator_field = state.current_locator_field
        if locator_field is not None:
            entries.extend(
                Choice(option, option) for option in state.options_for(locator_field.key)
            )
    elif screen is ScreenId.CHOOSE_SERVICE and selection.provider is not None:
        entries.extend(
            Choice(_with_suffix(ref.name, ref.available), ref)
            for ref in selection.provider.services
        )
    elif screen is ScreenId.CHOOSE_CATEGORY and selection.service is not None:
        entries.extend(
            Choice(ref.name, ref) for ref in selection.service.visible_categories()
        )
    elif screen is ScreenId.CHOOSE_OPERATION and selection.category is not None:
        entries.extend(
            Choice(ref.name, ref) for ref in selection.category.visible_operations()
        )
    elif screen is ScreenId.CHOOSE_TARGET:
        entries.extend(_item_choices(state))
    elif screen is ScreenId.CONFIRM_ACTION:
        entries.extend(Choice(decision.value, decision) for decision in ApprovalDecision)
    elif screen is ScreenId.ENTER_COMMENT:
        if state.operation_kind is OperationKind.START_PIPELINE:
            entries.append(Choice(LATEST_COMMIT_LABEL, ""))
    elif screen is ScreenId.EXECUTING:
        entries.extend(Choice(choice.value, choice) for choice in ExecuteChoice)
    return entries


def index_of(screen: ScreenId, state: WizardState, value: Any) -> int:
    """Row index holding ``value``, or 0 when it is not listed."""
    for idx, choice in enumerate(choices(screen, state)):
        if not choice.manual and choice.value == value:
            return idx
    return 0


def _target_columns(kind: OperationKind | None) -> list[ColumnSpec]:
    if kind is OperationKind.MANUAL_APPROVAL:
        return [ColumnSpec("Pipeline", 2), ColumnSpec("Stage"), ColumnSpec("Action")]
    if kind is OperationKind.FUNCTION_STATUS:
        return [
            ColumnSpec("Function", 2),
            ColumnSpec("Runtime"),
            ColumnSpec("Memory"),
            ColumnSpec("Last Update", 2),
        ]
    return [ColumnSpec("Pipeline", 2), ColumnSpec("Stages")]


def columns(screen: ScreenId, state: WizardState) -> list[ColumnSpec]:
    if screen in (
        ScreenId.CHOOSE_PROVIDER,
        ScreenId.CHOOSE_SERVICE,
        ScreenId.CHOOSE_CATEGORY,
        ScreenId.CHOOSE_OPERATION,
    ):
        header = {
            ScreenId.CHOOSE_PROVIDER: "Provider",
            ScreenId.CHOOSE_SERVICE: "Service",
            ScreenId.CHOOSE_CATEGORY: "Category",
            ScreenId.CHOOSE_OPERATION: "Operation",
        }[screen]
        return [ColumnSpec(header), ColumnSpec("Description", 2)]
    if screen is ScreenId.CHOOSE_LOCATOR:
        locator_field = state.current_locator_field
        return [ColumnSpec(locator_field.label if locator_field else "Value")]
    if screen is ScreenId.CHOOSE_TARGET:
        return _target_columns(state.operation_kind)
    if screen is ScreenId.VIEW_DETAILS:
        if isinstance(state.selection.target, PipelineStatus):
            return [ColumnSpec("Stage", 2), ColumnSpec("Status"), ColumnSpec("Last Updated", 2)]
        return [ColumnSpec("Field"), ColumnSpec("Value", 3)]
    if screen is ScreenId.CONFIRM_ACTION:
        return [ColumnSpec("Action")]
    if screen is ScreenId.ENTER_COMMENT:
        if state.operation_kind is OperationKind.START_PIPELINE:
            return [ColumnSpec("Revision")]
        return [ColumnSpec("Comment")]
    if screen is ScreenId.EXECUTING:
        return [ColumnSpec("Action")]
    return []


def _described_rows(state: WizardState, screen: ScreenId) -> list[list[str]]:
    return [
        [choice.label, getattr(choice.value, "description", "")]
        for choice in choices(screen, state)
    ]


def _target_row(item: Any) -> list[str]:
    if isinstance(item, ApprovalItem):
        return [item.pipeline_name, item.stage_name, item.action_name]
    if isinstance(item, PipelineStatus):
        count = len(item.stages)
        return [item.name, f"{count} stage" if count == 1 else f"{count} stages"]
    if isinstance(item, FunctionStatus):
        return [item.name, item.runtime, f"{item.memory} MB", item.last_update]
    return [str(item)]


def _detail_rows(target: Any) -> list[list[str]]:
    if isinstance(target, PipelineStatus):
        return [[stage.name, stage.status, stage.last_updated] for stage in target.stages]
    if isinstance(target, FunctionStatus):
        return [
            ["Name", target.name],
            ["Runtime", target.runtime],
            ["Handler", target.handler],
            ["Memory", f"{target.memory} MB"],
            ["Timeout", f"{target.timeout} s"],
            ["Last Update", target.last_update],
            ["Description", target.description],
        ]
    return []


def rows(screen: ScreenId, state: WizardState) -> list[list[str]]:
    if screen in (
        ScreenId.CHOOSE_PROVIDER,
        ScreenId.CHOOSE_SERVICE,
        ScreenId.CHOOSE_CATEGORY,
        ScreenId.CHOOSE_OPERATION,
    ):
        return _described_rows(state, screen)
    if screen is ScreenId.CHOOSE_TARGET:
        return [_target_row(choice.value) for choice in choices(screen, state)]
    if screen is ScreenId.VIEW_DETAILS:
        return _detail_rows(state.selection.target)
    return [[choice.label] for choice in choices(screen, state)]


_TARGET_TITLES = {
    OperationKind.MANUAL_APPROVAL: "Pipeline Approvals",
    OperationKind.PIPELINE_STATUS: "Pipeline Status",
    OperationKind.START_PIPELINE: "Select Pipeline",
    OperationKind.FUNCTION_STATUS: "Lambda Functions",
}


def title(state: WizardState) -> str:
    screen = state.screen
    if screen is ScreenId.CHOOSE_LOCATOR:
        locator_field = state.current_locator_field
        if locator_field is not None:
            return f"Select {locator_field.label}"
    if screen is ScreenId.CHOOSE_SERVICE and state.selection.provider is not None:
        return f"Select {state.selection.provider.name} Service"
    if screen is ScreenId.CHOOSE_TARGET and state.operation_kind is not None:
        return _TARGET_TITLES[state.operation_kind]
    if screen is ScreenId.VIEW_DETAILS:
        if isinstance(state.selection.target, PipelineStatus):
            return "Pipeline Stages"
        return "Function Details"
    if screen is ScreenId.ENTER_COMMENT:
        if state.operation_kind is OperationKind.START_PIPELINE:
            return "Enter Revision"
    return TITLES[screen]


def _locator_lines(state: WizardState) -> list[str]:
    provider = state.selection.provider
    if provider is None:
        return []
    labels = {f.key: f.label for f in provider.locator_fields}
    return [f"{labels.get(key, key)}: {value}" for key, value in state.selection.locator]


def _target_lines(state: WizardState) -> list[str]:
    target = state.selection.target
    if isinstance(target, ApprovalItem):
        return [
            f"Pipeline: {target.pipeline_name}",
            f"Stage: {target.stage_name}",
            f"Action: {target.action_name}",
        ]
    if target is None:
        return []
    return _locator_lines(state) + [f"Pipeline: {target.name}"]


def context_lines(state: WizardState) -> list[str]:
    """Breadcrumb-style context shown under the title."""
    selection = state.selection
    screen = state.screen
    if screen is ScreenId.CHOOSE_PROVIDER:
        return [APP_DESCRIPTION]
    if screen is ScreenId.CHOOSE_LOCATOR:
        lines = _locator_lines(state)
        if lines:
            return lines
        return [selection.provider.description] if selection.provider else []
    if screen is ScreenId.CHOOSE_SERVICE:
        return _locator_lines(state)
    if screen is ScreenId.CHOOSE_CATEGORY and selection.service is not None:
        return [f"Service: {selection.service.name}"]
    if screen is ScreenId.CHOOSE_OPERATION and selection.service and selection.category:
        return [
            f"Service: {selection.service.name}",
            f"Category: {selection.category.name}",
        ]
    if screen is ScreenId.CHOOSE_TARGET:
        return _locator_lines(state)
    if screen is ScreenId.VIEW_DETAILS:
        if isinstance(selection.target, FunctionStatus):
            return _locator_lines(state) + [f"Function: {selection.target.name}"]
        return _target_lines(state)
    if screen in (ScreenId.CONFIRM_ACTION, ScreenId.ENTER_COMMENT):
        return _target_lines(state)
    if screen is ScreenId.EXECUTING:
        lines = _target_lines(state)
        if state.operation_kind is OperationKind.START_PIPELINE:
            lines.append(f"RevisionID: {selection.text or 'Latest commit'}")
        else:
            decision = selection.action.value if selection.action else ""
            lines.append(f"Decision: {decision}")
            lines.append(f"Comment: {selection.text or ''}")
        return lines
    return []


def input_placeholder(state: WizardState) -> str:
    if state.screen is ScreenId.CHOOSE_LOCATOR:
        locator_field = state.current_locator_field
        return locator_field.placeholder if locator_field else ""
    if state.screen is ScreenId.ENTER_COMMENT:
        if state.operation_kind is OperationKind.START_PIPELINE:
            return "Enter commit ID..."
        if state.selection.action is ApprovalDecision.REJECT:
            return "Enter rejection comment..."
        return "Enter approval comment..."
    return ""


def help_text(state: WizardState) -> str:
    if state.screen is ScreenId.ERROR:
        return "q: quit • -: back"
    if state.busy:
        return "esc: cancel • ctrl+c: quit"
    if state.manual:
        return "enter: confirm • esc: cancel • ctrl+c: quit"
    if state.screen is ScreenId.CHOOSE_PROVIDER:
        return "↑/↓: navigate • enter: select • q: quit"
    if supports_manual_entry(state.screen):
        return "↑/↓: navigate • enter: select • tab: toggle input • esc: back • q: quit"
    if state.screen is ScreenId.VIEW_DETAILS:
        return "esc: back • q: quit"
    return "↑/↓: navigate • enter: select • esc: back • q: quit"
