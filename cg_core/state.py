"""The wizard's complete state as one immutable value."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from cg_core.catalog import LocatorField, OperationKind, ProviderRef
from cg_core.screens import INITIAL_SCREEN, ScreenId
from cg_core.selection import SelectionState
from cg_core.tasks import TaskSpec


class InputMode(str, Enum):
    SELECT = "select"
    MANUAL = "manual"


@dataclass(frozen=True)
class WizardState:
    providers: tuple[ProviderRef, ...] = ()
    screen: ScreenId = INITIAL_SCREEN
    selection: SelectionState = field(default_factory=SelectionState)
    # Options for every locator field, fetched when the provider is confirmed.
    locator_options: tuple[tuple[str, tuple[str, ...]], ...] = ()
    input_mode: InputMode = InputMode.SELECT
    buffer: str = ""
    cursor: int = 0
    pending_task_id: int | None = None
    next_task_id: int = 1
    busy_message: str = ""
    error: str | None = None
    error_type: str | None = None
    return_screen: ScreenId | None = None
    return_cursor: int = 0
    notice: str | None = None
    banner: str | None = None
    quit_requested: bool = False

    @property
    def busy(self) -> bool:
        return self.pending_task_id is not None

    @property
    def manual(self) -> bool:
        return self.input_mode is InputMode.MANUAL

    @property
    def operation_kind(self) -> OperationKind | None:
        operation = self.selection.operation
        return operation.kind if operation is not None else None

    @property
    def current_locator_field(self) -> LocatorField | None:
        """The locator field the operator is being asked for, if any."""
        provider = self.selection.provider
        if provider is None:
            return None
        filled = len(self.selection.locator)
        if filled >= len(provider.locator_fields):
            return None
        return provider.locator_fields[filled]

    def options_for(self, key: str) -> tuple[str, ...]:
        for field_key, options in self.locator_options:
            if field_key == key:
                return options
        return ()


@dataclass(frozen=True)
class Transition:
    """Result of one step: the next state plus, optionally, work to start."""

    state: WizardState
    task: TaskSpec | None = None


def initial_state(providers: Sequence[ProviderRef]) -> WizardState:
    return WizardState(providers=tuple(providers))
