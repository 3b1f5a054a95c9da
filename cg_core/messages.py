"""Input events and task result messages consumed by the update loop.

Both families travel on the same sequential stream. Task results form a closed
set of tagged variants; each carries the id of the task that produced it so a
result arriving after its task was abandoned can be recognised and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cg_core.models import ApprovalItem, FunctionStatus, PipelineStatus
from cg_core.protocols import ProviderSession


# -- input events --------------------------------------------------------


@dataclass(frozen=True)
class NavigateUp:
    pass


@dataclass(frozen=True)
class NavigateDown:
    pass


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class ToggleMode:
    pass


@dataclass(frozen=True)
class Character:
    char: str


@dataclass(frozen=True)
class Erase:
    pass


@dataclass(frozen=True)
class Quit:
    pass


InputEvent = Union[
    NavigateUp, NavigateDown, Confirm, Cancel, ToggleMode, Character, Erase, Quit
]


# -- task results --------------------------------------------------------


@dataclass(frozen=True)
class SessionOpened:
    task_id: int
    key: str
    value: str
    session: ProviderSession


@dataclass(frozen=True)
class ApprovalsFetched:
    task_id: int
    items: tuple[ApprovalItem, ...]


@dataclass(frozen=True)
class StatusFetched:
    task_id: int
    items: tuple[PipelineStatus, ...]


@dataclass(frozen=True)
class FunctionsFetched:
    task_id: int
    items: tuple[FunctionStatus, ...]


@dataclass(frozen=True)
class ActionCompleted:
    task_id: int
    summary: str


@dataclass(frozen=True)
class TaskFailed:
    task_id: int
    error: str
    error_type: str = "RemoteError"


TaskMessage = Union[
    SessionOpened,
    ApprovalsFetched,
    StatusFetched,
    FunctionsFetched,
    ActionCompleted,
    TaskFailed,
]

TASK_MESSAGE_TYPES = (
    SessionOpened,
    ApprovalsFetched,
    StatusFetched,
    FunctionsFetched,
    ActionCompleted,
    TaskFailed,
)

Event = Union[InputEvent, TaskMessage]
