"""Records fetched from collaborators, plus the fixed choices offered on action screens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class ApprovalItem:
    pipeline_name: str
    stage_name: str
    action_name: str
    token: str


@dataclass(frozen=True)
class StageStatus:
    name: str
    status: str = "Unknown"
    last_updated: str = "N/A"


@dataclass(frozen=True)
class PipelineStatus:
    name: str
    stages: tuple[StageStatus, ...] = ()


@dataclass(frozen=True)
class FunctionStatus:
    name: str
    runtime: str = ""
    memory: int = 0
    timeout: int = 0
    last_update: str = ""
    handler: str = ""
    description: str = ""


RemoteItem = Union[ApprovalItem, PipelineStatus, FunctionStatus]


class ApprovalDecision(str, Enum):
    APPROVE = "Approve"
    REJECT = "Reject"

    @property
    def approved(self) -> bool:
        return self is ApprovalDecision.APPROVE


class ExecuteChoice(str, Enum):
    EXECUTE = "Execute"
    CANCEL = "Cancel"


Locator = tuple[tuple[str, str], ...]
