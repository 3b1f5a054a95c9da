from __future__ import annotations

from typing import Protocol, Sequence

from cg_core.catalog import ProviderRef
from cg_core.models import ApprovalItem, FunctionStatus, Locator, PipelineStatus


class ProviderSession(Protocol):
    """Live handle bound to one locator; owned by the branch that opened it."""

    def list_pending_approvals(self) -> Sequence[ApprovalItem]: ...

    def decide_approval(
        self, item: ApprovalItem, approved: bool, comment: str
    ) -> None: ...

    def list_pipeline_status(self) -> Sequence[PipelineStatus]: ...

    def start_pipeline(self, pipeline_name: str, revision: str | None = None) -> None: ...

    def list_functions(self) -> Sequence[FunctionStatus]: ...


class CloudProvider(Protocol):
    @property
    def ref(self) -> ProviderRef: ...

    def locator_options(self, key: str) -> Sequence[str]: ...

    def open_session(self, locator: Locator) -> ProviderSession: ...


class ProviderDirectory(Protocol):
    """What the state machine needs from the provider registry."""

    def refs(self) -> Sequence[ProviderRef]: ...

    def get(self, provider_id: str) -> CloudProvider: ...
