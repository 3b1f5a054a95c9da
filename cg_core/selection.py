"""Accumulated choices made while walking the wizard.

``SelectionState`` is immutable: every setter returns a new value. Setting a
value at depth N clears everything deeper, so a path is always a valid prefix
of the screen hierarchy. Resources owned at a depth (the locator-bound session,
the collection fetched for an operation) are released together with it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any

from cg_common.errors import PreconditionError
from cg_core.catalog import CategoryRef, OperationRef, ProviderRef, ServiceRef
from cg_core.models import ApprovalDecision, Locator, RemoteItem
from cg_core.protocols import ProviderSession


class Depth(IntEnum):
    PROVIDER = 0
    LOCATOR = 1
    SERVICE = 2
    CATEGORY = 3
    OPERATION = 4
    TARGET = 5
    ACTION = 6
    TEXT = 7


@dataclass(frozen=True)
class PathEntry:
    depth: Depth
    value: Any


@dataclass(frozen=True)
class SelectionState:
    provider: ProviderRef | None = None
    locator: Locator = ()
    session: ProviderSession | None = None
    service: ServiceRef | None = None
    category: CategoryRef | None = None
    operation: OperationRef | None = None
    collection: tuple[RemoteItem, ...] | None = None
    target: RemoteItem | None = None
    action: ApprovalDecision | None = None
    text: str | None = None

    # -- queries ---------------------------------------------------------

    def path(self) -> tuple[PathEntry, ...]:
        """Return the SelectionPath: chosen values in hierarchy order."""
        entries: list[PathEntry] = []
        if self.provider is not None:
            entries.append(PathEntry(Depth.PROVIDER, self.provider))
        entries.extend(PathEntry(Depth.LOCATOR, value) for _, value in self.locator)
        for depth, value in (
            (Depth.SERVICE, self.service),
            (Depth.CATEGORY, self.category),
            (Depth.OPERATION, self.operation),
            (Depth.TARGET, self.target),
            (Depth.ACTION, self.action),
            (Depth.TEXT, self.text),
        ):
            if value is not None:
                entries.append(PathEntry(depth, value))
        return tuple(entries)

    def locator_value(self, key: str) -> str | None:
        for field_key, value in self.locator:
            if field_key == key:
                return value
        return None

    @property
    def locator_complete(self) -> bool:
        if self.provider is None:
            return False
        return len(self.locator) == len(self.provider.locator_fields)

    # -- truncation ------------------------------------------------------

    def truncate(self, depth: Depth) -> SelectionState:
        """Drop every entry (and owned resource) at ``depth`` or deeper."""
        cleared: dict[str, Any] = {}
        if depth <= Depth.TEXT:
            cleared["text"] = None
        if depth <= Depth.ACTION:
            cleared["action"] = None
        if depth <= Depth.TARGET:
            cleared["target"] = None
        if depth <= Depth.OPERATION:
            cleared["operation"] = None
            cleared["collection"] = None
        if depth <= Depth.CATEGORY:
            cleared["category"] = None
        if depth <= Depth.SERVICE:
            cleared["service"] = None
        if depth <= Depth.LOCATOR:
            cleared["locator"] = ()
            cleared["session"] = None
        if depth <= Depth.PROVIDER:
            cleared["provider"] = None
        return replace(self, **cleared)

    def without_last_locator_value(self) -> SelectionState:
        if not self.locator:
            return self
        trimmed = self.truncate(Depth.SERVICE)
        return replace(trimmed, locator=self.locator[:-1], session=None)

    # -- setters ---------------------------------------------------------

    def with_provider(self, provider: ProviderRef) -> SelectionState:
        return replace(self.truncate(Depth.PROVIDER), provider=provider)

    def with_locator_value(self, key: str, value: str) -> SelectionState:
        provider = self._require(self.provider, "provider")
        index = provider.field_index(key)
        if index > len(self.locator):
            raise PreconditionError(
                f"Locator field '{key}' set before its predecessors",
                context={"locator": dict(self.locator)},
            )
        trimmed = self.truncate(Depth.SERVICE)
        return replace(
            trimmed, locator=self.locator[:index] + ((key, value),), session=None
        )

    def with_session(self, session: ProviderSession) -> SelectionState:
        if not self.locator_complete:
            raise PreconditionError("Session opened before the locator was complete")
        return replace(self.truncate(Depth.SERVICE), session=session)

    def with_service(self, service: ServiceRef) -> SelectionState:
        self._require(self.session, "session")
        return replace(self.truncate(Depth.SERVICE), service=service)

    def with_category(self, category: CategoryRef) -> SelectionState:
        self._require(self.service, "service")
        return replace(self.truncate(Depth.CATEGORY), category=category)

    def with_operation(self, operation: OperationRef) -> SelectionState:
        self._require(self.category, "category")
        return replace(self.truncate(Depth.OPERATION), operation=operation)

    def with_collection(self, items: tuple[RemoteItem, ...]) -> SelectionState:
        self._require(self.operation, "operation")
        return replace(self.truncate(Depth.TARGET), collection=tuple(items))

    def with_target(self, item: RemoteItem) -> SelectionState:
        self._require(self.collection, "collection")
        # Own a copy; never keep a reference into the fetched list.
        return replace(self.truncate(Depth.TARGET), target=replace(item))

    def with_action(self, action: ApprovalDecision) -> SelectionState:
        self._require(self.target, "target")
        return replace(self.truncate(Depth.ACTION), action=action)

    def with_text(self, text: str) -> SelectionState:
        self._require(self.target, "target")
        return replace(self.truncate(Depth.TEXT), text=text)

    @staticmethod
    def _require(value: Any, name: str) -> Any:
        if value is None:
            raise PreconditionError(f"Missing required selection: {name}")
        return value
