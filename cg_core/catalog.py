"""Capability catalog: providers, services, categories and operations.

References are resolved once from the provider registry and carried by value in
the selection state, so later screens never look anything up by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OperationKind(str, Enum):
    MANUAL_APPROVAL = "manual-approval"
    PIPELINE_STATUS = "pipeline-status"
    START_PIPELINE = "start-pipeline"
    FUNCTION_STATUS = "function-status"

    @property
    def loading_message(self) -> str:
        return _LOADING_MESSAGES[self]


_LOADING_MESSAGES = {
    OperationKind.MANUAL_APPROVAL: "Loading approvals...",
    OperationKind.PIPELINE_STATUS: "Loading pipelines...",
    OperationKind.START_PIPELINE: "Loading pipelines...",
    OperationKind.FUNCTION_STATUS: "Loading functions...",
}


@dataclass(frozen=True)
class OperationRef:
    id: str
    name: str
    description: str
    kind: OperationKind
    visible: bool = True


@dataclass(frozen=True)
class CategoryRef:
    id: str
    name: str
    description: str
    operations: tuple[OperationRef, ...] = ()
    visible: bool = True

    def visible_operations(self) -> tuple[OperationRef, ...]:
        return tuple(op for op in self.operations if op.visible)


@dataclass(frozen=True)
class ServiceRef:
    id: str
    name: str
    description: str
    categories: tuple[CategoryRef, ...] = ()
    available: bool = True

    def visible_categories(self) -> tuple[CategoryRef, ...]:
        return tuple(category for category in self.categories if category.visible)


@dataclass(frozen=True)
class LocatorField:
    """One value needed to open a session (e.g. AWS profile, then region)."""

    key: str
    label: str
    placeholder: str = ""


@dataclass(frozen=True)
class ProviderRef:
    id: str
    name: str
    description: str
    locator_fields: tuple[LocatorField, ...] = ()
    services: tuple[ServiceRef, ...] = field(default_factory=tuple)
    available: bool = True

    def field_index(self, key: str) -> int:
        for idx, locator_field in enumerate(self.locator_fields):
            if locator_field.key == key:
                return idx
        raise KeyError(f"Provider '{self.name}' has no locator field '{key}'")
