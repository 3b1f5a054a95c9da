"""Shared error taxonomy for cloudgate."""

from __future__ import annotations

from typing import Any, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class CGError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__


class PreconditionError(CGError):
    """A transition was requested without the selections it depends on.

    This is a programming error: a correct view layer never offers the action.
    """


class ValidationError(CGError):
    """Operator input was rejected (empty manual entry, empty required field)."""


class RemoteError(CGError):
    """A collaborator call (cloud API, session setup) failed."""


class ConfigurationError(CGError):
    """Failure due to invalid configuration."""


class UIFlowError(RuntimeError):
    """Typed error for UI flow failures that should be handled by CLI."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def error_to_payload(error: CGError) -> dict[str, Any]:
    """Convert a CGError to a log/event payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
