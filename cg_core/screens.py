"""The finite set of wizard screens and their static ordering."""

from __future__ import annotations

from enum import Enum


class ScreenId(str, Enum):
    CHOOSE_PROVIDER = "choose-provider"
    CHOOSE_LOCATOR = "choose-locator"
    CHOOSE_SERVICE = "choose-service"
    CHOOSE_CATEGORY = "choose-category"
    CHOOSE_OPERATION = "choose-operation"
    CHOOSE_TARGET = "choose-target"
    VIEW_DETAILS = "view-details"
    CONFIRM_ACTION = "confirm-action"
    ENTER_COMMENT = "enter-comment"
    EXECUTING = "executing"
    ERROR = "error"


INITIAL_SCREEN = ScreenId.CHOOSE_PROVIDER

# ENTER_COMMENT falls back to CHOOSE_TARGET outside the approval flow; see parent_of.
PARENTS: dict[ScreenId, ScreenId] = {
    ScreenId.CHOOSE_LOCATOR: ScreenId.CHOOSE_PROVIDER,
    ScreenId.CHOOSE_SERVICE: ScreenId.CHOOSE_LOCATOR,
    ScreenId.CHOOSE_CATEGORY: ScreenId.CHOOSE_SERVICE,
    ScreenId.CHOOSE_OPERATION: ScreenId.CHOOSE_CATEGORY,
    ScreenId.CHOOSE_TARGET: ScreenId.CHOOSE_OPERATION,
    ScreenId.VIEW_DETAILS: ScreenId.CHOOSE_TARGET,
    ScreenId.CONFIRM_ACTION: ScreenId.CHOOSE_TARGET,
    ScreenId.ENTER_COMMENT: ScreenId.CONFIRM_ACTION,
    ScreenId.EXECUTING: ScreenId.ENTER_COMMENT,
}

MANUAL_ENTRY_SCREENS: frozenset[ScreenId] = frozenset(
    {ScreenId.CHOOSE_LOCATOR, ScreenId.ENTER_COMMENT}
)

TITLES: dict[ScreenId, str] = {
    ScreenId.CHOOSE_PROVIDER: "Select Cloud Provider",
    ScreenId.CHOOSE_LOCATOR: "Provider Configuration",
    ScreenId.CHOOSE_SERVICE: "Select Service",
    ScreenId.CHOOSE_CATEGORY: "Select Category",
    ScreenId.CHOOSE_OPERATION: "Select Operation",
    ScreenId.CHOOSE_TARGET: "Select Resource",
    ScreenId.VIEW_DETAILS: "Details",
    ScreenId.CONFIRM_ACTION: "Execute Action",
    ScreenId.ENTER_COMMENT: "Enter Comment",
    ScreenId.EXECUTING: "Execute Action",
    ScreenId.ERROR: "Error",
}


def supports_manual_entry(screen: ScreenId) -> bool:
    return screen in MANUAL_ENTRY_SCREENS


def parent_of(screen: ScreenId, *, approval_flow: bool = True) -> ScreenId | None:
    """Screen reached by backing out of ``screen``; None for the initial screen."""
    if screen is ScreenId.ENTER_COMMENT and not approval_flow:
        return ScreenId.CHOOSE_TARGET
    return PARENTS.get(screen)
