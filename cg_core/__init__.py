"""Wizard state machine: screens, selection, navigation and tasks.

Everything here is pure or thread-agnostic; terminal I/O lives in ``cg_ui`` and
cloud calls live in ``cg_providers``.
"""

from cg_core.api import ScreenId, WizardSession, WizardState, advance, retreat

__all__ = ["ScreenId", "WizardSession", "WizardState", "advance", "retreat"]
